"""Record store facade for BorrowerDesk.

Exposes the bulk list and mutation operations the borrower listing
consumes. Every call returns a Result; store exceptions are converted to
failure results here and never reach the views.
"""
import logging
from typing import Mapping, Optional

from ..database import DatabaseManager
from ..exceptions import (BorrowerDeskError, BorrowerNotFoundError, CustomerNotFoundError,
                          ValidationError)
from ..result import Result, ErrorType
from .borrower_validation import validate_borrower_form

logger = logging.getLogger(__name__)


def _error_type(exc: BorrowerDeskError) -> str:
    if isinstance(exc, (BorrowerNotFoundError, CustomerNotFoundError)):
        return ErrorType.NOT_FOUND
    if isinstance(exc, ValidationError):
        return ErrorType.VALIDATION
    return ErrorType.DATABASE


class RecordStore:
    """Borrower/customer list and mutation operations over a DatabaseManager.

    Attributes:
        db: DatabaseManager used for every call.
    """

    def __init__(self, db_manager: DatabaseManager):
        self.db = db_manager

    @classmethod
    def open(cls, db_path: str) -> 'RecordStore':
        """Create a store with its own connection to ``db_path``."""
        return cls(DatabaseManager(db_path))

    def close(self):
        self.db.close()

    def _call(self, action: str, fn, *args, **kwargs) -> Result:
        try:
            return Result.ok(fn(*args, **kwargs))
        except BorrowerDeskError as e:
            logger.warning("%s failed: %s", action, e)
            return Result.fail(e.message, _error_type(e))

    def list_borrowers(self, query: Optional[Mapping] = None) -> Result:
        """Fetch borrower records.

        Args:
            query: Optional mapping with ``search`` and ``filter`` keys.
        """
        query = query or {}
        return self._call("List borrowers", self.db.get_borrowers,
                          search=query.get("search"), filter=query.get("filter"))

    def list_customers(self, query: Optional[Mapping] = None) -> Result:
        query = query or {}
        return self._call("List customers", self.db.get_customers, search=query.get("search"))

    def create_borrower(self, fields: Mapping) -> Result:
        errors = validate_borrower_form(fields)
        if errors:
            return self._reject(errors)
        return self._call(
            "Create borrower", self.db.add_borrower,
            str(fields["customer_id"]).strip(), str(fields["full_name"]).strip(),
            str(fields["contact_no"]).strip(), str(fields["address"]).strip(),
            str(fields.get("email") or "").strip())

    def update_borrower(self, borrower_id: int, fields: Mapping) -> Result:
        errors = validate_borrower_form(fields)
        if errors:
            return self._reject(errors)
        return self._call(
            "Update borrower", self.db.update_borrower, borrower_id,
            str(fields["customer_id"]).strip(), str(fields["full_name"]).strip(),
            str(fields["contact_no"]).strip(), str(fields["address"]).strip(),
            str(fields.get("email") or "").strip())

    def delete_borrower(self, borrower_id: int) -> Result:
        return self._call("Delete borrower", self.db.delete_borrower, borrower_id)

    def _reject(self, errors) -> Result:
        exc = ValidationError(errors)
        logger.warning("Rejected borrower submission: %s", exc)
        return Result.fail(exc.message, ErrorType.VALIDATION)
