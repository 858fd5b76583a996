"""Field checks applied before a borrower create/update is submitted."""
import re
from typing import Dict, Mapping

from ..config import CONTACT_NO_PATTERN, EMAIL_NOT_AVAILABLE, EMAIL_PATTERN

CUSTOMER_REQUIRED = "Customer selection is required"
FULL_NAME_REQUIRED = "Full name is required"
CONTACT_REQUIRED = "Contact number is required"
CONTACT_INVALID = "Please enter a valid 10-digit contact number"
ADDRESS_REQUIRED = "Address is required"
EMAIL_INVALID = "Please enter a valid email address"


def _text(fields: Mapping, key: str) -> str:
    value = fields.get(key)
    return "" if value is None else str(value)


def validate_borrower_form(fields: Mapping) -> Dict[str, str]:
    """Validate borrower form fields.

    Args:
        fields: Mapping with customer_id, full_name, contact_no, address, email.

    Returns:
        Field name to error message; empty when the form may be submitted.
    """
    errors = {}

    if not _text(fields, "customer_id").strip():
        errors["customer_id"] = CUSTOMER_REQUIRED

    if not _text(fields, "full_name").strip():
        errors["full_name"] = FULL_NAME_REQUIRED

    contact_no = _text(fields, "contact_no")
    if not contact_no.strip():
        errors["contact_no"] = CONTACT_REQUIRED
    elif not re.fullmatch(CONTACT_NO_PATTERN, contact_no):
        errors["contact_no"] = CONTACT_INVALID

    if not _text(fields, "address").strip():
        errors["address"] = ADDRESS_REQUIRED

    email = _text(fields, "email")
    if email and email != EMAIL_NOT_AVAILABLE and not re.fullmatch(EMAIL_PATTERN, email):
        errors["email"] = EMAIL_INVALID

    return errors
