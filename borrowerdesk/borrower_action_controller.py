"""Borrower Action Controller for BorrowerDesk.

This module provides the controller behind the Add/Edit/Delete actions of
the Borrowers view. Every successful mutation ends with a full refetch;
failures are reported and leave the list untouched.
"""
import logging
from typing import Callable, Optional

from PyQt6.QtWidgets import QMessageBox

from .data_structures import Borrower

logger = logging.getLogger(__name__)

LEVEL_SUCCESS = "success"
LEVEL_ERROR = "error"


class BorrowerActionController:
    """Controller for borrower mutations in the Borrowers view.

    Attributes:
        store: RecordStore used for create/update/delete.
        parent: Parent widget for dialogs and prompts.
        notify: Callback ``(message, level)`` showing a transient notification.
        on_refresh: Callback that invalidates and refetches the snapshot.
        customers_getter: Callable returning the customers of the current snapshot.
    """

    def __init__(self, store, parent_widget,
                 notify: Callable[[str, str], None] = None,
                 on_refresh: Callable[[], None] = None,
                 customers_getter: Callable[[], list] = None):
        self.store = store
        self.parent = parent_widget
        self.notify = notify
        self.on_refresh = on_refresh
        self.customers_getter = customers_getter or (lambda: [])

    def _notify(self, message: str, level: str) -> None:
        if self.notify:
            self.notify(message, level)

    def _after_success(self, message: str) -> None:
        self._notify(message, LEVEL_SUCCESS)
        if self.on_refresh:
            self.on_refresh()

    def _after_failure(self, result, fallback: str) -> None:
        message = result.message or fallback
        logger.error("%s: %s", fallback, message)
        self._notify(message, LEVEL_ERROR)

    def add_borrower(self, dialog_class) -> bool:
        """Add a new borrower.

        Args:
            dialog_class: Dialog class to use for input (BorrowerDialog).

        Returns:
            True if the borrower was added, False otherwise.
        """
        dialog = dialog_class(self.parent, customers=self.customers_getter())
        if not dialog.exec():
            return False
        result = self.store.create_borrower(dialog.get_data().as_dict())
        if result.success:
            self._after_success("Borrower added successfully")
            return True
        self._after_failure(result, "Failed to save borrower")
        return False

    def edit_borrower(self, borrower: Optional[Borrower], dialog_class) -> bool:
        """Edit ``borrower`` through the dialog and submit the update."""
        if borrower is None:
            QMessageBox.warning(self.parent, "No Selection", "Please select a borrower first.")
            return False
        dialog = dialog_class(self.parent, customers=self.customers_getter(), borrower=borrower)
        if not dialog.exec():
            return False
        result = self.store.update_borrower(borrower.borrower_id, dialog.get_data().as_dict())
        if result.success:
            self._after_success("Borrower updated successfully")
            return True
        self._after_failure(result, "Failed to save borrower")
        return False

    def delete_borrower(self, borrower: Optional[Borrower]) -> bool:
        """Delete ``borrower`` after confirmation."""
        if borrower is None:
            QMessageBox.warning(self.parent, "No Selection", "Please select a borrower first.")
            return False
        confirm = QMessageBox.question(
            self.parent, "Confirm Delete",
            f"Are you sure you want to delete {borrower.full_name}?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            QMessageBox.StandardButton.No
        )
        if confirm != QMessageBox.StandardButton.Yes:
            return False
        result = self.store.delete_borrower(borrower.borrower_id)
        if result.success:
            self._after_success("Borrower deleted successfully")
            return True
        self._after_failure(result, "Failed to delete borrower")
        return False
