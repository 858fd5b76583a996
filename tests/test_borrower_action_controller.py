"""Tests for the Add/Edit/Delete borrower flow."""
import unittest
from unittest.mock import Mock, patch

from borrowerdesk.borrower_action_controller import BorrowerActionController
from borrowerdesk.data_structures import BorrowerFormData
from borrowerdesk.result import Result, ErrorType
from helpers import make_borrower

FORM = BorrowerFormData(customer_id="C1", full_name="Asha Verma", contact_no="9876543210",
                        address="12 Market Road")


def dialog_class(accepted=True, data=FORM):
    dialog = Mock()
    dialog.exec.return_value = accepted
    dialog.get_data.return_value = data
    return Mock(return_value=dialog)


class TestBorrowerActionController(unittest.TestCase):

    def setUp(self):
        self.store = Mock()
        self.notify = Mock()
        self.refresh = Mock()
        self.customers = ["customer"]
        self.controller = BorrowerActionController(
            self.store, None, notify=self.notify, on_refresh=self.refresh,
            customers_getter=lambda: self.customers)

    def test_add_success_refetches(self):
        self.store.create_borrower.return_value = Result.ok(7)
        dialog = dialog_class()
        self.assertTrue(self.controller.add_borrower(dialog))
        dialog.assert_called_once_with(None, customers=self.customers)
        self.store.create_borrower.assert_called_once_with(FORM.as_dict())
        self.notify.assert_called_once_with("Borrower added successfully", "success")
        self.refresh.assert_called_once_with()

    def test_add_cancelled(self):
        self.assertFalse(self.controller.add_borrower(dialog_class(accepted=False)))
        self.store.create_borrower.assert_not_called()
        self.refresh.assert_not_called()

    def test_add_failure_uses_store_message(self):
        self.store.create_borrower.return_value = Result.fail("Customer 'C1' not found", ErrorType.NOT_FOUND)
        self.assertFalse(self.controller.add_borrower(dialog_class()))
        self.notify.assert_called_once_with("Customer 'C1' not found", "error")
        self.refresh.assert_not_called()

    def test_add_failure_fallback_message(self):
        self.store.create_borrower.return_value = Result.fail(None)
        self.controller.add_borrower(dialog_class())
        self.notify.assert_called_once_with("Failed to save borrower", "error")

    def test_edit_success(self):
        borrower = make_borrower(3, "C1")
        self.store.update_borrower.return_value = Result.ok()
        dialog = dialog_class()
        self.assertTrue(self.controller.edit_borrower(borrower, dialog))
        dialog.assert_called_once_with(None, customers=self.customers, borrower=borrower)
        self.store.update_borrower.assert_called_once_with(3, FORM.as_dict())
        self.notify.assert_called_once_with("Borrower updated successfully", "success")
        self.refresh.assert_called_once_with()

    @patch("borrowerdesk.borrower_action_controller.QMessageBox")
    def test_edit_without_selection(self, mock_box):
        self.assertFalse(self.controller.edit_borrower(None, dialog_class()))
        mock_box.warning.assert_called_once()
        self.store.update_borrower.assert_not_called()

    @patch("borrowerdesk.borrower_action_controller.QMessageBox")
    def test_delete_confirmed(self, mock_box):
        mock_box.question.return_value = mock_box.StandardButton.Yes
        self.store.delete_borrower.return_value = Result.ok()
        borrower = make_borrower(5, "C2", name="Bala Iyer")

        self.assertTrue(self.controller.delete_borrower(borrower))
        prompt = mock_box.question.call_args[0][2]
        self.assertEqual(prompt, "Are you sure you want to delete Bala Iyer?")
        self.store.delete_borrower.assert_called_once_with(5)
        self.notify.assert_called_once_with("Borrower deleted successfully", "success")
        self.refresh.assert_called_once_with()

    @patch("borrowerdesk.borrower_action_controller.QMessageBox")
    def test_delete_declined(self, mock_box):
        mock_box.question.return_value = mock_box.StandardButton.No
        self.assertFalse(self.controller.delete_borrower(make_borrower(5, "C2")))
        self.store.delete_borrower.assert_not_called()

    @patch("borrowerdesk.borrower_action_controller.QMessageBox")
    def test_delete_failure(self, mock_box):
        mock_box.question.return_value = mock_box.StandardButton.Yes
        self.store.delete_borrower.return_value = Result.fail("Borrower with ID 5 not found")
        self.assertFalse(self.controller.delete_borrower(make_borrower(5, "C2")))
        self.notify.assert_called_once_with("Borrower with ID 5 not found", "error")
        self.refresh.assert_not_called()


if __name__ == "__main__":
    unittest.main()
