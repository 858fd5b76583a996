import os
import sqlite3
import tempfile
import unittest

from borrowerdesk.database import DatabaseManager
from borrowerdesk.exceptions import DatabaseError
from borrowerdesk.result import ErrorType
from borrowerdesk.services.record_store import RecordStore


def borrower_fields(**overrides):
    fields = {
        "customer_id": "CUST001",
        "full_name": "Asha Verma",
        "contact_no": "9876543210",
        "address": "12 Market Road",
        "email": "",
    }
    fields.update(overrides)
    return fields


class TestRecordStore(unittest.TestCase):

    def setUp(self):
        self.store = RecordStore(DatabaseManager(":memory:"))
        self.store.db.add_customer("CUST001", "Asha Verma", "9876543210")

    def tearDown(self):
        self.store.close()

    def test_create_and_list(self):
        result = self.store.create_borrower(borrower_fields(full_name="  Asha Verma  "))
        self.assertTrue(result.success)
        listed = self.store.list_borrowers()
        self.assertTrue(listed)
        self.assertEqual(listed.data[0]["full_name"], "Asha Verma")
        self.assertEqual(listed.data[0]["ref_no"], "BRW-0001")

    def test_list_with_query(self):
        self.store.create_borrower(borrower_fields())
        self.assertEqual(self.store.list_borrowers({"filter": "repeat_customers"}).data, [])
        self.store.create_borrower(borrower_fields())
        self.assertEqual(len(self.store.list_borrowers({"filter": "repeat_customers"}).data), 2)
        self.assertEqual(self.store.list_borrowers({"search": "nobody"}).data, [])

    def test_list_customers(self):
        result = self.store.list_customers()
        self.assertTrue(result.success)
        self.assertEqual(result.data[0]["customer_id"], "CUST001")

    def test_invalid_submission_is_rejected(self):
        result = self.store.create_borrower(borrower_fields(contact_no="123"))
        self.assertFalse(result.success)
        self.assertEqual(result.error_type, ErrorType.VALIDATION)
        self.assertIn("contact_no", result.message)
        self.assertEqual(self.store.list_borrowers().data, [])

    def test_unknown_customer(self):
        result = self.store.create_borrower(borrower_fields(customer_id="CUST404"))
        self.assertFalse(result.success)
        self.assertEqual(result.error_type, ErrorType.NOT_FOUND)
        self.assertEqual(result.message, "Customer 'CUST404' not found")

    def test_update_and_delete_missing(self):
        update = self.store.update_borrower(99, borrower_fields())
        self.assertEqual(update.error_type, ErrorType.NOT_FOUND)
        delete = self.store.delete_borrower(99)
        self.assertFalse(delete)
        self.assertEqual(delete.message, "Borrower with ID 99 not found")

    def test_update_and_delete(self):
        borrower_id = self.store.create_borrower(borrower_fields()).data
        self.assertTrue(self.store.update_borrower(borrower_id, borrower_fields(address="New Road")))
        self.assertEqual(self.store.list_borrowers().data[0]["address"], "New Road")
        self.assertTrue(self.store.delete_borrower(borrower_id))
        self.assertEqual(self.store.list_borrowers().data, [])

    def test_closed_connection_reports_database_error(self):
        self.store.close()
        result = self.store.list_borrowers()
        self.assertFalse(result.success)
        self.assertEqual(result.error_type, ErrorType.DATABASE)


class TestRecordStoreDatabaseFailures(unittest.TestCase):
    """Store failures must come back as results, never as sqlite3 errors."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.db_path = os.path.join(self.tmpdir.name, "borrowers.db")
        self.store = RecordStore(DatabaseManager(self.db_path, timeout=0.1))
        self.store.db.add_customer("CUST001", "Asha Verma", "9876543210")
        self.borrower_id = self.store.create_borrower(borrower_fields()).data

    def tearDown(self):
        self.store.close()
        self.tmpdir.cleanup()

    def test_create_on_locked_database(self):
        other = sqlite3.connect(self.db_path)
        try:
            other.execute("BEGIN EXCLUSIVE")
            result = self.store.create_borrower(borrower_fields())
        finally:
            other.rollback()
            other.close()
        self.assertFalse(result.success)
        self.assertEqual(result.error_type, ErrorType.DATABASE)
        self.assertIn("locked", result.message)

    def test_update_on_closed_database(self):
        self.store.close()
        result = self.store.update_borrower(self.borrower_id, borrower_fields(address="New Road"))
        self.assertFalse(result.success)
        self.assertEqual(result.error_type, ErrorType.DATABASE)

    def test_delete_on_closed_database(self):
        self.store.close()
        result = self.store.delete_borrower(self.borrower_id)
        self.assertFalse(result.success)
        self.assertEqual(result.error_type, ErrorType.DATABASE)

    def test_setting_read_on_closed_database(self):
        self.store.close()
        with self.assertRaises(DatabaseError):
            self.store.db.get_setting("borrowers_page_size")


if __name__ == "__main__":
    unittest.main()
