import os
import tempfile
import unittest

import pandas as pd

from borrowerdesk.data_structures import BorrowerRow, EMPTY_STYLE, ExportOptions
from borrowerdesk.services.borrower_export import export_rows, rows_to_dataframe
from borrowerdesk.services.row_banding import AMBER
from helpers import make_borrower


class TestBorrowerExport(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.rows = [
            BorrowerRow(make_borrower(1, "C1", name="Asha", email="asha@example.com"), AMBER),
            BorrowerRow(make_borrower(2, "C1", name="Asha", email="N/A"), AMBER),
            BorrowerRow(make_borrower(3, "C9", repeat=False, name="Bala"), EMPTY_STYLE),
        ]

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_dataframe_columns(self):
        df = rows_to_dataframe(self.rows)
        self.assertEqual(list(df.columns), list(ExportOptions().columns))
        self.assertEqual(df["Status"].tolist(),
                         ["Repeat Customer (2 borrowers)", "Repeat Customer (2 borrowers)", "New Customer"])
        self.assertEqual(df["Email"].tolist(), ["asha@example.com", "", ""])

    def test_column_subset(self):
        df = rows_to_dataframe(self.rows, ExportOptions(columns=("Ref No", "Full Name")))
        self.assertEqual(df.values.tolist(), [["BRW-0001", "Asha"], ["BRW-0002", "Asha"], ["BRW-0003", "Bala"]])

    def test_csv_export(self):
        path = os.path.join(self.tmpdir.name, "borrowers.csv")
        ok, message = export_rows(self.rows, path)
        self.assertTrue(ok)
        self.assertEqual(message, "Exported 3 borrowers (CSV).")
        df = pd.read_csv(path, dtype=str)
        self.assertEqual(df["Ref No"].tolist(), ["BRW-0001", "BRW-0002", "BRW-0003"])

    def test_excel_export(self):
        path = os.path.join(self.tmpdir.name, "borrowers.xlsx")
        ok, message = export_rows(self.rows, path)
        self.assertTrue(ok, message)
        self.assertEqual(message, "Exported 3 borrowers (Excel).")
        self.assertTrue(os.path.getsize(path) > 0)

    def test_csv_export_failure(self):
        path = os.path.join(self.tmpdir.name, "missing", "borrowers.csv")
        ok, message = export_rows(self.rows, path)
        self.assertFalse(ok)
        self.assertTrue(message.startswith("CSV Export Failed"))


if __name__ == "__main__":
    unittest.main()
