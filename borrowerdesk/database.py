"""Database management module for BorrowerDesk."""
import logging
import sqlite3
import pandas as pd
from datetime import datetime
from contextlib import contextmanager

from .config import (EMAIL_NOT_AVAILABLE, FETCH_LIMIT, REF_NO_PREFIX,
                     REF_NO_WIDTH, REPEAT_FILTER)
from .exceptions import (DatabaseError, TransactionError, BorrowerNotFoundError,
                         CustomerNotFoundError, ValidationError)

logger = logging.getLogger(__name__)

BORROWER_TEXT_COLUMNS = ["customer_id", "ref_no", "full_name", "contact_no", "address", "email"]
CUSTOMER_COLUMNS = ["customer_id", "full_name", "phone", "email", "address"]


class DatabaseManager:
    """Handles all SQLite database operations.

    A connection may only be used from the thread that created it, so
    background loaders open their own DatabaseManager on the same file.
    """

    def __init__(self, db_name="borrowers.db", timeout=5.0):
        self.db_name = db_name
        self._closed = False
        try:
            self.conn = sqlite3.connect(db_name, timeout=timeout)
            self.conn.execute("PRAGMA foreign_keys = ON")
            self.create_tables()
        except sqlite3.Error as e:
            self.close()
            raise DatabaseError(f"Cannot open database: {e}", {'db_name': db_name})

    def close(self):
        """Close the database connection."""
        if getattr(self, 'conn', None) and not self._closed:
            self.conn.close()
            self._closed = True

    def __del__(self):
        """Ensure connection is closed on garbage collection."""
        self.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    @contextmanager
    def transaction(self):
        """Context manager for database transactions with automatic rollback on failure.

        Usage:
            with db.transaction():
                db.conn.execute(...)

        If any exception occurs, the transaction is rolled back.
        """
        try:
            yield
            self.conn.commit()
        except sqlite3.Error as e:
            self._rollback()
            raise TransactionError(f"Transaction failed: {str(e)}", {'db_name': self.db_name})
        except Exception:
            self._rollback()
            raise

    def _rollback(self):
        try:
            self.conn.rollback()
        except sqlite3.Error as e:
            # Closed or broken connection
            logger.warning("Rollback failed on %s: %s", self.db_name, e)

    def create_tables(self):
        cursor = self.conn.cursor()
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS customers (
                customer_id TEXT PRIMARY KEY,
                full_name TEXT NOT NULL,
                phone TEXT,
                email TEXT,
                address TEXT,
                created_at TEXT
            )
        """)
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS borrowers (
                borrower_id INTEGER PRIMARY KEY AUTOINCREMENT,
                customer_id TEXT NOT NULL,
                ref_no TEXT UNIQUE,
                full_name TEXT NOT NULL,
                contact_no TEXT NOT NULL,
                address TEXT,
                email TEXT,
                created_at TEXT,
                FOREIGN KEY(customer_id) REFERENCES customers(customer_id)
            )
        """)
        # Migration for journals created before borrowers carried an email
        try:
            cursor.execute("ALTER TABLE borrowers ADD COLUMN email TEXT")
        except sqlite3.OperationalError:
            pass

        cursor.execute("CREATE INDEX IF NOT EXISTS idx_borrowers_customer ON borrowers(customer_id)")

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS settings (
                key TEXT PRIMARY KEY,
                value TEXT
            )
        """)
        self.conn.commit()

    def _fetchone(self, sql, params=()):
        """Run a single-row read; returns (row, column names)."""
        try:
            cursor = self.conn.cursor()
            cursor.execute(sql, params)
            row = cursor.fetchone()
        except sqlite3.Error as e:
            raise DatabaseError(f"Query failed: {e}", {'db_name': self.db_name})
        return row, [description[0] for description in cursor.description or ()]

    def _read_frame(self, sql, params=None):
        try:
            return pd.read_sql_query(sql, self.conn, params=params)
        except (sqlite3.Error, pd.errors.DatabaseError) as e:
            raise DatabaseError(f"Query failed: {e}", {'db_name': self.db_name})

    # Customer operations
    def add_customer(self, customer_id, full_name, phone="", email="", address=""):
        with self.transaction():
            self.conn.execute(
                "INSERT INTO customers (customer_id, full_name, phone, email, address, created_at) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                (str(customer_id), full_name, phone, email, address,
                 datetime.now().strftime("%Y-%m-%d %H:%M:%S")))
        return str(customer_id)

    def customer_exists(self, customer_id):
        row, _cols = self._fetchone("SELECT 1 FROM customers WHERE customer_id=?", (str(customer_id),))
        return row is not None

    def get_customers(self, search=None):
        """Return customers ordered by id as plain dicts.

        Args:
            search: Optional text matched against name, id and phone.
        """
        df = self._read_frame(
            "SELECT customer_id, full_name, phone, email, address FROM customers ORDER BY customer_id")
        df = df.fillna("")
        if search:
            term = str(search)
            mask = (
                df["full_name"].str.lower().str.contains(term.lower(), regex=False)
                | df["customer_id"].str.contains(term, regex=False)
                | df["phone"].str.contains(term, regex=False)
            )
            df = df[mask]
        return df.head(FETCH_LIMIT).to_dict("records")

    def import_customers_csv(self, path):
        """Import customer reference data from a CSV file.

        Rows whose customer_id already exists are skipped.

        Returns:
            Dict with 'imported' and 'skipped' counts.
        """
        try:
            df = pd.read_csv(path, dtype=str).fillna("")
        except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            raise ValidationError({'file': f"Cannot read {path}: {e}"})
        missing = [c for c in ("customer_id", "full_name") if c not in df.columns]
        if missing:
            raise ValidationError({'file': f"Missing columns: {', '.join(missing)}"})
        for col in CUSTOMER_COLUMNS:
            if col not in df.columns:
                df[col] = ""

        stats = {'imported': 0, 'skipped': 0}
        now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with self.transaction():
            cursor = self.conn.cursor()
            for row in df[CUSTOMER_COLUMNS].itertuples(index=False):
                customer_id = row.customer_id.strip()
                if not customer_id or not row.full_name.strip():
                    stats['skipped'] += 1
                    continue
                cursor.execute(
                    "INSERT OR IGNORE INTO customers (customer_id, full_name, phone, email, address, created_at) "
                    "VALUES (?, ?, ?, ?, ?, ?)",
                    (customer_id, row.full_name.strip(), row.phone.strip(), row.email.strip(),
                     row.address.strip(), now))
                if cursor.rowcount:
                    stats['imported'] += 1
                else:
                    stats['skipped'] += 1
        logger.info("Imported %d customers from %s (%d skipped)", stats['imported'], path, stats['skipped'])
        return stats

    # Borrower operations
    def get_borrowers(self, search=None, filter=None):
        """Return borrowers ordered by borrower_id with repeat-customer flags.

        ``loan_count`` is the number of borrower rows sharing the customer_id
        across the whole table; it is computed before any narrowing so the
        flags do not depend on the search.

        Args:
            search: Optional text matched like the borrower list search box.
            filter: ``"repeat_customers"`` keeps only repeat rows.
        """
        df = self._read_frame(
            "SELECT borrower_id, customer_id, ref_no, full_name, contact_no, address, email "
            "FROM borrowers ORDER BY borrower_id")
        if df.empty:
            return []
        df[BORROWER_TEXT_COLUMNS] = df[BORROWER_TEXT_COLUMNS].fillna("").astype(str)
        df["loan_count"] = df.groupby("customer_id")["borrower_id"].transform("count")
        df["is_repeat_customer"] = df["loan_count"] > 1

        if search:
            term = str(search)
            lowered = term.lower()
            mask = (
                df["full_name"].str.lower().str.contains(lowered, regex=False)
                | df["customer_id"].str.contains(term, regex=False)
                | df["contact_no"].str.contains(term, regex=False)
                | df["ref_no"].str.lower().str.contains(lowered, regex=False)
            )
            df = df[mask]
        if filter == REPEAT_FILTER:
            df = df[df["is_repeat_customer"]]

        records = []
        for rec in df.head(FETCH_LIMIT).to_dict("records"):
            rec["borrower_id"] = int(rec["borrower_id"])
            rec["loan_count"] = int(rec["loan_count"])
            rec["is_repeat_customer"] = bool(rec["is_repeat_customer"])
            records.append(rec)
        return records

    def get_borrower(self, borrower_id):
        row, cols = self._fetchone("SELECT * FROM borrowers WHERE borrower_id=?", (borrower_id,))
        if row:
            return dict(zip(cols, row))
        return None

    def add_borrower(self, customer_id, full_name, contact_no, address, email=""):
        """Insert a borrower and assign its reference number.

        Returns:
            The new borrower_id.
        """
        customer_id = str(customer_id)
        if not self.customer_exists(customer_id):
            raise CustomerNotFoundError(customer_id)

        with self.transaction():
            cursor = self.conn.cursor()
            cursor.execute(
                "INSERT INTO borrowers (customer_id, full_name, contact_no, address, email, created_at) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                (customer_id, full_name, contact_no, address, email or EMAIL_NOT_AVAILABLE,
                 datetime.now().strftime("%Y-%m-%d %H:%M:%S")))
            borrower_id = cursor.lastrowid
            # AUTOINCREMENT ids are never reused, so neither are ref numbers
            cursor.execute("UPDATE borrowers SET ref_no=? WHERE borrower_id=?",
                           (self.format_ref_no(borrower_id), borrower_id))
        logger.info("Added borrower %s for customer %s", borrower_id, customer_id)
        return borrower_id

    def update_borrower(self, borrower_id, customer_id, full_name, contact_no, address, email=""):
        customer_id = str(customer_id)
        if self.get_borrower(borrower_id) is None:
            raise BorrowerNotFoundError(borrower_id)
        if not self.customer_exists(customer_id):
            raise CustomerNotFoundError(customer_id)

        with self.transaction():
            self.conn.execute(
                "UPDATE borrowers SET customer_id=?, full_name=?, contact_no=?, address=?, email=? "
                "WHERE borrower_id=?",
                (customer_id, full_name, contact_no, address, email or EMAIL_NOT_AVAILABLE, borrower_id))
        logger.info("Updated borrower %s", borrower_id)

    def delete_borrower(self, borrower_id):
        with self.transaction():
            cursor = self.conn.cursor()
            cursor.execute("DELETE FROM borrowers WHERE borrower_id=?", (borrower_id,))
            deleted = cursor.rowcount
        if not deleted:
            raise BorrowerNotFoundError(borrower_id)
        logger.info("Deleted borrower %s", borrower_id)

    @staticmethod
    def format_ref_no(borrower_id):
        return f"{REF_NO_PREFIX}-{int(borrower_id):0{REF_NO_WIDTH}d}"

    # Settings
    def get_setting(self, key, default=None):
        row, _cols = self._fetchone("SELECT value FROM settings WHERE key=?", (key,))
        return row[0] if row else default

    def set_setting(self, key, value):
        with self.transaction():
            self.conn.execute("INSERT OR REPLACE INTO settings (key, value) VALUES (?, ?)", (key, str(value)))
