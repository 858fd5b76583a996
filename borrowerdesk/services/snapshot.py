"""In-memory snapshot of the borrower and customer lists.

The snapshot is never patched. After every successful create, update or
delete the caller must invoke :meth:`SnapshotLoader.invalidate_and_refetch`,
which throws the old snapshot away and reloads both lists in full.
"""
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Mapping, Optional, Tuple

from ..data_structures import Borrower, Customer
from ..exceptions import BorrowerDeskError, FetchError
from .record_store import RecordStore

logger = logging.getLogger(__name__)


def _text(value) -> str:
    return "" if value is None else str(value)


def normalize_borrower(record: Mapping) -> Borrower:
    """Build a Borrower from a store record, coercing text fields to str."""
    loan_count = record.get("loan_count")
    return Borrower(
        borrower_id=int(record["borrower_id"]),
        customer_id=_text(record.get("customer_id")),
        ref_no=_text(record.get("ref_no")),
        full_name=_text(record.get("full_name")),
        contact_no=_text(record.get("contact_no")),
        address=_text(record.get("address")),
        email=_text(record.get("email")),
        is_repeat_customer=bool(record.get("is_repeat_customer")),
        loan_count=int(loan_count) if loan_count is not None else 1,
    )


def normalize_customer(record: Mapping) -> Customer:
    return Customer(
        customer_id=_text(record.get("customer_id")),
        full_name=_text(record.get("full_name")),
        phone=_text(record.get("phone")),
        email=_text(record.get("email")),
        address=_text(record.get("address")),
    )


@dataclass(frozen=True)
class BorrowerSnapshot:
    borrowers: Tuple[Borrower, ...] = ()
    customers: Tuple[Customer, ...] = ()
    error: Optional[str] = None
    version: int = 0

    @property
    def failed(self) -> bool:
        return self.error is not None


class SnapshotLoader:
    """Loads snapshots from the record store.

    Attributes:
        store_factory: Callable returning a fresh RecordStore. Each fetch
            thread gets its own store because SQLite connections are
            bound to the thread that opened them.
        snapshot: The most recent snapshot (empty until the first load).
    """

    def __init__(self, store_factory: Callable[[], RecordStore]):
        self.store_factory = store_factory
        self.snapshot = BorrowerSnapshot()
        self._version = 0
        self._lock = threading.Lock()

    @classmethod
    def for_database(cls, db_path: str) -> 'SnapshotLoader':
        return cls(lambda: RecordStore.open(db_path))

    def _fetch(self, resource: str, query: Optional[Mapping]):
        try:
            store = self.store_factory()
        except BorrowerDeskError as e:
            raise FetchError(resource, e.message)
        try:
            if resource == "borrowers":
                result = store.list_borrowers(query)
            else:
                result = store.list_customers(query)
        finally:
            store.close()
        if not result.success:
            raise FetchError(resource, result.message)
        return result.data

    def _next_version(self) -> int:
        with self._lock:
            self._version += 1
            return self._version

    def load(self, query: Optional[Mapping] = None) -> BorrowerSnapshot:
        """Fetch borrowers and customers concurrently and build a snapshot.

        If either fetch fails both lists are emptied and ``error`` is set.
        """
        version = self._next_version()
        with ThreadPoolExecutor(max_workers=2) as pool:
            borrowers_future = pool.submit(self._fetch, "borrowers", query)
            customers_future = pool.submit(self._fetch, "customers", query)
            try:
                borrower_records = borrowers_future.result()
                customer_records = customers_future.result()
            except FetchError as e:
                logger.error("Snapshot load failed: %s", e)
                snapshot = BorrowerSnapshot(error=e.message, version=version)
            else:
                snapshot = BorrowerSnapshot(
                    borrowers=tuple(normalize_borrower(r) for r in borrower_records),
                    customers=tuple(normalize_customer(r) for r in customer_records),
                    version=version,
                )
                logger.info("Loaded %d borrowers and %d customers (snapshot v%d)",
                            len(snapshot.borrowers), len(snapshot.customers), version)
        self._publish(snapshot)
        return snapshot

    def _publish(self, snapshot: BorrowerSnapshot) -> None:
        with self._lock:
            # An older load finishing late must not replace a newer snapshot
            if snapshot.version < self.snapshot.version:
                logger.debug("Dropping stale snapshot v%d", snapshot.version)
                return
            self.snapshot = snapshot

    def invalidate(self) -> None:
        """Discard the current snapshot without reloading."""
        with self._lock:
            self._version += 1
            self.snapshot = BorrowerSnapshot(version=self._version)

    def invalidate_and_refetch(self, query: Optional[Mapping] = None) -> BorrowerSnapshot:
        self.invalidate()
        return self.load(query)
