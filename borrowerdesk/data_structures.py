from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .config import EMAIL_NOT_AVAILABLE


@dataclass(frozen=True)
class Customer:
    """Reference record a borrower is created from."""
    customer_id: str
    full_name: str
    phone: str = ""
    email: str = ""
    address: str = ""

    @property
    def display_label(self) -> str:
        return f"{self.full_name} ({self.customer_id})"


@dataclass(frozen=True)
class Borrower:
    """One loan applicant row as delivered by the record store.

    ``is_repeat_customer`` and ``loan_count`` are computed by the store and
    only consumed here.
    """
    borrower_id: int
    customer_id: str
    ref_no: str
    full_name: str
    contact_no: str
    address: str = ""
    email: str = ""
    is_repeat_customer: bool = False
    loan_count: int = 1

    @property
    def status_label(self) -> str:
        if self.is_repeat_customer:
            return f"Repeat Customer ({self.loan_count} borrowers)"
        return "New Customer"

    @property
    def display_email(self) -> str:
        if self.email and self.email != EMAIL_NOT_AVAILABLE:
            return self.email
        return ""


@dataclass(frozen=True)
class RowStyle:
    """Colours for one table row; all None means the default table style."""
    background: Optional[str] = None
    hover_background: Optional[str] = None
    border_accent: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.background is None and self.border_accent is None


EMPTY_STYLE = RowStyle()


@dataclass(frozen=True)
class BorrowerRow:
    borrower: Borrower
    style: RowStyle = EMPTY_STYLE

    @property
    def status_label(self) -> str:
        return self.borrower.status_label


@dataclass
class BorrowerPage:
    """View-model handed to the borrower table for one render."""
    rows: List[BorrowerRow]
    total: int
    page: int
    page_size: int
    page_count: int
    active_tab: str
    error: Optional[str] = None

    @property
    def range_label(self) -> str:
        if self.total == 0:
            return "0-0 of 0"
        start = self.page * self.page_size + 1
        end = min(self.total, start + self.page_size - 1)
        return f"{start}-{end} of {self.total}"

    @property
    def has_previous(self) -> bool:
        return self.page > 0

    @property
    def has_next(self) -> bool:
        return self.page + 1 < self.page_count


@dataclass
class BorrowerFormData:
    """Fields submitted from the add/edit borrower dialog."""
    customer_id: str = ""
    full_name: str = ""
    contact_no: str = ""
    address: str = ""
    email: str = ""

    @classmethod
    def from_borrower(cls, borrower: Borrower) -> 'BorrowerFormData':
        return cls(
            customer_id=str(borrower.customer_id or ""),
            full_name=str(borrower.full_name or ""),
            contact_no=str(borrower.contact_no or ""),
            address=str(borrower.address or ""),
            email=str(borrower.email or ""),
        )

    @classmethod
    def from_customer(cls, customer: Optional[Customer]) -> 'BorrowerFormData':
        if customer is None:
            return cls()
        return cls(
            customer_id=str(customer.customer_id or ""),
            full_name=str(customer.full_name or ""),
            contact_no=str(customer.phone or ""),
            address=str(customer.address or ""),
            email=str(customer.email or ""),
        )

    def as_dict(self) -> dict:
        return {
            "customer_id": self.customer_id,
            "full_name": self.full_name,
            "contact_no": self.contact_no,
            "address": self.address,
            "email": self.email,
        }


@dataclass
class ExportOptions:
    columns: Tuple[str, ...] = field(default_factory=lambda: (
        "Ref No", "Customer ID", "Full Name", "Contact", "Email", "Address", "Status"))
    paint_bands: bool = True
    sheet_name: str = "Borrowers"
