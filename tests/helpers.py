"""Shared builders for the borrower test suites."""
from borrowerdesk.data_structures import Borrower


def make_borrower(borrower_id, customer_id, repeat=True, name=None, contact=None, ref_no=None,
                  loan_count=None, email=""):
    return Borrower(
        borrower_id=borrower_id,
        customer_id=customer_id,
        ref_no=ref_no or f"BRW-{borrower_id:04d}",
        full_name=name or f"Borrower {borrower_id}",
        contact_no=contact or f"98765{borrower_id:05d}",
        address="12 Market Road",
        email=email,
        is_repeat_customer=repeat,
        loan_count=loan_count if loan_count is not None else (2 if repeat else 1),
    )
