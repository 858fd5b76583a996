"""BorrowerDesk: borrower listing and repeat-customer dashboard."""

__version__ = "1.0.0"
