"""Custom exceptions for BorrowerDesk application."""


class BorrowerDeskError(Exception):
    """Base exception for all BorrowerDesk errors."""
    
    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
    
    def __str__(self):
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class DatabaseError(BorrowerDeskError):
    """Raised when a database operation fails."""
    pass


class TransactionError(DatabaseError):
    """Raised when a database transaction fails to complete."""
    pass


class BorrowerNotFoundError(BorrowerDeskError):
    """Raised when a borrower cannot be found."""
    
    def __init__(self, borrower_id: int = None, ref_no: str = None):
        details = {}
        if borrower_id is not None:
            details['borrower_id'] = borrower_id
        if ref_no:
            details['ref_no'] = ref_no
        
        message = "Borrower not found"
        if ref_no:
            message = f"Borrower '{ref_no}' not found"
        elif borrower_id is not None:
            message = f"Borrower with ID {borrower_id} not found"
        
        super().__init__(message, details)


class CustomerNotFoundError(BorrowerDeskError):
    """Raised when a borrower references a customer that does not exist."""
    
    def __init__(self, customer_id: str = None):
        details = {}
        if customer_id:
            details['customer_id'] = customer_id
        
        message = "Customer not found"
        if customer_id:
            message = f"Customer '{customer_id}' not found"
        
        super().__init__(message, details)


class ValidationError(BorrowerDeskError):
    """Raised when borrower form fields fail validation.
    
    Attributes:
        field_errors: Mapping of field name to the message shown inline.
    """
    
    def __init__(self, field_errors: dict):
        self.field_errors = dict(field_errors)
        fields = ", ".join(sorted(self.field_errors))
        super().__init__(f"Invalid borrower details: {fields}", {'fields': sorted(self.field_errors)})


class FetchError(BorrowerDeskError):
    """Raised when a bulk list fetch fails."""
    
    def __init__(self, resource: str, reason: str = None):
        details = {'resource': resource}
        message = f"Failed to fetch {resource}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, details)
