"""Domain-specific exceptions"""

from typing import Dict, List


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ProviderError(DomainException):
    """Credit bureau or ESG provider failed to return a score"""

    pass


class InvalidBorrowerError(DomainException):
    """Borrower record failed field validation"""

    def __init__(self, errors: Dict[str, str]):
        self.errors = errors
        super().__init__("Invalid borrower record: " + ", ".join(sorted(errors)))


class InvalidCSVError(DomainException):
    """Batch CSV is empty or missing required columns"""

    def __init__(self, message: str, missing_columns: List[str] | None = None):
        self.missing_columns = missing_columns or []
        super().__init__(message)
