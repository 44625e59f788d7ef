"""Input validation for borrower records and batch CSV files"""

import math
import re
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Sequence

from loan_assessor.domain.models import BorrowerRecord

# Upper bound for any money amount on a borrower record
MAX_AMOUNT = 1_000_000_000_000

REQUIRED_COLUMNS = (
    "name",
    "ssn",
    "annual_income",
    "total_assets",
    "company",
    "industry",
)


@dataclass(frozen=True)
class CSVValidationResult:
    """Outcome of checking a batch file's header and contents"""

    is_valid: bool
    error_message: Optional[str] = None
    missing_columns: List[str] = field(default_factory=list)
    found_columns: List[str] = field(default_factory=list)


def _validate_name(value: str, label: str) -> Optional[str]:
    if not value.strip():
        return f"{label} is required"
    if len(value.strip()) < 2:
        return f"{label} must be at least 2 characters"
    return None


def validate_full_name(value: str) -> Optional[str]:
    return _validate_name(value, "Full name")


def validate_ssn(value: str) -> Optional[str]:
    digits = re.sub(r"\D", "", value)
    if not digits:
        return "SSN is required"
    if len(digits) != 9:
        return "SSN must be 9 digits"
    return None


def _out_of_range(value: float) -> bool:
    return not math.isfinite(value) or abs(value) > MAX_AMOUNT


def validate_annual_income(value: float) -> Optional[str]:
    if _out_of_range(value):
        return "Annual income is out of range"
    if not value or value <= 0:
        return "Annual income must be positive"
    return None


def validate_total_assets(value: float) -> Optional[str]:
    if _out_of_range(value):
        return "Total assets is out of range"
    if value < 0:
        return "Total assets cannot be negative"
    return None


def validate_estimated_debt(value: float) -> Optional[str]:
    if _out_of_range(value):
        return "Estimated debt is out of range"
    if value < 0:
        return "Estimated debt cannot be negative"
    return None


def validate_company_name(value: str) -> Optional[str]:
    return _validate_name(value, "Company name")


def validate_industry_sector(value: str) -> Optional[str]:
    if not value.strip():
        return "Industry sector is required"
    return None


BORROWER_VALIDATORS: Dict[str, Callable] = {
    "full_name": validate_full_name,
    "ssn": validate_ssn,
    "annual_income": validate_annual_income,
    "total_assets": validate_total_assets,
    "company_name": validate_company_name,
    "industry_sector": validate_industry_sector,
    "estimated_debt": validate_estimated_debt,
}


def validate_borrower(borrower: BorrowerRecord) -> Dict[str, str]:
    """Return {field: message} for every failing field (empty when valid)"""
    errors = {}
    for field_name, validator in BORROWER_VALIDATORS.items():
        message = validator(getattr(borrower, field_name))
        if message:
            errors[field_name] = message
    return errors


def validate_csv_columns(columns: Sequence[str]) -> CSVValidationResult:
    """
    Check a header for the six required batch columns.

    Column names are compared lower-cased and trimmed.
    """
    normalized = {column.lower().strip() for column in columns}
    missing = [required for required in REQUIRED_COLUMNS if required not in normalized]

    if missing:
        return CSVValidationResult(
            is_valid=False,
            error_message=f"Missing required columns: {', '.join(missing)}",
            missing_columns=missing,
            found_columns=list(columns),
        )

    return CSVValidationResult(is_valid=True, found_columns=list(columns))


def validate_csv_data(rows: Sequence[Mapping[str, str]]) -> CSVValidationResult:
    """Require at least one data row, then validate the first row's columns"""
    if not rows:
        return CSVValidationResult(
            is_valid=False,
            error_message="CSV file is empty or contains no data rows",
        )

    return validate_csv_columns(list(rows[0].keys()))
