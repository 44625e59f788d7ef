"""Loan terms generation for approved borrowers"""

from datetime import datetime, timezone
from loan_assessor.domain.models import LoanDecision, LoanTerms
from loan_assessor.utils.numbers import round_half_up, round_int

BASE_RATE = 5.0
RATE_REFERENCE_SCORE = 850
TERM_MONTHS = 360


def calculate_income_multiplier(composite_score: int) -> float:
    """
    Principal as a multiple of annual income.

    - score > 800: 3.0x
    - score > 700: 2.5x
    - otherwise:   2.0x
    """
    if composite_score > 800:
        return 3.0
    elif composite_score > 700:
        return 2.5
    else:
        return 2.0


def calculate_interest_rate(composite_score: int) -> float:
    """Base 5.0% plus 1 point of premium per 100 points below 850"""
    risk_premium = (RATE_REFERENCE_SCORE - min(composite_score, RATE_REFERENCE_SCORE)) / 100
    return round_half_up(BASE_RATE + risk_premium, 2)


def calculate_monthly_payment(principal: float, annual_rate: float, term_months: int) -> float:
    """
    Fixed monthly payment from the standard amortization formula.

        M = P * r(1+r)^n / ((1+r)^n - 1),  r = annual_rate / 100 / 12

    A zero rate degenerates to P / n. Rounded to cents.
    """
    monthly_rate = annual_rate / 100 / 12

    if monthly_rate == 0:
        return round_half_up(principal / term_months, 2)

    growth = (1 + monthly_rate) ** term_months
    return round_half_up(principal * (monthly_rate * growth) / (growth - 1), 2)


def calculate_loan_terms(
    composite_score: int,
    annual_income: float,
    decision: LoanDecision,
    generated_at: datetime | None = None,
) -> LoanTerms | None:
    """
    Build loan terms for an approved borrower.

    Returns None for any decision other than APPROVED; REVIEW and REJECTED
    never get partial terms. Inputs are assumed validated and non-negative.

    Example:
        score 900, income $100,000 -> 3.0x, principal $300,000, 5.00%,
        360 months -> $1,610.46/month, $279,765.60 total interest
    """
    if decision != LoanDecision.APPROVED:
        return None

    principal = round_int(annual_income * calculate_income_multiplier(composite_score))
    interest_rate = calculate_interest_rate(composite_score)
    monthly_payment = calculate_monthly_payment(principal, interest_rate, TERM_MONTHS)

    # Interest over the full term at the rounded monthly payment
    total_interest = round_half_up(monthly_payment * TERM_MONTHS - principal, 2)

    return LoanTerms(
        principal_amount=principal,
        interest_rate=interest_rate,
        term_months=TERM_MONTHS,
        monthly_payment=monthly_payment,
        total_interest=total_interest,
        generated_at=generated_at or datetime.now(timezone.utc),
    )
