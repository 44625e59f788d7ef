"""Composite scoring engine - core business logic for lending decisions"""

from loan_assessor.domain.models import CompositeScore, IncomeAssetsScore, LoanDecision
from loan_assessor.utils.numbers import clamp, round_half_up, round_int

CREDIT_MIN = 300
CREDIT_MAX = 850

# Component weights: credit 40%, income/assets 30%, ESG 30% of 1000
CREDIT_WEIGHT = 400
INCOME_ASSETS_WEIGHT = 300
ESG_WEIGHT = 300

APPROVAL_THRESHOLD = 750
REVIEW_THRESHOLD = 600

# Assumed DTI (percent) when income is known but no debt figure is supplied
DEFAULT_DTI_PERCENT = 25.0


def normalize_credit(score: float) -> int:
    """Map a 300-850 bureau score onto the 0-400 credit component"""
    clamped = clamp(score, CREDIT_MIN, CREDIT_MAX)
    return round_int((clamped - CREDIT_MIN) / (CREDIT_MAX - CREDIT_MIN) * CREDIT_WEIGHT)


def normalize_income_assets(score: float) -> int:
    """Map a 0-100 income/assets score onto the 0-300 component"""
    return round_int(clamp(score, 0, 100) / 100 * INCOME_ASSETS_WEIGHT)


def normalize_esg(score: float) -> int:
    """Map a 0-100 ESG score onto the 0-300 component"""
    return round_int(clamp(score, 0, 100) / 100 * ESG_WEIGHT)


def _dti_band_score(dti: float) -> int:
    if dti <= 20:
        return 50
    elif dti <= 35:
        return 35
    elif dti <= 50:
        return 20
    else:
        return 10


def _acr_band_score(acr: float) -> int:
    if acr > 5:
        return 50
    elif acr > 3:
        return 40
    elif acr > 1:
        return 25
    else:
        return 10


def calculate_income_assets_score(
    annual_income: float,
    total_assets: float,
    estimated_debt: float = 0,
) -> IncomeAssetsScore:
    """
    Score borrower financials from 0 to 100.

    Two banded halves, each worth up to 50 points:
    - Debt-to-income (percent): <=20 -> 50, <=35 -> 35, <=50 -> 20, else 10
    - Asset coverage (assets / income): >5 -> 50, >3 -> 40, >1 -> 25, else 10

    Without a debt figure DTI is assumed to be 25%. Zero income means DTI is
    100% and asset coverage is 0, whatever debt was supplied.

    The result is a step function: small input changes can jump a band.
    """
    income = max(0.0, annual_income)
    assets = max(0.0, total_assets)
    debt = max(0.0, estimated_debt)

    if income > 0:
        dti = debt * 100 / income if debt > 0 else DEFAULT_DTI_PERCENT
        acr = assets / income
    else:
        dti = 100.0
        acr = 0.0

    return IncomeAssetsScore(
        debt_to_income_ratio=round_int(dti),
        asset_coverage_ratio=round_half_up(acr, 2),
        score=_dti_band_score(dti) + _acr_band_score(acr),
    )


def determine_decision(total: int) -> LoanDecision:
    """
    Classify a composite score.

    - total > 750:        APPROVED
    - 600 <= total <= 750: REVIEW
    - total < 600:        REJECTED
    """
    if total > APPROVAL_THRESHOLD:
        return LoanDecision.APPROVED
    elif total >= REVIEW_THRESHOLD:
        return LoanDecision.REVIEW
    else:
        return LoanDecision.REJECTED


def calculate_composite_score(
    credit_raw: float,
    income_assets_raw: float,
    esg_raw: float,
    processing_time_ms: int = 0,
) -> CompositeScore:
    """
    Main entry point: normalize the three raw scores and classify the sum.

    The total is the exact sum of the integer components (max 1000).
    """
    credit_component = normalize_credit(credit_raw)
    income_component = normalize_income_assets(income_assets_raw)
    esg_component = normalize_esg(esg_raw)

    total = credit_component + income_component + esg_component

    return CompositeScore(
        total=total,
        credit_component=credit_component,
        income_component=income_component,
        esg_component=esg_component,
        decision=determine_decision(total),
        processing_time_ms=processing_time_ms,
    )
