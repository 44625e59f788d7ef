"""Single-borrower assessment workflow

The caller owns the Assessment value and threads it through each step; every
transition returns a new Assessment with its audit trail extended.
"""

import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from loan_assessor.domain.loan_terms import calculate_loan_terms
from loan_assessor.domain.models import (
    Assessment,
    AssessmentStatus,
    AuditEntry,
    BorrowerRecord,
    CompositeScore,
    CreditScore,
    ESGScore,
    IncomeAssetsScore,
    LoanTerms,
)
from loan_assessor.domain.scoring import calculate_composite_score, calculate_income_assets_score


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _audit(action: str, data_source: str, details: Dict[str, Any], at: datetime) -> AuditEntry:
    return AuditEntry(timestamp=at, action=action, data_source=data_source, details=details)


def start_assessment(borrower: BorrowerRecord, now: Optional[datetime] = None) -> Assessment:
    now = now or _now()
    return Assessment(
        assessment_id=str(uuid.uuid4()),
        borrower=borrower,
        status=AssessmentStatus.PENDING,
        created_at=now,
        audit_trail=(
            _audit("Assessment Started", "User Input", {"borrower_name": borrower.full_name}, now),
        ),
    )


def record_scores(
    assessment: Assessment,
    credit: CreditScore,
    esg: ESGScore,
    income_assets: IncomeAssetsScore,
    composite: CompositeScore,
    now: Optional[datetime] = None,
) -> Assessment:
    """Attach all score components and move the assessment to 'scoring'"""
    now = now or _now()
    entries = (
        _audit("Credit Score Fetch", credit.source, {"score": credit.score}, credit.fetched_at),
        _audit(
            "ESG Score Fetch",
            esg.source,
            {
                "score": esg.total,
                "environmental": esg.breakdown.environmental,
                "social": esg.breakdown.social,
                "governance": esg.breakdown.governance,
            },
            esg.fetched_at,
        ),
        _audit(
            "Income/Assets Score Calculation",
            "Scoring Engine",
            {
                "score": income_assets.score,
                "debt_to_income_ratio": income_assets.debt_to_income_ratio,
                "asset_coverage_ratio": income_assets.asset_coverage_ratio,
            },
            now,
        ),
        _audit(
            "Composite Score Calculation",
            "Scoring Engine",
            {
                "total": composite.total,
                "credit_component": composite.credit_component,
                "income_component": composite.income_component,
                "esg_component": composite.esg_component,
            },
            now,
        ),
        _audit("Decision", "Decision Engine", {"decision": composite.decision.value}, now),
    )

    return replace(
        assessment,
        credit_score=credit,
        esg_score=esg,
        income_assets_score=income_assets,
        composite_score=composite,
        status=AssessmentStatus.SCORING,
        audit_trail=assessment.audit_trail + entries,
    )


def complete_assessment(
    assessment: Assessment,
    loan_terms: Optional[LoanTerms] = None,
    now: Optional[datetime] = None,
) -> Assessment:
    now = now or _now()
    decision = assessment.composite_score.decision.value if assessment.composite_score else None
    return replace(
        assessment,
        loan_terms=loan_terms,
        status=AssessmentStatus.COMPLETE,
        completed_at=now,
        audit_trail=assessment.audit_trail
        + (_audit("Assessment Completed", "Decision Engine", {"decision": decision}, now),),
    )


def run_assessment(
    borrower: BorrowerRecord,
    credit: CreditScore,
    esg: ESGScore,
    processing_time_ms: int = 0,
) -> Assessment:
    """
    Main entry point: score a borrower from already-fetched provider results.

    Flow:
    1. Income/assets sub-score from the borrower's financials
    2. Composite score and decision
    3. Loan terms (approved borrowers only)
    """
    assessment = start_assessment(borrower)

    income_assets = calculate_income_assets_score(
        borrower.annual_income,
        borrower.total_assets,
        borrower.estimated_debt,
    )
    composite = calculate_composite_score(credit.score, income_assets.score, esg.total, processing_time_ms)
    assessment = record_scores(assessment, credit, esg, income_assets, composite)

    loan_terms = calculate_loan_terms(composite.total, borrower.annual_income, composite.decision)
    return complete_assessment(assessment, loan_terms)
