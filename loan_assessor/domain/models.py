"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class LoanDecision(str, Enum):
    """Lending decision derived from the composite score"""

    APPROVED = "APPROVED"
    REVIEW = "REVIEW"
    REJECTED = "REJECTED"


class AssessmentStatus(str, Enum):
    """Stage of a single-borrower assessment"""

    PENDING = "pending"
    SCORING = "scoring"
    COMPLETE = "complete"


@dataclass(frozen=True)
class BorrowerRecord:
    """Validated borrower input for a single assessment"""

    full_name: str
    ssn: str
    annual_income: float
    total_assets: float
    company_name: str
    industry_sector: str
    estimated_debt: float = 0.0


@dataclass(frozen=True)
class CreditFactors:
    """Bureau factor breakdown (display only, not used for scoring)"""

    payment_history: int  # 50-100
    credit_utilization: int  # 0-100
    credit_age: int  # years, 1-30
    credit_mix: int  # 1-10
    new_credit: int  # inquiries, 0-5


@dataclass(frozen=True)
class CreditAccounts:
    """Bureau account summary (display only)"""

    total: int
    delinquent: int
    collections: int


@dataclass(frozen=True)
class CreditScore:
    """Credit score component from the bureau (300-850)"""

    score: int
    factors: CreditFactors
    accounts: CreditAccounts
    source: str
    fetched_at: datetime


@dataclass(frozen=True)
class ESGBreakdown:
    """Environmental / social / governance sub-scores, each 0-100"""

    environmental: int
    social: int
    governance: int


@dataclass(frozen=True)
class ESGScore:
    """ESG score component from the provider (0-100)"""

    total: int
    breakdown: ESGBreakdown
    industry_rank: int
    industry_total: int
    carbon_footprint: str  # low | medium | high
    compliance_status: str  # compliant | warning | violation
    source: str
    fetched_at: datetime


@dataclass(frozen=True)
class IncomeAssetsScore:
    """Income/assets sub-score derived from DTI and asset coverage"""

    debt_to_income_ratio: int  # percent
    asset_coverage_ratio: float
    score: int  # 0-100


@dataclass(frozen=True)
class CompositeScore:
    """Weighted 0-1000 score and the decision it implies"""

    total: int
    credit_component: int  # 0-400
    income_component: int  # 0-300
    esg_component: int  # 0-300
    decision: LoanDecision
    processing_time_ms: int = 0


@dataclass(frozen=True)
class LoanTerms:
    """Amortized loan offer, only generated for approved borrowers"""

    principal_amount: int
    interest_rate: float  # annual percent
    term_months: int
    monthly_payment: float
    total_interest: float
    generated_at: datetime


@dataclass(frozen=True)
class BatchResult:
    """Outcome of scoring one batch row"""

    row_index: int
    borrower_name: str
    composite_score: int
    decision: LoanDecision
    processing_time_ms: int
    error: Optional[str] = None


@dataclass(frozen=True)
class BatchSummary:
    """Aggregate counts and timings for a processed batch"""

    total_processed: int
    approved_count: int
    review_count: int
    rejected_count: int
    error_count: int
    total_time_ms: int
    average_time_ms: int


@dataclass(frozen=True)
class BatchOutcome:
    """Per-row results plus their summary"""

    results: List[BatchResult]
    summary: BatchSummary


@dataclass(frozen=True)
class AuditEntry:
    """Single step recorded in an assessment's audit trail"""

    timestamp: datetime
    action: str
    data_source: str
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Assessment:
    """Caller-owned state of one borrower assessment"""

    assessment_id: str
    borrower: BorrowerRecord
    status: AssessmentStatus
    created_at: datetime
    audit_trail: Tuple[AuditEntry, ...] = ()
    credit_score: Optional[CreditScore] = None
    esg_score: Optional[ESGScore] = None
    income_assets_score: Optional[IncomeAssetsScore] = None
    composite_score: Optional[CompositeScore] = None
    loan_terms: Optional[LoanTerms] = None
    completed_at: Optional[datetime] = None


@dataclass(frozen=True)
class DashboardMetrics:
    """Headline numbers for the assessment dashboard"""

    today_assessments: int
    approval_rate: float  # percent
    average_time_seconds: float
    time_saved_percent: float
