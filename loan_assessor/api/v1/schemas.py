"""Pydantic schemas for API request/response validation"""

from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from loan_assessor.domain.models import BorrowerRecord, CompositeScore, LoanDecision
from loan_assessor.domain.validation import MAX_AMOUNT


class AssessmentRequest(BaseModel):
    """Request body for POST /v1/assessment"""

    full_name: str = Field(..., description="Borrower full name")
    ssn: str = Field(..., description="Social security number, 9 digits, any separators")
    annual_income: float = Field(..., allow_inf_nan=False, le=MAX_AMOUNT, description="Gross annual income")
    total_assets: float = Field(..., allow_inf_nan=False, le=MAX_AMOUNT, description="Total declared assets")
    company_name: str = Field(..., description="Employer or business name")
    industry_sector: str = Field(..., description="Industry of the company")
    estimated_debt: float = Field(
        0, ge=0, le=MAX_AMOUNT, allow_inf_nan=False, description="Annual debt obligations, 0 if unknown"
    )

    def to_borrower(self) -> BorrowerRecord:
        return BorrowerRecord(**self.model_dump())


class _FromDomain(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class CreditFactorsSchema(_FromDomain):
    payment_history: int
    credit_utilization: int
    credit_age: int
    credit_mix: int
    new_credit: int


class CreditAccountsSchema(_FromDomain):
    total: int
    delinquent: int
    collections: int


class CreditScoreSchema(_FromDomain):
    """Credit score component (300-850)"""

    score: int
    factors: CreditFactorsSchema
    accounts: CreditAccountsSchema
    source: str
    fetched_at: datetime


class ESGBreakdownSchema(_FromDomain):
    environmental: int
    social: int
    governance: int


class ESGScoreSchema(_FromDomain):
    """ESG score component (0-100)"""

    total: int
    breakdown: ESGBreakdownSchema
    industry_rank: int
    industry_total: int
    carbon_footprint: str
    compliance_status: str
    source: str
    fetched_at: datetime


class IncomeAssetsScoreSchema(_FromDomain):
    debt_to_income_ratio: int
    asset_coverage_ratio: float
    score: int


class CompositeScoreSchema(_FromDomain):
    """Weighted 0-1000 score and decision"""

    total: int
    credit_component: int
    income_component: int
    esg_component: int
    decision: LoanDecision
    processing_time_ms: int


class LoanTermsSchema(_FromDomain):
    """Loan offer for approved borrowers"""

    principal_amount: int
    interest_rate: float
    term_months: int
    monthly_payment: float
    total_interest: float
    generated_at: datetime


class AuditEntrySchema(_FromDomain):
    timestamp: datetime
    action: str
    data_source: str
    details: Dict[str, Any]


class AssessmentResponse(BaseModel):
    """Response for POST /v1/assessment"""

    assessment_id: str
    borrower_name: str
    status: str
    credit_score: CreditScoreSchema
    esg_score: ESGScoreSchema
    income_assets_score: IncomeAssetsScoreSchema
    composite_score: CompositeScoreSchema
    loan_terms: Optional[LoanTermsSchema] = None
    audit_trail: List[AuditEntrySchema]
    created_at: datetime
    completed_at: Optional[datetime] = None


class BatchRowSchema(BaseModel):
    """One borrower row; numeric fields stay strings, parsed leniently"""

    name: str = ""
    ssn: str = ""
    annual_income: str = ""
    total_assets: str = ""
    company: str = ""
    industry: str = ""


class BatchRequest(BaseModel):
    """Request body for POST /v1/batch"""

    rows: List[BatchRowSchema]


class BatchResultSchema(_FromDomain):
    row_index: int
    borrower_name: str
    composite_score: int
    decision: LoanDecision
    processing_time_ms: int
    error: Optional[str] = None


class BatchSummarySchema(_FromDomain):
    total_processed: int
    approved_count: int
    review_count: int
    rejected_count: int
    error_count: int
    total_time_ms: int
    average_time_ms: int


class BatchResponse(BaseModel):
    """Response for POST /v1/batch and POST /v1/batch/csv"""

    results: List[BatchResultSchema]
    summary: BatchSummarySchema


class CreditScoreRequest(BaseModel):
    """Request body for POST /v1/credit-score"""

    ssn: str = Field(..., min_length=1)


class CreditScoreResponse(BaseModel):
    """Credit bureau envelope"""

    request_id: str
    latency_ms: int
    data: CreditScoreSchema


class ESGScoreRequest(BaseModel):
    """Request body for POST /v1/esg-score"""

    company_name: str = Field(..., min_length=1)
    industry_sector: str = ""


class ESGScoreResponse(BaseModel):
    """ESG provider envelope"""

    request_id: str
    latency_ms: int
    data: ESGScoreSchema


class IndustriesResponse(BaseModel):
    """Response for GET /v1/industries"""

    industries: List[str]


class DashboardAssessmentSchema(BaseModel):
    """
    One assessment as returned by POST /v1/assessment.

    Only the creation time and composite score are read; other fields are ignored.
    """

    created_at: datetime
    composite_score: Optional[CompositeScoreSchema] = None

    def to_scored(self) -> Tuple[datetime, Optional[CompositeScore]]:
        if self.composite_score is None:
            return self.created_at, None
        return self.created_at, CompositeScore(**self.composite_score.model_dump())


class DashboardRequest(BaseModel):
    """Request body for POST /v1/dashboard/metrics"""

    assessments: List[DashboardAssessmentSchema]
    today: Optional[date] = Field(None, description="Day to summarize, defaults to the current UTC date")


class DashboardMetricsSchema(_FromDomain):
    """Response for POST /v1/dashboard/metrics"""

    today_assessments: int
    approval_rate: float
    average_time_seconds: float
    time_saved_percent: float
