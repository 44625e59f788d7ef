"""POST /v1/dashboard/metrics - headline numbers over submitted assessments"""

from fastapi import APIRouter

from loan_assessor.api.v1.schemas import DashboardMetricsSchema, DashboardRequest
from loan_assessor.domain.dashboard import summarize_scores

router = APIRouter()


@router.post("/dashboard/metrics", response_model=DashboardMetricsSchema)
def get_dashboard_metrics(request_body: DashboardRequest):
    """
    Summarize assessments the caller has collected.

    Nothing is stored server side: the caller posts the assessments
    (as returned by POST /v1/assessment) and gets today's metrics back.
    """
    metrics = summarize_scores(
        (assessment.to_scored() for assessment in request_body.assessments),
        request_body.today,
    )
    return DashboardMetricsSchema.model_validate(metrics)
