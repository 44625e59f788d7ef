"""POST /v1/assessment - single borrower assessment endpoint"""

import asyncio
import logging
import time
from fastapi import APIRouter, Depends, HTTPException, Request

from loan_assessor.api.v1.schemas import (
    AssessmentRequest,
    AssessmentResponse,
    AuditEntrySchema,
    CompositeScoreSchema,
    CreditScoreSchema,
    ESGScoreSchema,
    IncomeAssetsScoreSchema,
    LoanTermsSchema,
)
from loan_assessor.api.dependencies import get_credit_bureau_client, get_esg_provider_client, get_request_id
from loan_assessor.infrastructure.clients.credit_bureau import CreditBureauClient
from loan_assessor.infrastructure.clients.esg_provider import ESGProviderClient
from loan_assessor.domain.assessment import run_assessment
from loan_assessor.domain.exceptions import InvalidBorrowerError, ProviderError
from loan_assessor.domain.models import Assessment
from loan_assessor.domain.validation import validate_borrower
from loan_assessor.infrastructure.observability.metrics import record_decision
from loan_assessor.infrastructure.observability.logging import log_assessment

router = APIRouter()


def _to_response(assessment: Assessment) -> AssessmentResponse:
    return AssessmentResponse(
        assessment_id=assessment.assessment_id,
        borrower_name=assessment.borrower.full_name,
        status=assessment.status.value,
        credit_score=CreditScoreSchema.model_validate(assessment.credit_score),
        esg_score=ESGScoreSchema.model_validate(assessment.esg_score),
        income_assets_score=IncomeAssetsScoreSchema.model_validate(assessment.income_assets_score),
        composite_score=CompositeScoreSchema.model_validate(assessment.composite_score),
        loan_terms=LoanTermsSchema.model_validate(assessment.loan_terms) if assessment.loan_terms else None,
        audit_trail=[AuditEntrySchema.model_validate(entry) for entry in assessment.audit_trail],
        created_at=assessment.created_at,
        completed_at=assessment.completed_at,
    )


@router.post("/assessment", response_model=AssessmentResponse)
async def create_assessment(
    request_body: AssessmentRequest,
    request: Request,
    credit_client: CreditBureauClient = Depends(get_credit_bureau_client),
    esg_client: ESGProviderClient = Depends(get_esg_provider_client),
):
    """
    Assess a single borrower.

    Flow:
    1. Validate borrower fields
    2. Fetch credit and ESG scores concurrently from the providers
    3. Score income/assets, compute composite score and decision
    4. Generate loan terms if approved
    5. Return the completed assessment with its audit trail
    """
    start_time = time.perf_counter()
    request_id = get_request_id(request)

    try:
        # 1. Validate
        borrower = request_body.to_borrower()
        errors = validate_borrower(borrower)
        if errors:
            raise InvalidBorrowerError(errors)

        # 2. Fetch provider scores in parallel
        credit_response, esg_response = await asyncio.gather(
            credit_client.fetch_credit_score(borrower.ssn),
            esg_client.fetch_esg_score(borrower.company_name, borrower.industry_sector),
        )

        # 3-4. Score, decide, and price
        processing_time_ms = int((time.perf_counter() - start_time) * 1000)
        assessment = run_assessment(
            borrower,
            credit_response.credit_score,
            esg_response.esg_score,
            processing_time_ms,
        )

        # Record metrics and logs
        duration_ms = (time.perf_counter() - start_time) * 1000
        record_decision(assessment.composite_score)
        log_assessment(
            request_id,
            assessment.assessment_id,
            assessment.composite_score,
            assessment.loan_terms is not None,
            duration_ms,
        )

        return _to_response(assessment)

    except InvalidBorrowerError as e:
        logging.warning(f"Invalid borrower: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=e.errors)

    except ProviderError as e:
        logging.error(f"Provider error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Scoring provider unavailable")

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")
