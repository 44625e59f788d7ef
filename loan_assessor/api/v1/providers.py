"""Direct access to the mock score providers"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from loan_assessor.api.v1.schemas import (
    CreditScoreRequest,
    CreditScoreResponse,
    CreditScoreSchema,
    ESGScoreRequest,
    ESGScoreResponse,
    ESGScoreSchema,
    IndustriesResponse,
)
from loan_assessor.api.dependencies import get_credit_bureau_client, get_esg_provider_client, get_request_id
from loan_assessor.domain.exceptions import ProviderError
from loan_assessor.infrastructure.clients.credit_bureau import CreditBureauClient
from loan_assessor.infrastructure.clients.esg_provider import ESGProviderClient

router = APIRouter()


@router.post("/credit-score", response_model=CreditScoreResponse)
async def get_credit_score(
    request_body: CreditScoreRequest,
    request: Request,
    credit_client: CreditBureauClient = Depends(get_credit_bureau_client),
):
    """Fetch the bureau credit score (300-850) with factor breakdown"""
    try:
        response = await credit_client.fetch_credit_score(request_body.ssn)
    except ProviderError as e:
        logging.error(f"Provider error: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=503, detail="Credit bureau unavailable")

    return CreditScoreResponse(
        request_id=response.request_id,
        latency_ms=response.latency_ms,
        data=CreditScoreSchema.model_validate(response.credit_score),
    )


@router.post("/esg-score", response_model=ESGScoreResponse)
async def get_esg_score(
    request_body: ESGScoreRequest,
    request: Request,
    esg_client: ESGProviderClient = Depends(get_esg_provider_client),
):
    """Fetch the industry-adjusted ESG score (0-100) with E/S/G breakdown"""
    try:
        response = await esg_client.fetch_esg_score(request_body.company_name, request_body.industry_sector)
    except ProviderError as e:
        logging.error(f"Provider error: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=503, detail="ESG provider unavailable")

    return ESGScoreResponse(
        request_id=response.request_id,
        latency_ms=response.latency_ms,
        data=ESGScoreSchema.model_validate(response.esg_score),
    )


@router.get("/industries", response_model=IndustriesResponse)
def list_industries(esg_client: ESGProviderClient = Depends(get_esg_provider_client)):
    """Industries with a dedicated ESG profile; others score on the hash baseline"""
    return IndustriesResponse(industries=esg_client.list_industries())
