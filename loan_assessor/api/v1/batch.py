"""POST /v1/batch and /v1/batch/csv - bulk borrower scoring"""

import csv
import io
import logging
from typing import Dict, List
from fastapi import APIRouter, HTTPException, Request

from loan_assessor.api.v1.schemas import BatchRequest, BatchResponse, BatchResultSchema, BatchSummarySchema
from loan_assessor.api.dependencies import get_request_id
from loan_assessor.config import settings
from loan_assessor.domain.batch import process_batch_async
from loan_assessor.domain.exceptions import InvalidCSVError
from loan_assessor.domain.models import BatchOutcome
from loan_assessor.domain.validation import validate_csv_data
from loan_assessor.infrastructure.observability.metrics import record_batch
from loan_assessor.infrastructure.observability.logging import log_batch_completed

router = APIRouter()


def parse_csv_rows(text: str) -> List[Dict[str, str]]:
    """
    Parse CSV text into row dicts keyed by lower-cased, trimmed headers.

    Raises:
        InvalidCSVError: If there are no data rows or required columns are missing
    """
    reader = csv.DictReader(io.StringIO(text.lstrip("\ufeff")))
    rows = [
        {key.lower().strip(): (value or "").strip() for key, value in row.items() if key is not None}
        for row in reader
        if any(isinstance(value, str) and value.strip() for value in row.values())
    ]

    validation = validate_csv_data(rows)
    if not validation.is_valid:
        raise InvalidCSVError(validation.error_message, validation.missing_columns)

    return rows


async def _run_batch(rows: List[Dict[str, str]], request_id: str) -> BatchResponse:
    outcome: BatchOutcome = await process_batch_async(rows, chunk_size=settings.batch_chunk_size)

    record_batch(outcome.summary)
    log_batch_completed(request_id, outcome.summary)

    return BatchResponse(
        results=[BatchResultSchema.model_validate(result) for result in outcome.results],
        summary=BatchSummarySchema.model_validate(outcome.summary),
    )


@router.post("/batch", response_model=BatchResponse)
async def create_batch(request_body: BatchRequest, request: Request):
    """
    Score a list of borrower rows.

    Every row yields a result; rows that fail are reported with an error
    instead of aborting the batch.
    """
    request_id = get_request_id(request)
    rows = [row.model_dump() for row in request_body.rows]
    return await _run_batch(rows, request_id)


@router.post("/batch/csv", response_model=BatchResponse)
async def create_batch_from_csv(request: Request):
    """
    Score a raw CSV upload (request body is the file contents).

    Required columns: name, ssn, annual_income, total_assets, company, industry
    """
    request_id = get_request_id(request)

    try:
        body = await request.body()
        rows = parse_csv_rows(body.decode("utf-8"))
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="CSV must be UTF-8 encoded")
    except InvalidCSVError as e:
        logging.warning(f"Invalid CSV: {e}", extra={"request_id": request_id})
        raise HTTPException(
            status_code=422,
            detail={"message": str(e), "missing_columns": e.missing_columns},
        )

    return await _run_batch(rows, request_id)
