"""Pytest fixtures for testing"""

import pytest
from datetime import datetime, timezone
from fastapi.testclient import TestClient
from loan_assessor.api.main import create_app
from loan_assessor.api.dependencies import get_credit_bureau_client, get_esg_provider_client
from loan_assessor.domain.models import BorrowerRecord
from loan_assessor.infrastructure.clients.credit_bureau import CreditBureauClient
from loan_assessor.infrastructure.clients.esg_provider import ESGProviderClient

# Providers answer immediately in tests
NO_LATENCY = (0, 0)


@pytest.fixture
def credit_client() -> CreditBureauClient:
    return CreditBureauClient(latency_range_ms=NO_LATENCY)


@pytest.fixture
def esg_client() -> ESGProviderClient:
    return ESGProviderClient(latency_range_ms=NO_LATENCY)


@pytest.fixture
def client(credit_client: CreditBureauClient, esg_client: ESGProviderClient) -> TestClient:
    """Create FastAPI test client with zero-latency provider clients"""
    app = create_app()
    app.dependency_overrides[get_credit_bureau_client] = lambda: credit_client
    app.dependency_overrides[get_esg_provider_client] = lambda: esg_client
    return TestClient(app)


@pytest.fixture
def borrower() -> BorrowerRecord:
    """Tech executive scoring 831 (APPROVED)"""
    return BorrowerRecord(
        full_name="John Smith",
        ssn="111-22-3333",
        annual_income=200000,
        total_assets=1200000,
        company_name="TechVenture Solutions",
        industry_sector="Technology",
    )


@pytest.fixture
def make_row():
    """Factory for batch rows with overridable fields"""

    def _make_row(**overrides) -> dict:
        row = {
            "name": "John Doe",
            "ssn": "123-45-6789",
            "annual_income": "100000",
            "total_assets": "500000",
            "company": "Tech Corp",
            "industry": "Technology",
        }
        row.update(overrides)
        return row

    return _make_row


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 14, 9, 30, tzinfo=timezone.utc)
