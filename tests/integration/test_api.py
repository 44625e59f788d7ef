"""Integration tests for API endpoints"""

import json
import pytest
from unittest.mock import AsyncMock, patch
from fastapi.testclient import TestClient
from loan_assessor.domain.exceptions import ProviderError


@pytest.fixture
def assessment_payload() -> dict:
    """Tech executive expected to be approved"""
    return {
        "full_name": "John Smith",
        "ssn": "111-22-3333",
        "annual_income": 200000,
        "total_assets": 1200000,
        "company_name": "TechVenture Solutions",
        "industry_sector": "Technology",
    }


CSV_HEADER = "name,ssn,annual_income,total_assets,company,industry\n"


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "loan-assessor"}


def test_request_id_header(client: TestClient):
    assert client.get("/health").headers["X-Request-ID"]
    echoed = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert echoed.headers["X-Request-ID"] == "req-123"


def test_assessment_endpoint_approval(client: TestClient, assessment_payload: dict):
    """Test POST /v1/assessment with an approved borrower"""
    response = client.post("/v1/assessment", json=assessment_payload)

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "complete"
    assert data["borrower_name"] == "John Smith"
    assert data["credit_score"]["score"] == 778
    assert data["esg_score"]["total"] == 76
    assert data["income_assets_score"]["score"] == 85
    assert data["composite_score"]["total"] == 831
    assert data["composite_score"]["decision"] == "APPROVED"
    assert data["loan_terms"]["principal_amount"] == 600000
    assert data["loan_terms"]["term_months"] == 360
    assert data["loan_terms"]["monthly_payment"] == pytest.approx(3290.96)
    assert data["audit_trail"][0]["action"] == "Assessment Started"
    assert data["audit_trail"][-1]["action"] == "Assessment Completed"


def test_assessment_endpoint_review_without_terms(client: TestClient):
    response = client.post(
        "/v1/assessment",
        json={
            "full_name": "Jane Doe",
            "ssn": "222-33-4444",
            "annual_income": 95000,
            "total_assets": 320000,
            "company_name": "HealthFirst Medical Group",
            "industry_sector": "Healthcare",
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["composite_score"]["decision"] == "REVIEW"
    assert data["loan_terms"] is None


def test_assessment_endpoint_invalid_borrower(client: TestClient, assessment_payload: dict):
    """Field validation failures come back as a per-field map"""
    assessment_payload.update(ssn="12-34", annual_income=0)

    response = client.post("/v1/assessment", json=assessment_payload)

    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["ssn"] == "SSN must be 9 digits"
    assert detail["annual_income"] == "Annual income must be positive"


def test_assessment_endpoint_missing_field(client: TestClient, assessment_payload: dict):
    del assessment_payload["company_name"]
    assert client.post("/v1/assessment", json=assessment_payload).status_code == 422


@patch("loan_assessor.infrastructure.clients.esg_provider.ESGProviderClient.fetch_esg_score")
def test_assessment_endpoint_provider_failure(
    mock_esg: AsyncMock,
    client: TestClient,
    assessment_payload: dict,
):
    """Test POST /v1/assessment when a provider is down"""
    mock_esg.side_effect = ProviderError("ESG provider timeout")

    response = client.post("/v1/assessment", json=assessment_payload)

    assert response.status_code == 503


def test_batch_endpoint(client: TestClient):
    """Test POST /v1/batch completeness with a failing row"""
    rows = [
        {
            "name": "John Doe",
            "ssn": "123-45-6789",
            "annual_income": "100000",
            "total_assets": "500000",
            "company": "Tech Corp",
            "industry": "Technology",
        },
        {
            "name": "No Numbers",
            "ssn": "123-45-6789",
            "annual_income": "n/a",
            "total_assets": "",
            "company": "Tech Corp",
            "industry": "Technology",
        },
    ]

    response = client.post("/v1/batch", json={"rows": rows})

    assert response.status_code == 200
    data = response.json()
    assert [r["row_index"] for r in data["results"]] == [0, 1]
    assert data["results"][0]["composite_score"] == 794
    assert data["results"][0]["decision"] == "APPROVED"
    assert data["results"][1]["decision"] == "REVIEW"
    assert data["results"][1]["error"] is None
    summary = data["summary"]
    assert summary["total_processed"] == 2
    assert summary["approved_count"] + summary["review_count"] + summary["rejected_count"] + summary["error_count"] == 2


def test_batch_endpoint_empty(client: TestClient):
    response = client.post("/v1/batch", json={"rows": []})

    assert response.status_code == 200
    data = response.json()
    assert data["results"] == []
    assert data["summary"]["total_processed"] == 0
    assert data["summary"]["average_time_ms"] == 0


def test_batch_csv_endpoint(client: TestClient):
    body = (
        "Name, SSN ,Annual_Income,Total_Assets,Company,Industry\n"
        "John Doe,123-45-6789,100000,500000,Tech Corp,Technology\n"
        "Bob Wilson,333-44-5555,55000,45000,Industrial Works LLC,Manufacturing\n"
        "\n"
    )

    response = client.post("/v1/batch/csv", content=body, headers={"Content-Type": "text/csv"})

    assert response.status_code == 200
    data = response.json()
    assert data["summary"]["total_processed"] == 2
    assert data["results"][0]["borrower_name"] == "John Doe"
    assert data["results"][1]["decision"] == "REJECTED"


def test_batch_csv_missing_columns(client: TestClient):
    response = client.post(
        "/v1/batch/csv",
        content="name,ssn\nJohn,123456789\n",
        headers={"Content-Type": "text/csv"},
    )

    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["missing_columns"] == ["annual_income", "total_assets", "company", "industry"]


def test_batch_csv_no_rows(client: TestClient):
    response = client.post("/v1/batch/csv", content=CSV_HEADER, headers={"Content-Type": "text/csv"})

    assert response.status_code == 422
    assert response.json()["detail"]["message"] == "CSV file is empty or contains no data rows"


def test_credit_score_endpoint(client: TestClient):
    response = client.post("/v1/credit-score", json={"ssn": "111-22-3333"})

    assert response.status_code == 200
    data = response.json()
    assert data["data"]["score"] == 778
    assert data["data"]["source"] == "MockCreditBureau"
    assert data["request_id"].startswith("CB-")


def test_esg_score_endpoint(client: TestClient):
    response = client.post("/v1/esg-score", json={"company_name": "Tech Corp", "industry_sector": "Energy"})

    assert response.status_code == 200
    data = response.json()
    assert data["data"]["total"] == 52
    assert data["request_id"].startswith("ESG-")


def test_industries_endpoint(client: TestClient):
    response = client.get("/v1/industries")

    assert response.status_code == 200
    assert "technology" in response.json()["industries"]


def test_metrics_endpoint(client: TestClient, assessment_payload: dict):
    """Test Prometheus metrics endpoint after a decision"""
    client.post("/v1/assessment", json=assessment_payload)

    response = client.get("/metrics")

    assert response.status_code == 200
    assert "loan_assessor_decision_total" in response.text
    assert "provider_latency_seconds" in response.text


@pytest.mark.parametrize("field", ["annual_income", "total_assets", "estimated_debt"])
def test_assessment_endpoint_rejects_overflowing_amount(client: TestClient, assessment_payload: dict, field: str):
    """Amounts that decode to infinity are refused before scoring"""
    body = json.dumps(assessment_payload)[:-1] + f', "{field}": 1e400}}'

    response = client.post("/v1/assessment", content=body, headers={"Content-Type": "application/json"})

    assert response.status_code == 422


def test_assessment_endpoint_rejects_amount_above_cap(client: TestClient, assessment_payload: dict):
    assessment_payload["annual_income"] = 1e308

    response = client.post("/v1/assessment", json=assessment_payload)

    assert response.status_code == 422


def test_dashboard_metrics_endpoint(client: TestClient, assessment_payload: dict):
    """Test POST /v1/dashboard/metrics over assessments returned by the API"""
    approved = client.post("/v1/assessment", json=assessment_payload).json()
    review = client.post(
        "/v1/assessment",
        json={
            "full_name": "Jane Doe",
            "ssn": "222-33-4444",
            "annual_income": 95000,
            "total_assets": 320000,
            "company_name": "HealthFirst Medical Group",
            "industry_sector": "Healthcare",
        },
    ).json()
    last_year = dict(approved, created_at="2020-01-01T12:00:00+00:00")

    response = client.post(
        "/v1/dashboard/metrics",
        json={"assessments": [approved, review, last_year], "today": approved["created_at"][:10]},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["today_assessments"] == 2
    assert data["approval_rate"] == 50.0
    assert 0 <= data["time_saved_percent"] <= 100


def test_dashboard_metrics_endpoint_empty(client: TestClient):
    response = client.post("/v1/dashboard/metrics", json={"assessments": []})

    assert response.status_code == 200
    assert response.json() == {
        "today_assessments": 0,
        "approval_rate": 0.0,
        "average_time_seconds": 0.0,
        "time_saved_percent": 100.0,
    }
