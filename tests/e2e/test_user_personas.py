"""
E2E tests for the five demo borrower personas.

Each persona goes through POST /v1/assessment and the same people are then
submitted together as a CSV batch; both paths must agree.

Personas:
- John Smith:  tech executive, strong assets        -> 831 APPROVED
- Jane Doe:    healthcare, moderate credit          -> 603 REVIEW
- Bob Wilson:  manufacturing, thin assets           -> 372 REJECTED
- Alice Brown: finance executive, mid-range bureau  -> 714 REVIEW
- Carol Davis: energy sector ESG drag               -> 733 REVIEW
"""

import pytest
from fastapi.testclient import TestClient

PERSONAS = [
    ("John Smith", "111-22-3333", 200000, 1200000, "TechVenture Solutions", "Technology", 831, "APPROVED"),
    ("Jane Doe", "222-33-4444", 95000, 320000, "HealthFirst Medical Group", "Healthcare", 603, "REVIEW"),
    ("Bob Wilson", "333-44-5555", 55000, 45000, "Industrial Works LLC", "Manufacturing", 372, "REJECTED"),
    ("Alice Brown", "444-55-6666", 250000, 1800000, "Capital Finance Partners", "Finance", 714, "REVIEW"),
    ("Carol Davis", "555-66-7777", 120000, 450000, "GreenEnergy Solutions", "Energy", 733, "REVIEW"),
]


@pytest.mark.integration
@pytest.mark.parametrize("name,ssn,income,assets,company,industry,expected_score,expected_decision", PERSONAS)
def test_persona_assessment(
    client: TestClient,
    name,
    ssn,
    income,
    assets,
    company,
    industry,
    expected_score,
    expected_decision,
):
    response = client.post(
        "/v1/assessment",
        json={
            "full_name": name,
            "ssn": ssn,
            "annual_income": income,
            "total_assets": assets,
            "company_name": company,
            "industry_sector": industry,
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["composite_score"]["total"] == expected_score
    assert data["composite_score"]["decision"] == expected_decision

    # Terms exist exactly when approved
    if expected_decision == "APPROVED":
        assert data["loan_terms"]["principal_amount"] > 0
    else:
        assert data["loan_terms"] is None


@pytest.mark.integration
def test_personas_batch_agrees_with_single_path(client: TestClient):
    lines = ["name,ssn,annual_income,total_assets,company,industry"]
    lines += [f"{p[0]},{p[1]},{p[2]},{p[3]},{p[4]},{p[5]}" for p in PERSONAS]

    response = client.post("/v1/batch/csv", content="\n".join(lines), headers={"Content-Type": "text/csv"})

    assert response.status_code == 200
    data = response.json()
    assert [(r["composite_score"], r["decision"]) for r in data["results"]] == [(p[6], p[7]) for p in PERSONAS]
    assert data["summary"]["approved_count"] == 1
    assert data["summary"]["review_count"] == 3
    assert data["summary"]["rejected_count"] == 1
    assert data["summary"]["error_count"] == 0
    assert data["summary"]["total_processed"] == 5
