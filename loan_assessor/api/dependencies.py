"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from loan_assessor.infrastructure.clients.credit_bureau import CreditBureauClient
from loan_assessor.infrastructure.clients.esg_provider import ESGProviderClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_credit_bureau_client() -> CreditBureauClient:
    """Provide credit bureau client instance"""
    return CreditBureauClient()


def get_esg_provider_client() -> ESGProviderClient:
    """Provide ESG provider client instance"""
    return ESGProviderClient()
