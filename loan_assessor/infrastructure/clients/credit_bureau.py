"""Credit bureau client wrapping a credit provider with simulated latency"""

from dataclasses import dataclass
from typing import Tuple
from loan_assessor.domain.exceptions import ProviderError
from loan_assessor.domain.models import CreditScore
from loan_assessor.domain.providers import CreditProvider, MockCreditBureau
from loan_assessor.infrastructure.clients.latency import (
    default_latency_range,
    generate_request_id,
    simulate_network_latency,
)
from loan_assessor.infrastructure.observability.metrics import provider_latency_histogram


@dataclass(frozen=True)
class CreditBureauResponse:
    """Credit score plus request metadata"""

    credit_score: CreditScore
    request_id: str
    latency_ms: int


class CreditBureauClient:
    """Async client for the (mock) credit bureau"""

    def __init__(
        self,
        provider: CreditProvider | None = None,
        latency_range_ms: Tuple[int, int] | None = None,
    ):
        self.provider = provider or MockCreditBureau()
        self.latency_range_ms = latency_range_ms or default_latency_range()

    async def fetch_credit_score(self, ssn: str) -> CreditBureauResponse:
        """
        Fetch the credit score for an SSN.

        Raises:
            ProviderError: If the underlying provider fails
        """
        with provider_latency_histogram.labels(provider="credit_bureau").time():
            latency_ms = await simulate_network_latency(*self.latency_range_ms)

            try:
                credit_score = self.provider.get_credit_score(ssn)
            except (TypeError, ValueError, AttributeError) as e:
                raise ProviderError(f"Credit bureau could not score applicant: {e}") from e

        return CreditBureauResponse(
            credit_score=credit_score,
            request_id=generate_request_id("CB"),
            latency_ms=latency_ms,
        )
