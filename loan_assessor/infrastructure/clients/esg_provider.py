"""ESG provider client wrapping an ESG provider with simulated latency"""

from dataclasses import dataclass
from typing import List, Tuple
from loan_assessor.domain.exceptions import ProviderError
from loan_assessor.domain.models import ESGScore
from loan_assessor.domain.providers import ESGProvider, MockESGProvider, supported_industries
from loan_assessor.infrastructure.clients.latency import (
    default_latency_range,
    generate_request_id,
    simulate_network_latency,
)
from loan_assessor.infrastructure.observability.metrics import provider_latency_histogram


@dataclass(frozen=True)
class ESGProviderResponse:
    """ESG score plus request metadata"""

    esg_score: ESGScore
    request_id: str
    latency_ms: int


class ESGProviderClient:
    """Async client for the (mock) ESG rating provider"""

    def __init__(
        self,
        provider: ESGProvider | None = None,
        latency_range_ms: Tuple[int, int] | None = None,
    ):
        self.provider = provider or MockESGProvider()
        self.latency_range_ms = latency_range_ms or default_latency_range()

    async def fetch_esg_score(self, company: str, industry: str) -> ESGProviderResponse:
        """
        Fetch industry-adjusted ESG scores for a company.

        Raises:
            ProviderError: If the underlying provider fails
        """
        with provider_latency_histogram.labels(provider="esg").time():
            latency_ms = await simulate_network_latency(*self.latency_range_ms)

            try:
                esg_score = self.provider.get_esg_score(company, industry)
            except (TypeError, ValueError, AttributeError) as e:
                raise ProviderError(f"ESG provider could not score company: {e}") from e

        return ESGProviderResponse(
            esg_score=esg_score,
            request_id=generate_request_id("ESG"),
            latency_ms=latency_ms,
        )

    def list_industries(self) -> List[str]:
        return supported_industries()
