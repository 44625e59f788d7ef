"""Simulated network latency for the mock provider clients"""

import asyncio
import random
import time
import uuid
from typing import Tuple
from loan_assessor.config import settings


def default_latency_range() -> Tuple[int, int]:
    """Configured (min_ms, max_ms), or (0, 0) when simulation is off"""
    if not settings.simulate_provider_latency:
        return 0, 0
    return settings.provider_latency_min_ms, settings.provider_latency_max_ms


async def simulate_network_latency(min_ms: int, max_ms: int) -> int:
    """
    Sleep for a random whole number of milliseconds in [min_ms, max_ms].

    Returns the delay actually chosen. The delay never influences any score.
    """
    delay_ms = random.randint(min_ms, max_ms) if max_ms > 0 else 0
    if delay_ms:
        await asyncio.sleep(delay_ms / 1000)
    return delay_ms


def generate_request_id(prefix: str) -> str:
    """Provider-style request id, e.g. CB-1718000000000-a1b2c3d"""
    return f"{prefix}-{int(time.time() * 1000)}-{uuid.uuid4().hex[:7]}"
