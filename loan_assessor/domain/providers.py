"""Deterministic mock credit bureau and ESG provider"""

import re
from datetime import datetime, timezone
from typing import Dict, List, Protocol, Tuple

from loan_assessor.domain.models import (
    CreditAccounts,
    CreditFactors,
    CreditScore,
    ESGBreakdown,
    ESGScore,
)
from loan_assessor.utils.numbers import clamp, round_int

CREDIT_SOURCE = "MockCreditBureau"
ESG_SOURCE = "MockESGProvider"

# (environmental, social, governance) additive modifiers per industry
INDUSTRY_ESG_PROFILES: Dict[str, Tuple[int, int, int]] = {
    "technology": (10, 5, 15),
    "healthcare": (5, 20, 10),
    "finance": (0, 5, 20),
    "manufacturing": (-15, 0, 5),
    "energy": (-20, 0, 10),
    "retail": (-5, 10, 5),
    "agriculture": (-10, 5, 0),
    "construction": (-10, 5, 5),
    "transportation": (-15, 5, 5),
    "hospitality": (-5, 15, 5),
}

_NEUTRAL_PROFILE = (0, 0, 0)


class CreditProvider(Protocol):
    """Anything that can produce a credit score for an SSN"""

    def get_credit_score(self, ssn: str) -> CreditScore: ...


class ESGProvider(Protocol):
    """Anything that can produce an ESG score for a company"""

    def get_esg_score(self, company: str, industry: str) -> ESGScore: ...


def hash_identity(text: str) -> int:
    """
    Rolling 31-multiplier string hash, wrapped to signed 32 bits per step.

    Characters are consumed as UTF-16 code units, so text outside the Basic
    Multilingual Plane contributes its surrogate pair.

    Returns the absolute value of the final 32-bit result so it can be used
    directly as a non-negative seed.
    """
    encoded = text.encode("utf-16-le", "surrogatepass")
    value = 0
    for i in range(0, len(encoded), 2):
        unit = encoded[i] | (encoded[i + 1] << 8)
        value = ((value << 5) - value + unit) & 0xFFFFFFFF
    if value & 0x80000000:
        value -= 1 << 32
    return abs(value)


def _ssn_hash(ssn: str) -> int:
    return hash_identity(re.sub(r"\D", "", ssn))


def _company_hash(company: str) -> int:
    return hash_identity(company.lower().strip())


def get_credit_score_sync(ssn: str) -> int:
    """Deterministic credit score in [300, 850] for an SSN"""
    return 300 + _ssn_hash(ssn) % 551


def _credit_factors(seed: int) -> CreditFactors:
    return CreditFactors(
        payment_history=50 + (seed >> 4) % 51,
        credit_utilization=(seed >> 8) % 101,
        credit_age=1 + (seed >> 12) % 30,
        credit_mix=1 + (seed >> 16) % 10,
        new_credit=(seed >> 20) % 6,
    )


def _credit_accounts(seed: int) -> CreditAccounts:
    return CreditAccounts(
        total=3 + (seed >> 6) % 15,
        delinquent=(seed >> 10) % 3,
        collections=(seed >> 14) % 2,
    )


def esg_breakdown(company: str, industry: str) -> ESGBreakdown:
    """
    Hash-derived E/S/G values shifted by the industry profile.

    Base values fall in [40, 80]; the industry modifier is added and each
    component is clamped to [0, 100]. Unknown industries use no modifier.
    """
    seed = _company_hash(company)
    env_mod, soc_mod, gov_mod = INDUSTRY_ESG_PROFILES.get(industry.lower().strip(), _NEUTRAL_PROFILE)

    return ESGBreakdown(
        environmental=int(clamp(40 + seed % 41 + env_mod, 0, 100)),
        social=int(clamp(40 + (seed >> 8) % 41 + soc_mod, 0, 100)),
        governance=int(clamp(40 + (seed >> 16) % 41 + gov_mod, 0, 100)),
    )


def overall_esg(breakdown: ESGBreakdown) -> int:
    """Unweighted mean of the three ESG components"""
    return round_int((breakdown.environmental + breakdown.social + breakdown.governance) / 3)


def get_esg_score_sync(company: str, industry: str) -> int:
    """Deterministic overall ESG score in [0, 100]"""
    return overall_esg(esg_breakdown(company, industry))


def carbon_footprint(environmental: int) -> str:
    if environmental >= 70:
        return "low"
    if environmental >= 40:
        return "medium"
    return "high"


def compliance_status(governance: int) -> str:
    if governance >= 60:
        return "compliant"
    if governance >= 40:
        return "warning"
    return "violation"


def industry_rank(company: str) -> Tuple[int, int]:
    """(rank, total companies) within the industry, both hash-derived"""
    seed = _company_hash(company)
    total = 50 + seed % 451
    return 1 + seed % total, total


def supported_industries() -> List[str]:
    return list(INDUSTRY_ESG_PROFILES)


class MockCreditBureau:
    """Credit provider backed by the SSN hash"""

    def get_credit_score(self, ssn: str) -> CreditScore:
        seed = _ssn_hash(ssn)
        return CreditScore(
            score=300 + seed % 551,
            factors=_credit_factors(seed),
            accounts=_credit_accounts(seed),
            source=CREDIT_SOURCE,
            fetched_at=datetime.now(timezone.utc),
        )


class MockESGProvider:
    """ESG provider backed by the company-name hash and industry table"""

    def get_esg_score(self, company: str, industry: str) -> ESGScore:
        breakdown = esg_breakdown(company, industry)
        rank, total = industry_rank(company)
        return ESGScore(
            total=overall_esg(breakdown),
            breakdown=breakdown,
            industry_rank=rank,
            industry_total=total,
            carbon_footprint=carbon_footprint(breakdown.environmental),
            compliance_status=compliance_status(breakdown.governance),
            source=ESG_SOURCE,
            fetched_at=datetime.now(timezone.utc),
        )
