"""Discount policy data: volume tiers and fixed-amount bundles.

These are plain configuration records handed to the validator and the
pricing engine at construction. ``DEFAULT_PRICING_RULES`` mirrors the
standard price list; deployments can override it with a JSON file.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from screening_api.core.exceptions import CatalogLoadError

logger = logging.getLogger(__name__)


class VolumeTier(BaseModel):
    min_count: int = Field(ge=1)
    pct: int = Field(ge=0, le=100)

    model_config = {"frozen": True}


class BundleRule(BaseModel):
    """A fixed discount granted when every id in ``service_ids`` is selected."""

    key: str
    name: str
    description: str
    service_ids: tuple[str, ...]
    amount_cents: int = Field(ge=0)
    # Recommendation warning when at least this many members are selected
    recommend_from: int = 1
    member_noun: str = "service(s)"

    model_config = {"frozen": True}

    @property
    def label(self) -> str:
        return f"{self.name} Discount ({self.description})"

    @field_validator("service_ids")
    @classmethod
    def _non_empty(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("a bundle needs at least one service id")
        return tuple(dict.fromkeys(value))


class PricingRules(BaseModel):
    volume_tiers: tuple[VolumeTier, ...] = ()
    bundles: tuple[BundleRule, ...] = ()

    model_config = {"frozen": True}

    @field_validator("volume_tiers")
    @classmethod
    def _highest_first(cls, value: tuple[VolumeTier, ...]) -> tuple[VolumeTier, ...]:
        return tuple(sorted(value, key=lambda t: t.min_count, reverse=True))


DEFAULT_PRICING_RULES = PricingRules(
    volume_tiers=(
        VolumeTier(min_count=8, pct=15),
        VolumeTier(min_count=5, pct=10),
    ),
    bundles=(
        BundleRule(
            key="criminal",
            name="Criminal Bundle",
            description="all 4 criminal searches",
            service_ids=("state_criminal", "county_criminal", "federal_criminal", "national_criminal"),
            amount_cents=2000,
            recommend_from=2,
            member_noun="criminal search(es)",
        ),
        BundleRule(
            key="verification",
            name="Verification Bundle",
            description="all 3 verification services",
            service_ids=("employment_verification", "education_verification", "professional_license"),
            amount_cents=1500,
            recommend_from=1,
            member_noun="verification service(s)",
        ),
    ),
)


def load_pricing_rules(path: str | None) -> PricingRules:
    """Read pricing rules from a JSON file, or return the defaults when ``path`` is empty."""
    if not path:
        return DEFAULT_PRICING_RULES
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        rules = PricingRules.model_validate(raw)
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        raise CatalogLoadError(f"Invalid pricing rules file '{path}': {exc}") from exc
    logger.info(
        "Loaded pricing rules from %s: %d volume tiers, %d bundles",
        path, len(rules.volume_tiers), len(rules.bundles),
    )
    return rules
