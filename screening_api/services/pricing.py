"""Package pricing with stacked volume and bundle discounts.

All figures are integer cents. The volume tier is sized off the distinct,
catalog-resolved service count; bundle membership is a presence test on the
requested ids.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from screening_api.services.catalog import ServiceCatalog
from screening_api.services.money import percent_of
from screening_api.services.rules import DEFAULT_PRICING_RULES, PricingRules
from screening_api.services.selection import coerce_selection, distinct


class LineItem(BaseModel):
    id: str
    name: str
    price_cents: int

    model_config = {"frozen": True}


class Discount(BaseModel):
    kind: Literal["volume", "bundle"]
    label: str
    amount_cents: int

    model_config = {"frozen": True}


class PricingResult(BaseModel):
    subtotal_cents: int = 0
    discounts: tuple[Discount, ...] = ()
    total_discount_cents: int = 0
    total_cents: int = 0
    resolved_service_count: int = 0

    model_config = {"frozen": True}


class PricingEngine:
    def __init__(self, catalog: ServiceCatalog, rules: PricingRules = DEFAULT_PRICING_RULES):
        self._catalog = catalog
        self._rules = rules

    def itemize(self, selection) -> list[LineItem]:
        """Line items in the caller's order; unknown and repeated ids are skipped."""
        return [
            LineItem(id=s.id, name=s.name, price_cents=s.base_price_cents)
            for s in self._catalog.get_many(distinct(coerce_selection(selection)))
        ]

    def calculate(self, selection) -> PricingResult:
        requested = distinct(coerce_selection(selection))
        services = self._catalog.get_many(requested)
        subtotal = sum(s.base_price_cents for s in services)

        discounts: list[Discount] = []
        volume = self._volume_discount(len(services), subtotal)
        if volume:
            discounts.append(volume)
        discounts.extend(self._bundle_discounts(set(requested)))

        total_discount = sum(d.amount_cents for d in discounts)
        return PricingResult(
            subtotal_cents=subtotal,
            discounts=tuple(discounts),
            total_discount_cents=total_discount,
            total_cents=max(0, subtotal - total_discount),
            resolved_service_count=len(services),
        )

    def _volume_discount(self, count: int, subtotal: int) -> Discount | None:
        # Tiers are kept highest-first; first match wins
        for tier in self._rules.volume_tiers:
            if count >= tier.min_count:
                return Discount(
                    kind="volume",
                    label=f"Volume Discount ({tier.pct}% for {tier.min_count}+ services)",
                    amount_cents=percent_of(subtotal, tier.pct),
                )
        return None

    def _bundle_discounts(self, present: set[str]) -> list[Discount]:
        return [
            Discount(kind="bundle", label=bundle.label, amount_cents=bundle.amount_cents)
            for bundle in self._rules.bundles
            if all(sid in present for sid in bundle.service_ids)
        ]
