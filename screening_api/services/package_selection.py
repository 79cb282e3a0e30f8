"""PackageSelectionAPI — the one seam HTTP handlers (and any client-side
predictor) call for package rule checks.

Each call binds a single catalog snapshot, so a reload landing mid-call
cannot mix generations within one answer. Callers that combine several
calls into one response use :meth:`PackageSelectionAPI.bind` first.
Nothing is cached between requests.
"""

from __future__ import annotations

from pydantic import BaseModel

from screening_api.services.catalog import CatalogStore, ServiceCatalog
from screening_api.services.pricing import LineItem, PricingEngine, PricingResult
from screening_api.services.rules import DEFAULT_PRICING_RULES, PricingRules
from screening_api.services.validation import (
    CanAddResult,
    CanRemoveResult,
    DependencyConflictValidator,
    ValidationResult,
)


class PriceQuote(BaseModel):
    items: tuple[LineItem, ...]
    pricing: PricingResult

    model_config = {"frozen": True}


class PackageSelectionAPI:
    def __init__(self, catalog: CatalogStore | ServiceCatalog, rules: PricingRules = DEFAULT_PRICING_RULES):
        self._catalog = catalog
        self._rules = rules

    def _snapshot(self) -> ServiceCatalog:
        if isinstance(self._catalog, CatalogStore):
            return self._catalog.snapshot()
        return self._catalog

    def bind(self) -> "PackageSelectionAPI":
        """An API fixed to the current catalog generation, for multi-call answers."""
        return PackageSelectionAPI(self._snapshot(), self._rules)

    def _validator(self, catalog: ServiceCatalog) -> DependencyConflictValidator:
        return DependencyConflictValidator(catalog, self._rules)

    def validate(self, selection) -> ValidationResult:
        return self._validator(self._snapshot()).validate(selection)

    def price(self, selection) -> PriceQuote:
        engine = PricingEngine(self._snapshot(), self._rules)
        return PriceQuote(items=tuple(engine.itemize(selection)), pricing=engine.calculate(selection))

    def can_add(self, selection, candidate_id: str) -> CanAddResult:
        return self._validator(self._snapshot()).can_add(selection, candidate_id)

    def can_remove(self, selection, target_id: str) -> CanRemoveResult:
        return self._validator(self._snapshot()).can_remove(selection, target_id)
