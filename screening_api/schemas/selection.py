"""Request/response bodies for the package rule endpoints."""

from __future__ import annotations

from pydantic import Field

from screening_api.schemas.common import APIModel
from screening_api.services.money import cents_to_amount
from screening_api.services.package_selection import PriceQuote
from screening_api.services.pricing import Discount, LineItem, PricingResult
from screening_api.services.validation import (
    CanAddResult,
    CanRemoveResult,
    ValidationIssue,
    ValidationResult,
)

# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class SelectionRequest(APIModel):
    service_ids: list[str] = Field(default_factory=list)


class CurrentSelectionRequest(APIModel):
    current_service_ids: list[str] = Field(default_factory=list)

# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

class ValidationErrorOut(APIModel):
    type: str
    service_id: str
    message: str
    required_service_id: str

    @classmethod
    def from_issue(cls, issue: ValidationIssue) -> "ValidationErrorOut":
        return cls(
            type=issue.kind,
            service_id=issue.subject_service_id,
            message=issue.message,
            required_service_id=issue.related_service_id,
        )


class ValidationOut(APIModel):
    valid: bool
    errors: list[ValidationErrorOut] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: ValidationResult) -> "ValidationOut":
        return cls(
            valid=result.valid,
            errors=[ValidationErrorOut.from_issue(e) for e in result.errors],
            warnings=list(result.warnings),
        )

# ---------------------------------------------------------------------------
# Pricing
# ---------------------------------------------------------------------------

class LineItemOut(APIModel):
    id: str
    name: str
    price: float

    @classmethod
    def from_item(cls, item: LineItem) -> "LineItemOut":
        return cls(id=item.id, name=item.name, price=cents_to_amount(item.price_cents))


class DiscountOut(APIModel):
    type: str
    name: str
    amount: float

    @classmethod
    def from_discount(cls, discount: Discount) -> "DiscountOut":
        return cls(type=discount.kind, name=discount.label, amount=cents_to_amount(discount.amount_cents))


class PricingOut(APIModel):
    subtotal: float
    discounts: list[DiscountOut] = Field(default_factory=list)
    total_discount: float
    total: float
    service_count: int

    @classmethod
    def from_result(cls, result: PricingResult) -> "PricingOut":
        return cls(
            subtotal=cents_to_amount(result.subtotal_cents),
            discounts=[DiscountOut.from_discount(d) for d in result.discounts],
            total_discount=cents_to_amount(result.total_discount_cents),
            total=cents_to_amount(result.total_cents),
            service_count=result.resolved_service_count,
        )


class PriceOut(APIModel):
    services: list[LineItemOut]
    pricing: PricingOut

    @classmethod
    def from_quote(cls, quote: PriceQuote) -> "PriceOut":
        return cls(
            services=[LineItemOut.from_item(i) for i in quote.items],
            pricing=PricingOut.from_result(quote.pricing),
        )

# ---------------------------------------------------------------------------
# can-add / can-remove
# ---------------------------------------------------------------------------

class CanAddOut(APIModel):
    allowed: bool
    reason: str | None = None
    missing_dependencies: list[str] | None = None
    conflicting_services: list[str] | None = None

    @classmethod
    def from_result(cls, result: CanAddResult) -> "CanAddOut":
        return cls.model_validate(result.model_dump())


class CanRemoveOut(APIModel):
    allowed: bool
    cascade_remove: list[str] = Field(default_factory=list)
    warning: str | None = None

    @classmethod
    def from_result(cls, result: CanRemoveResult) -> "CanRemoveOut":
        return cls.model_validate(result.model_dump())
