"""Package router — rule checks on ad-hoc selections plus saved-package CRUD.

Pattern:
  1. Rule endpoints (validate / price) call the selection API directly
  2. CRUD endpoints instantiate PackageService with (session, selection API)
  3. Responses attach pricing and validation computed from the live catalog
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from screening_api.core.pagination import PaginationParams
from screening_api.core.response import DataResponse, ListResponse, paginated
from screening_api.db.base import get_db
from screening_api.domain.package import Package
from screening_api.routers.v1.deps import get_selection_api
from screening_api.schemas.package import (
    PackageCreate,
    PackageDetailOut,
    PackageOut,
    PackageSummaryOut,
    PackageUpdate,
)
from screening_api.schemas.selection import (
    LineItemOut,
    PriceOut,
    PricingOut,
    SelectionRequest,
    ValidationOut,
)
from screening_api.services.package import PackageService
from screening_api.services.package_selection import PackageSelectionAPI
from screening_api.services.validation import ValidationResult

router = APIRouter(prefix="/packages", tags=["Packages"])


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------

def _detail(
    package: Package, api: PackageSelectionAPI, validation: ValidationResult | None = None,
) -> PackageDetailOut:
    quote = api.price(package.service_ids)
    return PackageDetailOut(
        package=PackageOut.model_validate(package),
        services=[LineItemOut.from_item(i) for i in quote.items],
        pricing=PricingOut.from_result(quote.pricing),
        validation=ValidationOut.from_result(validation or api.validate(package.service_ids)),
    )


# ------------------------------------------------------------------
# Rule endpoints
# ------------------------------------------------------------------

@router.post("/validate", response_model=ValidationOut)
async def validate_package(
    body: SelectionRequest,
    api: PackageSelectionAPI = Depends(get_selection_api),
):
    """Dependency / conflict errors and advisory warnings for a selection."""
    return ValidationOut.from_result(api.validate(body.service_ids))


@router.post("/price", response_model=PriceOut)
async def price_package(
    body: SelectionRequest,
    api: PackageSelectionAPI = Depends(get_selection_api),
):
    """Itemized prices plus subtotal, discounts and total for a selection."""
    return PriceOut.from_quote(api.price(body.service_ids))


# ------------------------------------------------------------------
# Saved packages
# ------------------------------------------------------------------

@router.get("", response_model=ListResponse[PackageSummaryOut])
async def list_packages(
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
    api: PackageSelectionAPI = Depends(get_selection_api),
):
    """List saved packages (paginated), each with its current pricing."""
    items, total = await PackageService(session, api).list_packages(pagination)
    summaries = [
        PackageSummaryOut(
            **PackageOut.model_validate(p).model_dump(),
            pricing=PricingOut.from_result(api.price(p.service_ids).pricing),
        )
        for p in items
    ]
    return paginated(summaries, total, pagination.page, pagination.limit)


@router.get("/recent", response_model=DataResponse[PackageDetailOut])
async def recent_package(
    session: AsyncSession = Depends(get_db),
    api: PackageSelectionAPI = Depends(get_selection_api),
):
    package = await PackageService(session, api).most_recent()
    return {"data": _detail(package, api)}


@router.get("/{package_id}", response_model=DataResponse[PackageDetailOut])
async def get_package(
    package_id: str,
    session: AsyncSession = Depends(get_db),
    api: PackageSelectionAPI = Depends(get_selection_api),
):
    package = await PackageService(session, api).get_package(package_id)
    return {"data": _detail(package, api)}


@router.post("", response_model=DataResponse[PackageDetailOut], status_code=status.HTTP_201_CREATED)
async def create_package(
    body: PackageCreate,
    session: AsyncSession = Depends(get_db),
    api: PackageSelectionAPI = Depends(get_selection_api),
):
    """Save a new package; rejected with 422 when the selection is invalid."""
    package, validation = await PackageService(session, api).create_package(body.name, body.service_ids)
    return {"data": _detail(package, api, validation)}


@router.put("/{package_id}", response_model=DataResponse[PackageDetailOut])
async def update_package(
    package_id: str,
    body: PackageUpdate,
    session: AsyncSession = Depends(get_db),
    api: PackageSelectionAPI = Depends(get_selection_api),
):
    package, validation = await PackageService(session, api).update_package(
        package_id, name=body.name, service_ids=body.service_ids,
    )
    return {"data": _detail(package, api, validation)}


@router.delete("/{package_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_package(
    package_id: str,
    session: AsyncSession = Depends(get_db),
    api: PackageSelectionAPI = Depends(get_selection_api),
):
    await PackageService(session, api).delete_package(package_id)
