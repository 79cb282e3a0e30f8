"""Service catalog router — listing, lookup, reload and add/remove checks."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from screening_api.core.exceptions import NotFoundError
from screening_api.routers.v1.deps import get_catalog_store, get_selection_api
from screening_api.schemas.catalog import CatalogReloadOut, ServiceListOut, ServiceOut
from screening_api.schemas.selection import CanAddOut, CanRemoveOut, CurrentSelectionRequest
from screening_api.services.catalog import CatalogStore
from screening_api.services.package_selection import PackageSelectionAPI


router = APIRouter(prefix="/services", tags=["Services"])


@router.get("", response_model=ServiceListOut)
async def list_services(store: CatalogStore = Depends(get_catalog_store)):
    """All services, flat and grouped by category."""
    return ServiceListOut.from_catalog(store.snapshot())


@router.post("/reload", response_model=CatalogReloadOut)
def reload_catalog(store: CatalogStore = Depends(get_catalog_store)):
    """Rebuild the catalog from its source and publish it atomically."""
    catalog = store.reload()
    return CatalogReloadOut(service_count=len(catalog), generation=store.generation)


@router.get("/{service_id}", response_model=ServiceOut)
async def get_service(service_id: str, store: CatalogStore = Depends(get_catalog_store)):
    service = store.get(service_id)
    if service is None:
        raise NotFoundError("Service", service_id)
    return ServiceOut.from_service(service)


@router.post("/{service_id}/can-add", response_model=CanAddOut, response_model_exclude_none=True)
async def can_add(
    service_id: str,
    body: CurrentSelectionRequest,
    api: PackageSelectionAPI = Depends(get_selection_api),
):
    """Whether ``service_id`` can join the current selection, and why not."""
    return CanAddOut.from_result(api.can_add(body.current_service_ids, service_id))


@router.post("/{service_id}/can-remove", response_model=CanRemoveOut, response_model_exclude_none=True)
async def can_remove(
    service_id: str,
    body: CurrentSelectionRequest,
    api: PackageSelectionAPI = Depends(get_selection_api),
):
    """Which other selected services would be removed along with ``service_id``."""
    return CanRemoveOut.from_result(api.can_remove(body.current_service_ids, service_id))
