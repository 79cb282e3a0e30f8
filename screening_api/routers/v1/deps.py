"""FastAPI dependencies shared by the v1 routers."""

from fastapi import Request

from screening_api.services.catalog import CatalogStore
from screening_api.services.package_selection import PackageSelectionAPI


def get_catalog_store(request: Request) -> CatalogStore:
    return request.app.state.catalog_store


def get_selection_api(request: Request) -> PackageSelectionAPI:
    """Selection API pinned to one catalog generation for the whole request."""
    api = PackageSelectionAPI(request.app.state.catalog_store, request.app.state.pricing_rules)
    return api.bind()
