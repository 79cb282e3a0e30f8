"""Service catalog response models."""

from __future__ import annotations

from screening_api.schemas.common import APIModel
from screening_api.services.catalog import Service, ServiceCatalog
from screening_api.services.money import cents_to_amount


class ServiceOut(APIModel):
    id: str
    name: str
    base_price: float
    category: str
    dependencies: list[str]
    conflicts: list[str]

    @classmethod
    def from_service(cls, service: Service) -> "ServiceOut":
        return cls(
            id=service.id,
            name=service.name,
            base_price=cents_to_amount(service.base_price_cents),
            category=service.category.value,
            dependencies=list(service.dependencies),
            conflicts=list(service.conflicts),
        )


class ServiceListOut(APIModel):
    services: list[ServiceOut]
    by_category: dict[str, list[ServiceOut]]

    @classmethod
    def from_catalog(cls, catalog: ServiceCatalog) -> "ServiceListOut":
        return cls(
            services=[ServiceOut.from_service(s) for s in catalog.all()],
            by_category={
                category.value: [ServiceOut.from_service(s) for s in services]
                for category, services in catalog.by_category().items()
            },
        )


class CatalogReloadOut(APIModel):
    service_count: int
    generation: int
