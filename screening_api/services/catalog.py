"""Service catalog: an immutable id-keyed index of screening services.

``ServiceCatalog`` is one fully built generation. ``CatalogStore`` owns the
published generation and swaps it atomically on reload, so a caller that took
a snapshot keeps evaluating against that snapshot even if a reload lands
mid-request.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any, Protocol

from pydantic import BaseModel, Field

from screening_api.core.exceptions import CatalogLoadError
from screening_api.services.money import to_cents

logger = logging.getLogger(__name__)


class Category(str, Enum):
    CRIMINAL = "criminal"
    VERIFICATION = "verification"
    DRIVING = "driving"
    DRUG_SCREENING = "drug_screening"


class Service(BaseModel):
    """One screening service definition."""

    id: str
    name: str
    base_price_cents: int = Field(ge=0)
    category: Category
    dependencies: tuple[str, ...] = ()
    conflicts: tuple[str, ...] = ()

    model_config = {"frozen": True}

    def depends_on(self, service_id: str) -> bool:
        return service_id in self.dependencies

    def conflicts_with(self, service_id: str) -> bool:
        return service_id in self.conflicts


class CatalogSource(Protocol):
    def read(self) -> list[dict[str, Any]]: ...


# ---------------------------------------------------------------------------
# Record parsing
# ---------------------------------------------------------------------------

_CATEGORIES = {c.value for c in Category}


def _id_list(record: dict[str, Any], key: str) -> tuple[str, ...]:
    value = record.get(key)
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) and v for v in value):
        raise ValueError(f"'{key}' must be a list of service ids")
    # Keep declared order, drop repeats
    return tuple(dict.fromkeys(value))


def _parse_record(record: Any) -> Service:
    """Build a Service from a raw catalog record; raises ValueError naming the bad field."""
    if not isinstance(record, dict):
        raise ValueError("record is not an object")

    service_id = record.get("id")
    if not isinstance(service_id, str) or not service_id.strip():
        raise ValueError("missing 'id'")
    name = record.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ValueError("missing 'name'")
    if record.get("base_price") is None:
        raise ValueError("missing 'base_price'")
    price_cents = to_cents(record["base_price"])
    if price_cents < 0:
        raise ValueError("'base_price' must not be negative")
    category = record.get("category")
    if not isinstance(category, str) or category not in _CATEGORIES:
        raise ValueError(f"unknown category {category!r}")

    dependencies = _id_list(record, "dependencies")
    conflicts = _id_list(record, "conflicts")
    if service_id in dependencies or service_id in conflicts:
        raise ValueError("a service cannot depend on or conflict with itself")

    return Service(
        id=service_id,
        name=name,
        base_price_cents=price_cents,
        category=Category(category),
        dependencies=dependencies,
        conflicts=conflicts,
    )


# ---------------------------------------------------------------------------
# Catalog generation
# ---------------------------------------------------------------------------

class ServiceCatalog:
    """Read-only mapping of id -> Service plus a category grouping."""

    def __init__(self, services: Iterable[Service] = ()):
        by_id: dict[str, Service] = {}
        for service in services:
            by_id[service.id] = service

        grouped: dict[Category, list[Service]] = {c: [] for c in Category}
        for service in by_id.values():
            grouped[service.category].append(service)

        self._by_id: Mapping[str, Service] = MappingProxyType(by_id)
        self._by_category: Mapping[Category, tuple[Service, ...]] = MappingProxyType(
            {c: tuple(items) for c, items in grouped.items()}
        )

    @classmethod
    def load(cls, records: Any) -> "ServiceCatalog":
        """Parse raw records into a catalog.

        Every record is checked before failing, so a single
        :class:`CatalogLoadError` reports all malformed records at once.
        """
        if not isinstance(records, list):
            raise CatalogLoadError("Catalog source must be a list of service records")

        services: list[Service] = []
        failures: list[dict[str, Any]] = []
        seen: set[str] = set()

        for index, record in enumerate(records):
            record_id = record.get("id") if isinstance(record, dict) else None
            try:
                service = _parse_record(record)
            except ValueError as exc:
                failures.append({"index": index, "id": record_id, "reason": str(exc)})
                continue
            if service.id in seen:
                failures.append({"index": index, "id": service.id, "reason": "duplicate id"})
                continue
            seen.add(service.id)
            services.append(service)

        if failures:
            raise CatalogLoadError("Malformed service catalog", failures)

        catalog = cls(services)
        for service_id, ref in catalog.unresolved_references():
            logger.warning("Service '%s' references unknown service '%s'", service_id, ref)
        return catalog

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, service_id: object) -> bool:
        return service_id in self._by_id

    def get(self, service_id: str) -> Service | None:
        return self._by_id.get(service_id)

    def get_many(self, service_ids: Iterable[str]) -> list[Service]:
        """Resolve ids in the given order, silently dropping unknown ones."""
        return [self._by_id[sid] for sid in service_ids if sid in self._by_id]

    def all(self) -> list[Service]:
        return list(self._by_id.values())

    def by_category(self) -> Mapping[Category, tuple[Service, ...]]:
        return self._by_category

    def display_name(self, service_id: str) -> str:
        service = self._by_id.get(service_id)
        return service.name if service else service_id

    def unresolved_references(self) -> list[tuple[str, str]]:
        """(service_id, referenced_id) for every dependency/conflict id not in this catalog."""
        missing: list[tuple[str, str]] = []
        for service in self._by_id.values():
            for ref in (*service.dependencies, *service.conflicts):
                if ref not in self._by_id:
                    missing.append((service.id, ref))
        return missing


class CatalogStore:
    """Holds the published catalog generation and rebuilds it on reload.

    Readers call :meth:`snapshot` (a plain attribute read) and never block.
    Reloads are serialized with a lock; the new catalog is built completely
    before the reference is swapped.
    """

    def __init__(self, source: CatalogSource):
        self._source = source
        self._lock = threading.Lock()
        self._catalog = ServiceCatalog.load(source.read())
        self._generation = 1
        logger.info("Loaded service catalog: %d services", len(self._catalog))

    @property
    def generation(self) -> int:
        return self._generation

    def snapshot(self) -> ServiceCatalog:
        return self._catalog

    def get(self, service_id: str) -> Service | None:
        return self._catalog.get(service_id)

    def get_many(self, service_ids: Iterable[str]) -> list[Service]:
        return self._catalog.get_many(service_ids)

    def by_category(self) -> Mapping[Category, tuple[Service, ...]]:
        return self._catalog.by_category()

    def reload(self) -> ServiceCatalog:
        """Rebuild from the source and publish; the old generation stays live on failure."""
        with self._lock:
            try:
                catalog = ServiceCatalog.load(self._source.read())
            except CatalogLoadError:
                logger.exception("Catalog reload failed; keeping generation %d", self._generation)
                raise
            self._catalog = catalog
            self._generation += 1
            logger.info(
                "Reloaded service catalog: %d services (generation %d)",
                len(catalog), self._generation,
            )
            return catalog
