"""Saved-package workflow.

Create/update run the selection through the validator first and refuse to
persist an invalid package; reads attach fresh pricing and validation from
the current catalog snapshot.

Rule: No FastAPI here. Persistence goes through the repository.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from screening_api.core.exceptions import InvalidInputError, NotFoundError, RuleViolationError
from screening_api.core.pagination import PaginationParams
from screening_api.domain.package import Package
from screening_api.repositories.package import PackageRepository
from screening_api.schemas.selection import ValidationOut
from screening_api.services.package_selection import PackageSelectionAPI
from screening_api.services.selection import coerce_selection
from screening_api.services.validation import ValidationResult

logger = logging.getLogger(__name__)


class PackageService:
    def __init__(self, session: AsyncSession, selection: PackageSelectionAPI):
        self._repo = PackageRepository(session)
        self._selection = selection

    async def list_packages(self, pagination: PaginationParams) -> tuple[list[Package], int]:
        return await self._repo.list(
            offset=pagination.offset,
            limit=pagination.limit,
            order_by=pagination.sort,
            order=pagination.order,
        )

    async def get_package(self, package_id: str) -> Package:
        package = await self._repo.get_by_id(package_id)
        if not package:
            raise NotFoundError("Package", package_id)
        return package

    async def most_recent(self) -> Package:
        package = await self._repo.most_recent()
        if not package:
            raise NotFoundError("Package")
        return package

    async def create_package(self, name: str | None, service_ids) -> tuple[Package, ValidationResult]:
        clean_name = _require_name(name)
        ids = coerce_selection(service_ids)
        validation = self._check(ids)
        package = await self._repo.create(name=clean_name, service_ids=ids)
        logger.info("Created package %s (%d services)", package.id, len(ids))
        return package, validation

    async def update_package(
        self, package_id: str, name: str | None = None, service_ids=None,
    ) -> tuple[Package, ValidationResult]:
        package = await self.get_package(package_id)

        changes: dict = {}
        if name is not None and name.strip():
            changes["name"] = name.strip()
        if service_ids is None:
            # Rename only: stored ids are reported on, never blocking
            validation = self._selection.validate(package.service_ids)
        else:
            ids = coerce_selection(service_ids)
            validation = self._check(ids)
            changes["service_ids"] = ids
        if changes:
            package = await self._repo.update(package_id, **changes)  # type: ignore[assignment]
            logger.info("Updated package %s", package_id)
        return package, validation

    async def delete_package(self, package_id: str) -> None:
        deleted = await self._repo.soft_delete(package_id)
        if not deleted:
            raise NotFoundError("Package", package_id)
        logger.info("Deleted package %s", package_id)

    def _check(self, ids: list[str]) -> ValidationResult:
        validation = self._selection.validate(ids)
        if not validation.valid:
            raise RuleViolationError(
                "Invalid package configuration",
                ValidationOut.from_result(validation).model_dump(),
            )
        return validation


def _require_name(name: str | None) -> str:
    if not name or not name.strip():
        raise InvalidInputError("Package name is required")
    return name.strip()
