"""Saved-package repository."""

from screening_api.domain.package import Package
from screening_api.repositories.base import BaseRepository


class PackageRepository(BaseRepository[Package]):
    model = Package

    async def most_recent(self) -> Package | None:
        result = await self._session.execute(
            self._base_query()
            .order_by(Package.updated_at.desc(), Package.created_at.desc())
            .limit(1)
        )
        return result.scalars().first()
