"""Saved-package Pydantic schemas (request DTOs and response models)."""


from datetime import datetime

from pydantic import Field

from screening_api.schemas.common import APIModel
from screening_api.schemas.selection import LineItemOut, PricingOut, ValidationOut

class PackageCreate(APIModel):
    name: str | None = None
    service_ids: list[str] = Field(default_factory=list)

class PackageUpdate(APIModel):
    name: str | None = None
    service_ids: list[str] | None = None

class PackageOut(APIModel):
    id: str
    name: str
    service_ids: list[str]
    created_at: datetime
    updated_at: datetime

class PackageSummaryOut(PackageOut):
    pricing: PricingOut

class PackageDetailOut(APIModel):
    package: PackageOut
    services: list[LineItemOut]
    pricing: PricingOut
    validation: ValidationOut
