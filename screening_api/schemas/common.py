"""Shared Pydantic schema base."""

from __future__ import annotations

from pydantic import BaseModel


class APIModel(BaseModel):
    """All API schemas inherit from this (snake_case on the wire)."""

    model_config = {
        "populate_by_name": True,
        "from_attributes": True,
    }


class HealthResponse(BaseModel):
    """Health-check response returned by /health."""
    status: str = "ok"
    app: str
    env: str
    catalog_services: int
    catalog_generation: int
