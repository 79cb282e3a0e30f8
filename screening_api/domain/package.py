"""SQLAlchemy ORM model for saved screening packages."""

from __future__ import annotations

import uuid
from typing import List

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from screening_api.db.base import Base
from screening_api.domain.mixins import TimestampMixin


class Package(Base, TimestampMixin):
    __tablename__ = "packages"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    # Ordered as chosen by the user; rule evaluation treats it as a set
    service_ids: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
