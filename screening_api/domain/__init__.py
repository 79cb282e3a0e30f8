"""Domain package — all ORM models are imported here so Alembic autogenerate detects them.

Folder intent:
  package.py — Saved screening packages (a name plus an ordered list of service ids)
  mixins.py  — Shared TimestampMixin
"""

from screening_api.domain.package import Package

__all__ = [
    "Package",
]
