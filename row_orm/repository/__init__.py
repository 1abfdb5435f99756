"""Repository layer - DDD repository pattern."""

from __future__ import annotations

from row_orm.repository.base import AsyncRepository, Repository

__all__ = [
    "Repository",
    "AsyncRepository",
]
