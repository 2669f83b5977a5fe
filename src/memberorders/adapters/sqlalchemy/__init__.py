"""SQLAlchemy adapter package for member-order submissions."""

from __future__ import annotations

from .mappings import create_all_tables, mapper_registry, member_order_table, start_mappers
from .repositories import SqlAlchemySubmissionRepository
from .unit_of_work import (
    SqlAlchemySubmissionUnitOfWork,
    StartupError,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemySubmissionRepository",
    "SqlAlchemySubmissionUnitOfWork",
    "StartupError",
    "create_all_tables",
    "is_started",
    "mapper_registry",
    "member_order_table",
    "shutdown",
    "start_mappers",
    "startup",
]
