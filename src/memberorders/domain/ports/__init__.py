"""Domain port definitions for adapters."""

from __future__ import annotations

from .listings import ListingService
from .persistence import Repository, SubmissionNotFoundError, SubmissionRepository
from .unit_of_work import (
    RepositoryCollection,
    SubmissionRepositories,
    SubmissionUnitOfWork,
    UnitOfWork,
)

__all__ = [
    "ListingService",
    "Repository",
    "RepositoryCollection",
    "SubmissionRepositories",
    "SubmissionNotFoundError",
    "SubmissionRepository",
    "SubmissionUnitOfWork",
    "UnitOfWork",
]
