from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from memberorders.adapters.sqlalchemy import create_all_tables, start_mappers
from memberorders.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemySubmissionUnitOfWork,
    shutdown,
    startup,
)
from tests.helpers.submissions import FakeSubmissionRepository, FakeSubmissionUnitOfWork

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path


@pytest.fixture
def sqlite_engine(tmp_path: Path) -> Iterator[Engine]:
    # file-backed so worker threads share one database
    engine = create_engine(f"sqlite+pysqlite:///{tmp_path / 'memberorders.db'}", future=True)
    start_mappers()
    create_all_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session_factory = sessionmaker(bind=sqlite_engine, future=True, expire_on_commit=False)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemySubmissionUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)
    try:
        yield SqlAlchemySubmissionUnitOfWork
    finally:
        shutdown()


@pytest.fixture
def fake_repository() -> FakeSubmissionRepository:
    return FakeSubmissionRepository()


@pytest.fixture
def fake_unit_of_work(
    fake_repository: FakeSubmissionRepository,
) -> Callable[[], FakeSubmissionUnitOfWork]:
    def factory() -> FakeSubmissionUnitOfWork:
        return FakeSubmissionUnitOfWork(fake_repository)

    return factory
