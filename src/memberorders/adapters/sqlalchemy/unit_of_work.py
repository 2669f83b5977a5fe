"""SQLAlchemy session handling for the submission store."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from memberorders.adapters.sqlalchemy.mappings import create_all_tables, start_mappers
from memberorders.adapters.sqlalchemy.repositories import SqlAlchemySubmissionRepository
from memberorders.config.storage import get_database_config
from memberorders.domain.ports.unit_of_work import SubmissionRepositories

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when the submission store is used before ``startup()`` or outside a ``with``."""


@dataclass(slots=True)
class _AdapterState:
    engine: Engine | None = None
    session_factory: sessionmaker[Session] | None = None

    def require_session_factory(self) -> sessionmaker[Session]:
        if self.session_factory is None:
            raise StartupError(
                "Submission store not initialised; call "
                "memberorders.adapters.sqlalchemy.unit_of_work.startup() first"
            )
        return self.session_factory


_STATE = _AdapterState()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Connect the submission store and create the ``member_order`` table if missing."""

    if _STATE.engine is not None and not force:
        raise StartupError("Submission store already initialised. Pass force=True to reconfigure.")

    resolved_engine = engine or create_engine(
        database_uri or get_database_config().uri, future=True
    )
    start_mappers()
    create_all_tables(resolved_engine)
    _STATE.engine = resolved_engine
    # fetched submissions are read after their session closes
    _STATE.session_factory = sessionmaker(bind=resolved_engine, expire_on_commit=False)
    log.info("Submission store ready at %s", resolved_engine.url.render_as_string())


def is_started() -> bool:
    return _STATE.engine is not None


def shutdown() -> None:
    """Dispose the engine and forget the session factory (primarily for tests)."""

    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.engine = None
    _STATE.session_factory = None


class SqlAlchemySubmissionUnitOfWork:
    """One session per ``with`` block.

    Runs open many of these concurrently from worker threads, one per status
    write, so an instance must never be shared between threads.
    """

    def __init__(self) -> None:
        self._session_factory = _STATE.require_session_factory()
        self._session: Session | None = None
        self._repositories: SubmissionRepositories | None = None

    def __enter__(self) -> SqlAlchemySubmissionUnitOfWork:
        if self._session is not None:
            raise StartupError("Unit of work already entered")
        self._session = self._session_factory()
        self._repositories = SubmissionRepositories(
            submissions=SqlAlchemySubmissionRepository(self._session)
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session = self.session
        try:
            if exc_type is not None:
                session.rollback()
        finally:
            session.close()
            self._session = None
            self._repositories = None
        return False

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()

    @property
    def repositories(self) -> SubmissionRepositories:
        if self._repositories is None:
            raise StartupError("Unit of work used outside its 'with' block")
        return self._repositories

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work used outside its 'with' block")
        return self._session


if TYPE_CHECKING:
    from memberorders.domain.ports.unit_of_work import SubmissionUnitOfWork

    def _uow_check() -> SubmissionUnitOfWork:
        return SqlAlchemySubmissionUnitOfWork()
