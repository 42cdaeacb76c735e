"""Units of work over the SQL inventory mirror and review queue.

``startup()`` binds the module to one engine and migrates it to the latest
schema. Every unit of work opened afterwards gets its own session; leaving the
``with`` block without ``commit()`` discards its changes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Literal, Self

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from vendorrecon.adapters.sqlalchemy.migrations import upgrade_head
from vendorrecon.adapters.sqlalchemy.repositories import (
    SqlAlchemyInventoryRepository,
    SqlAlchemyReviewEntryRepository,
)
from vendorrecon.config import get_database_config
from vendorrecon.domain.ports import ReconciliationRepositories, RepositoryCollection

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = getLogger(__name__)


class StartupError(RuntimeError):
    """The adapter was used before ``startup()``, or configured twice."""


@dataclass(frozen=True, slots=True)
class _Binding:
    engine: Engine
    sessions: sessionmaker[Session]


@dataclass(slots=True)
class _AdapterState:
    binding: _Binding | None = None

    def sessions(self) -> sessionmaker[Session]:
        if self.binding is None:
            raise StartupError(
                "SQLAlchemy adapter not initialised; call "
                "vendorrecon.adapters.sqlalchemy.startup() first"
            )
        return self.binding.sessions


_STATE = _AdapterState()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Bind the adapter to ``engine`` (or a new one for ``database_uri``) and migrate it."""

    if _STATE.binding is not None and not force:
        raise StartupError("SQLAlchemy adapter already initialised; pass force=True to rebind")

    bound = engine or create_engine(database_uri or get_database_config().uri)
    upgrade_head(engine=bound)
    _STATE.binding = _Binding(
        engine=bound,
        sessions=sessionmaker(bind=bound, expire_on_commit=False),
    )
    log.info("Inventory database ready at %s", bound.url.render_as_string(hide_password=True))


def configured_engine() -> Engine | None:
    return None if _STATE.binding is None else _STATE.binding.engine


def is_started() -> bool:
    return _STATE.binding is not None


def shutdown() -> None:
    """Dispose the bound engine; a later ``startup()`` may bind a new one."""

    binding, _STATE.binding = _STATE.binding, None
    if binding is not None:
        binding.engine.dispose()


class BaseSqlAlchemyUnitOfWork[TRepositories: RepositoryCollection](ABC):
    def __init__(self) -> None:
        self._sessions = _STATE.sessions()
        self._session: Session | None = None
        self._repositories: TRepositories | None = None

    @abstractmethod
    def _build_repositories(self, session: Session) -> TRepositories: ...

    def __enter__(self) -> Self:
        if self._session is not None:
            raise StartupError("Unit of work is already open")
        self._session = self._sessions()
        self._repositories = self._build_repositories(self._session)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session, self._session, self._repositories = self._session, None, None
        if session is not None:
            if exc_type is not None:
                session.rollback()
            session.close()
        return False

    @property
    def repositories(self) -> TRepositories:
        if self._repositories is None:
            raise StartupError("Unit of work used outside of its 'with' block")
        return self._repositories

    def commit(self) -> None:
        self._open_session().commit()

    def rollback(self) -> None:
        self._open_session().rollback()

    def _open_session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work used outside of its 'with' block")
        return self._session


class SqlAlchemyUnitOfWork(BaseSqlAlchemyUnitOfWork[ReconciliationRepositories]):
    """Unit of work over the inventory mirror and the review queue."""

    def _build_repositories(self, session: Session) -> ReconciliationRepositories:
        return ReconciliationRepositories(
            inventory=SqlAlchemyInventoryRepository(session),
            review_entries=SqlAlchemyReviewEntryRepository(session),
        )


if TYPE_CHECKING:
    from vendorrecon.domain.ports import ReconciliationUnitOfWork

    _uow_check: ReconciliationUnitOfWork = SqlAlchemyUnitOfWork()
