"""Session-scoped units of work over the resource store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ipamkeeper.adapters.sqlalchemy.migrations import upgrade_head
from ipamkeeper.adapters.sqlalchemy.repositories import (
    SqlAlchemyEventRepository,
    SqlAlchemyIpAddressRepository,
)
from ipamkeeper.config import get_database_config
from ipamkeeper.domain.errors import StoreError
from ipamkeeper.domain.ports.unit_of_work import IpAddressRepositories

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine


class StartupError(RuntimeError):
    """The store was used before :func:`startup`, or started twice."""


@dataclass(slots=True)
class _StoreState:
    engine: Engine | None = None
    sessions: sessionmaker[Session] | None = None


_STATE = _StoreState()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Connect to the store and migrate its schema to the latest revision."""

    if _STATE.engine is not None and not force:
        raise StartupError("store already started; pass force=True to switch engines")

    target = engine or create_engine(database_uri or get_database_config().uri)
    upgrade_head(engine=target)
    _STATE.engine = target
    _STATE.sessions = sessionmaker(bind=target, expire_on_commit=False)


def is_started() -> bool:
    return _STATE.engine is not None


def shutdown() -> None:
    """Dispose the engine; mostly useful between tests."""

    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.engine = None
    _STATE.sessions = None


class SqlAlchemyUnitOfWork:
    """One session and transaction spanning the ip address and event tables."""

    def __init__(self) -> None:
        if _STATE.sessions is None:
            raise StartupError("store not started; call startup() before opening a unit of work")
        self._sessions = _STATE.sessions
        self._session: Session | None = None
        self._repositories: IpAddressRepositories | None = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        if self._session is not None:
            raise StartupError("unit of work is already open")
        session = self._sessions()
        self._session = session
        self._repositories = IpAddressRepositories(
            ip_addresses=SqlAlchemyIpAddressRepository(session),
            events=SqlAlchemyEventRepository(session),
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session = self._open_session()
        try:
            if exc_type is not None:
                session.rollback()
        finally:
            session.close()
            self._session = None
            self._repositories = None
        return False

    @property
    def repositories(self) -> IpAddressRepositories:
        if self._repositories is None:
            raise StartupError("unit of work used outside its with block")
        return self._repositories

    def commit(self) -> None:
        try:
            self._open_session().commit()
        except SQLAlchemyError as exc:
            raise StoreError(f"commit failed: {exc}") from exc

    def rollback(self) -> None:
        self._open_session().rollback()

    def _open_session(self) -> Session:
        if self._session is None:
            raise StartupError("unit of work used outside its with block")
        return self._session


if TYPE_CHECKING:
    from ipamkeeper.domain.ports.unit_of_work import IpAddressUnitOfWork

    _uow_check: IpAddressUnitOfWork = SqlAlchemyUnitOfWork()
