"""Event recorder persisting events through a unit of work."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from ipamkeeper.domain.errors import EventRecordingError, StoreError
from ipamkeeper.domain.model import Event

if TYPE_CHECKING:
    from collections.abc import Callable

    from ipamkeeper.domain.model import EventType, IpAddress
    from ipamkeeper.domain.ports import EventRecorder, IpAddressUnitOfWork

log = getLogger(__name__)


@dataclass(slots=True)
class UnitOfWorkEventRecorder:
    """Store events in their own unit of work.

    Events must survive a rollback of the status update they describe, so they
    never share a transaction with it.
    """

    unit_of_work_factory: Callable[[], IpAddressUnitOfWork]

    def record(self, resource: IpAddress, message: str, event_type: EventType) -> None:
        event = Event.for_resource(resource, message, event_type)
        try:
            with self.unit_of_work_factory() as uow:
                uow.repositories.events.add(event)
                uow.commit()
        except StoreError as exc:
            raise EventRecordingError(f"could not store event for '{resource.key}'") from exc
        log.debug("recorded %s event for '%s': %s", event_type, resource.key, message)


if TYPE_CHECKING:
    from ipamkeeper.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork

    _recorder_check: EventRecorder = UnitOfWorkEventRecorder(SqlAlchemyUnitOfWork)
