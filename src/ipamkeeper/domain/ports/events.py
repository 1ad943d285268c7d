"""Port for recording observability events against resources."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ipamkeeper.domain.model import EventType, IpAddress


@runtime_checkable
class EventRecorder(Protocol):
    def record(self, resource: IpAddress, message: str, event_type: EventType) -> None: ...


__all__ = ["EventRecorder"]
