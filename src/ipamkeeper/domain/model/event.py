"""Observability notices recorded against resources."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from .enums import EventType

if TYPE_CHECKING:
    from .ip_address import IpAddress


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class ObjectReference:
    """Pointer to the object an event is about, pinned to its resource version."""

    kind: str
    namespace: str
    name: str
    uid: str
    resource_version: int
    api_version: str = "v1"

    @classmethod
    def for_resource(cls, resource: IpAddress) -> ObjectReference:
        return cls(
            kind=resource.KIND,
            namespace=resource.namespace,
            name=resource.name,
            uid=resource.uid,
            resource_version=resource.version,
            api_version=resource.API_VERSION,
        )


@dataclass(frozen=True, slots=True)
class Event:
    involved_object: ObjectReference
    message: str
    type: EventType = EventType.NORMAL
    generate_name: str = ""
    first_timestamp: datetime = field(default_factory=_utcnow)
    last_timestamp: datetime = field(default_factory=_utcnow)
    id: UUID = field(default_factory=uuid4)

    @classmethod
    def for_resource(
        cls,
        resource: IpAddress,
        message: str,
        event_type: EventType = EventType.NORMAL,
    ) -> Event:
        now = _utcnow()
        return cls(
            involved_object=ObjectReference.for_resource(resource),
            message=message,
            type=event_type,
            generate_name=resource.name,
            first_timestamp=now,
            last_timestamp=now,
        )

    @property
    def is_warning(self) -> bool:
        return self.type is EventType.WARNING
