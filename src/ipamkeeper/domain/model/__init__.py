"""Public domain model surface."""

from __future__ import annotations

from ipamkeeper.domain.model.enums import EventType, ReconcileAction, SkipReason
from ipamkeeper.domain.model.event import Event, ObjectReference
from ipamkeeper.domain.model.ip_address import (
    IpAddress,
    IpAddressKey,
    IpAddressSpec,
    IpAddressStatus,
    new_uid,
)

__all__ = [
    "Event",
    "EventType",
    "IpAddress",
    "IpAddressKey",
    "IpAddressSpec",
    "IpAddressStatus",
    "ObjectReference",
    "ReconcileAction",
    "SkipReason",
    "new_uid",
]
