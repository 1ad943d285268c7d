"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class EventType(StrEnum):
    NORMAL = "Normal"
    WARNING = "Warning"


class ReconcileAction(StrEnum):
    """What a handler invocation did to a resource."""

    ASSIGNED = "assigned"
    REFERENCED = "referenced"
    UNCHANGED = "unchanged"
    RELEASED = "released"
    SKIPPED = "skipped"


class SkipReason(StrEnum):
    """Why the deletion handler left an address alone."""

    FOREIGN_PROVIDER = "foreign_provider"
    NEVER_ASSIGNED = "never_assigned"
    REFERENCE = "reference"
