"""Domain port definitions for adapters."""

from __future__ import annotations

from .events import EventRecorder
from .ipam import IpamBackend
from .persistence import EventRepository, IpAddressRepository
from .unit_of_work import (
    IpAddressRepositories,
    IpAddressUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "EventRecorder",
    "EventRepository",
    "IpAddressRepositories",
    "IpAddressRepository",
    "IpAddressUnitOfWork",
    "IpamBackend",
    "RepositoryCollection",
    "UnitOfWork",
]
