"""Ports for persisting IP address resources and their events."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ipamkeeper.domain.model import Event, IpAddress, IpAddressStatus


@runtime_checkable
class IpAddressRepository(Protocol):
    """Persistence contract for IP address resources."""

    def get(self, namespace: str, name: str) -> IpAddress | None: ...

    def list(self, *, namespace: str | None = None) -> Sequence[IpAddress]: ...

    def list_referencing(self, address: str) -> Sequence[IpAddress]: ...

    def add(self, resource: IpAddress) -> None: ...

    def update_status(self, resource: IpAddress, status: IpAddressStatus) -> IpAddress:
        """Store ``status`` if ``resource.version`` is still current.

        Returns the resource with its new status and version. Raises
        ``ConcurrentUpdateError`` when the stored version moved on and
        ``ResourceNotFoundError`` when the row is gone.
        """
        ...

    def remove(self, resource: IpAddress) -> None: ...


@runtime_checkable
class EventRepository(Protocol):
    """Persistence contract for recorded events."""

    def add(self, event: Event) -> None: ...

    def list_for(self, namespace: str, name: str) -> Sequence[Event]: ...


__all__ = ["EventRepository", "IpAddressRepository"]
