"""Port for the address-management backend."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence


@runtime_checkable
class IpamBackend(Protocol):
    """Capability interface every IPAM implementation provides.

    Implementations must be safe to call concurrently from several reconciler
    instances and signal failures with ``IpamBackendError``.
    """

    def assign(self, key: str) -> str:
        """Allocate a new address labelled ``key`` and return it."""
        ...

    def unassign(self, address: str) -> None:
        """Release ``address`` back to the pool."""
        ...

    def search(self, query: str, *, exact: bool) -> Sequence[str]:
        """Return every address matching ``query``."""
        ...


__all__ = ["IpamBackend"]
