"""Exceptions raised across the domain ports and the reconciler."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ipamkeeper.domain.model import IpAddressKey


class IpamBackendError(RuntimeError):
    """Raised by IPAM backends when assign, unassign or search fails."""


class StoreError(RuntimeError):
    """Raised by the resource store when a read or write fails."""


class ResourceNotFoundError(StoreError):
    """Raised when the addressed resource does not exist in the store."""


class ConcurrentUpdateError(StoreError):
    """Raised when a versioned update lost against a concurrent writer."""

    def __init__(self, message: str, *, expected: int, actual: int | None = None) -> None:
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class EventRecordingError(RuntimeError):
    """Raised by event recorders when an event could not be stored."""


class ReconcileError(RuntimeError):
    """A handler failed; the delivery mechanism should retry later."""

    def __init__(self, message: str, *, key: IpAddressKey) -> None:
        super().__init__(message)
        self.message = message
        self.key = key


class AllocationError(ReconcileError):
    """The IPAM backend failed to assign, unassign or search."""


class ReferenceResolutionError(ReconcileError):
    """A reference query matched zero or several addresses."""

    def __init__(self, message: str, *, key: IpAddressKey, matches: int) -> None:
        super().__init__(message, key=key)
        self.matches = matches


class PersistenceError(ReconcileError):
    """An address was obtained but the status could not be written back."""

    def __init__(
        self,
        message: str,
        *,
        key: IpAddressKey,
        address: str,
        released: bool = False,
    ) -> None:
        super().__init__(message, key=key)
        self.address = address
        self.released = released


class ResourceExistsError(StoreError):
    """Raised when adding a resource whose namespace/name is already taken."""
