"""Reconciliation of IP address resources against an IPAM backend.

The reconciler is invoked by an external delivery mechanism once per observed
change. It never retries on its own: every failure is logged, recorded as a
Warning event on the resource and raised as a :class:`ReconcileError` so the
caller can redeliver later.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, NoReturn

from ipamkeeper.domain.errors import (
    AllocationError,
    EventRecordingError,
    IpamBackendError,
    PersistenceError,
    ReconcileError,
    ReferenceResolutionError,
    StoreError,
)
from ipamkeeper.domain.model import EventType, IpAddressStatus, ReconcileAction, SkipReason

if TYPE_CHECKING:
    from collections.abc import Callable

    from ipamkeeper.domain.model import IpAddress
    from ipamkeeper.domain.naming import NameResolver
    from ipamkeeper.domain.ports import EventRecorder, IpamBackend, IpAddressUnitOfWork

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReconcileResult:
    """Outcome of a single handler invocation."""

    action: ReconcileAction
    resource: IpAddress
    address: str | None = None
    reason: SkipReason | None = None


@dataclass(slots=True)
class IpAddressReconciler:
    """Assign, resolve and release addresses for ``IpAddress`` resources."""

    ipam: IpamBackend
    unit_of_work_factory: Callable[[], IpAddressUnitOfWork]
    events: EventRecorder
    naming: NameResolver
    provider: str
    release_on_persist_failure: bool = False

    def on_created_or_updated(self, resource: IpAddress) -> ReconcileResult:
        key = resource.key
        log.debug("processing address %s", key)

        if resource.status.is_assigned:
            # TODO: verify the assigned address still exists in the backend
            log.debug("nothing to do: %s already has address %s", key, resource.status.address)
            return ReconcileResult(
                action=ReconcileAction.UNCHANGED,
                resource=resource,
                address=resource.status.address,
            )

        resolved_name = self.naming.name_for(resource)
        log.debug("address %s is unassigned, resolved name %r", key, resolved_name)

        ref = resource.spec.ref
        if ref:
            address = self._resolve_reference(resource, ref)
            action = ReconcileAction.REFERENCED
        else:
            address = self._assign(resource, resolved_name)
            action = ReconcileAction.ASSIGNED

        log.info("assigned %s for '%s'", address, key)

        updated = self._persist_status(resource, address, resolved_name)
        return ReconcileResult(action=action, resource=updated, address=address)

    def on_deleted(self, resource: IpAddress) -> ReconcileResult:
        key = resource.key
        log.debug("processing deleted address %s", key)

        owner = resource.status.provider
        if owner and owner != self.provider:
            log.debug("ignoring address %s, created by provider '%s'", key, owner)
            return self._skipped(resource, SkipReason.FOREIGN_PROVIDER)

        address = resource.status.address
        if not address:
            log.debug("nothing to do: address %s was never assigned", key)
            return self._skipped(resource, SkipReason.NEVER_ASSIGNED)

        if resource.spec.is_reference:
            log.debug("nothing to do: address %s was a reference", key)
            return self._skipped(resource, SkipReason.REFERENCE)

        try:
            self.ipam.unassign(address)
        except IpamBackendError as exc:
            self._fail(
                AllocationError(
                    f"could not unassign address {address} for '{key}' from IPAM: {exc}",
                    key=key,
                ),
                resource,
            )

        log.info("address %s for '%s' successfully unassigned", address, key)
        self._warn_about_dangling_references(resource, address)
        return ReconcileResult(action=ReconcileAction.RELEASED, resource=resource, address=address)

    def _assign(self, resource: IpAddress, resolved_name: str) -> str:
        try:
            return self.ipam.assign(resolved_name)
        except IpamBackendError as exc:
            self._fail(
                AllocationError(
                    f"could not assign new address for '{resource.key}': {exc}",
                    key=resource.key,
                ),
                resource,
            )

    def _resolve_reference(self, resource: IpAddress, ref: str) -> str:
        key = resource.key
        try:
            addresses = list(self.ipam.search(ref, exact=True))
        except IpamBackendError as exc:
            self._fail(
                AllocationError(
                    f"error searching for address matching '{ref}' for '{key}': {exc}",
                    key=key,
                ),
                resource,
            )

        if not addresses:
            self._fail(
                ReferenceResolutionError(
                    f"did not find address matching '{ref}' for '{key}'",
                    key=key,
                    matches=0,
                ),
                resource,
            )
        if len(addresses) > 1:
            self._fail(
                ReferenceResolutionError(
                    f"found {len(addresses)} addresses matching '{ref}' for '{key}', "
                    "need exactly one",
                    key=key,
                    matches=len(addresses),
                ),
                resource,
            )
        return addresses[0]

    def _persist_status(self, resource: IpAddress, address: str, resolved_name: str) -> IpAddress:
        status = IpAddressStatus(address=address, name=resolved_name, provider=self.provider)
        try:
            with self.unit_of_work_factory() as uow:
                updated = uow.repositories.ip_addresses.update_status(resource, status)
                uow.commit()
        except StoreError as exc:
            message = (
                f"assigned address {address} for '{resource.key}', "
                f"but could not update object: {exc}"
            )
            released = False
            if self.release_on_persist_failure and not resource.spec.is_reference:
                released, message = self._compensate(address, message)
            self._fail(
                PersistenceError(message, key=resource.key, address=address, released=released),
                resource,
            )
        return updated

    def _compensate(self, address: str, message: str) -> tuple[bool, str]:
        try:
            self.ipam.unassign(address)
        except IpamBackendError as exc:
            return False, f"{message}; releasing {address} again also failed: {exc}"
        log.info("released orphaned address %s", address)
        return True, f"{message}; released {address} again"

    def _warn_about_dangling_references(self, resource: IpAddress, address: str) -> None:
        try:
            with self.unit_of_work_factory() as uow:
                referencing = [
                    other
                    for other in uow.repositories.ip_addresses.list_referencing(address)
                    if other.key != resource.key
                ]
        except StoreError:
            log.warning("could not look up references to %s", address, exc_info=True)
            return
        if referencing:
            names = ", ".join(str(other.key) for other in referencing)
            log.warning("released %s while still referenced by: %s", address, names)

    def _skipped(self, resource: IpAddress, reason: SkipReason) -> ReconcileResult:
        return ReconcileResult(
            action=ReconcileAction.SKIPPED,
            resource=resource,
            address=resource.status.address,
            reason=reason,
        )

    def _fail(self, error: ReconcileError, resource: IpAddress) -> NoReturn:
        """Log ``error``, record it as a Warning event and raise it."""

        log.error(error.message)
        self._record_warning(resource, error.message)
        raise error

    def _record_warning(self, resource: IpAddress, message: str) -> None:
        try:
            self.events.record(resource, message, EventType.WARNING)
        except EventRecordingError:
            log.warning("could not record event for '%s'", resource.key, exc_info=True)
