"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from ipamkeeper.adapters.events import UnitOfWorkEventRecorder
from ipamkeeper.adapters.http_ipam import HttpIpamBackend
from ipamkeeper.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyUnitOfWork,
    is_started,
    startup,
)
from ipamkeeper.config import get_reconciler_config
from ipamkeeper.domain.errors import ResourceNotFoundError
from ipamkeeper.domain.model import IpAddress, IpAddressSpec
from ipamkeeper.domain.naming import NameResolver
from ipamkeeper.domain.ports.unit_of_work import IpAddressUnitOfWork
from ipamkeeper.domain.reconciler import IpAddressReconciler, ReconcileResult

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ipamkeeper.config import ReconcilerConfig
    from ipamkeeper.domain.model import Event
    from ipamkeeper.domain.ports import EventRecorder, IpamBackend

UnitOfWorkFactory = Callable[[], IpAddressUnitOfWork]


log = getLogger(__name__)


def _ensure_started() -> None:
    if not is_started():
        startup()


def build_reconciler(
    *,
    config: ReconcilerConfig | None = None,
    ipam: IpamBackend | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    events: EventRecorder | None = None,
) -> IpAddressReconciler:
    """Wire a reconciler from configuration and the default adapters."""

    effective_config = config or get_reconciler_config()
    effective_uow = unit_of_work_factory or SqlAlchemyUnitOfWork
    return IpAddressReconciler(
        ipam=ipam or HttpIpamBackend(),
        unit_of_work_factory=effective_uow,
        events=events or UnitOfWorkEventRecorder(effective_uow),
        naming=NameResolver(tag=effective_config.tag, template=effective_config.name_template),
        provider=effective_config.provider,
        release_on_persist_failure=effective_config.release_on_persist_failure,
    )


def add_ip_address(
    *,
    namespace: str,
    name: str,
    display_name: str | None = None,
    ref: str | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> IpAddress:
    """Store a new, unassigned IP address resource."""

    if unit_of_work_factory is None:
        _ensure_started()
    resource = IpAddress(
        namespace=namespace,
        name=name,
        spec=IpAddressSpec(name=display_name, ref=ref),
    )
    with (unit_of_work_factory or SqlAlchemyUnitOfWork)() as uow:
        uow.repositories.ip_addresses.add(resource)
        uow.commit()
    log.info("Added ip address '%s'", resource.key)
    return resource


def get_ip_address(
    *,
    namespace: str,
    name: str,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> IpAddress:
    if unit_of_work_factory is None:
        _ensure_started()
    with (unit_of_work_factory or SqlAlchemyUnitOfWork)() as uow:
        resource = uow.repositories.ip_addresses.get(namespace, name)
    if resource is None:
        raise ResourceNotFoundError(f"ip address '{namespace}-{name}' does not exist")
    return resource


def list_events(
    *,
    namespace: str,
    name: str,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> Sequence[Event]:
    if unit_of_work_factory is None:
        _ensure_started()
    with (unit_of_work_factory or SqlAlchemyUnitOfWork)() as uow:
        return list(uow.repositories.events.list_for(namespace, name))


def reconcile_ip_address(
    *,
    namespace: str,
    name: str,
    reconciler: IpAddressReconciler | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> ReconcileResult:
    """Run the created-or-updated handler for a stored resource."""

    if unit_of_work_factory is None:
        _ensure_started()
    effective_reconciler = reconciler or build_reconciler(
        unit_of_work_factory=unit_of_work_factory
    )
    resource = get_ip_address(
        namespace=namespace, name=name, unit_of_work_factory=unit_of_work_factory
    )
    result = effective_reconciler.on_created_or_updated(resource)
    log.info("Reconciled '%s': %s %s", resource.key, result.action, result.address or "")
    return result


def delete_ip_address(
    *,
    namespace: str,
    name: str,
    reconciler: IpAddressReconciler | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> ReconcileResult:
    """Run the deletion handler, then drop the resource from the store.

    The record is only removed once the handler succeeded, so a failed release
    can be retried by deleting again.
    """

    if unit_of_work_factory is None:
        _ensure_started()
    effective_uow = unit_of_work_factory or SqlAlchemyUnitOfWork
    effective_reconciler = reconciler or build_reconciler(unit_of_work_factory=effective_uow)
    resource = get_ip_address(namespace=namespace, name=name, unit_of_work_factory=effective_uow)
    result = effective_reconciler.on_deleted(resource)
    with effective_uow() as uow:
        uow.repositories.ip_addresses.remove(resource)
        uow.commit()
    log.info("Deleted '%s': %s", resource.key, result.reason or result.action)
    return result
