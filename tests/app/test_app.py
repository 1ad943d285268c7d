from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from ipamkeeper.app import (
    add_ip_address,
    build_reconciler,
    delete_ip_address,
    get_ip_address,
    list_events,
    reconcile_ip_address,
)
from ipamkeeper.config import ReconcilerConfig, compile_name_template
from ipamkeeper.domain.errors import (
    AllocationError,
    IpamBackendError,
    ReferenceResolutionError,
    ResourceNotFoundError,
)
from ipamkeeper.domain.model import EventType, ReconcileAction, SkipReason
from tests.helpers.ip_addresses import FakeIpam

if TYPE_CHECKING:
    from collections.abc import Callable

    from ipamkeeper.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork
    from ipamkeeper.domain.reconciler import IpAddressReconciler



@pytest.fixture
def config() -> ReconcilerConfig:
    return ReconcilerConfig(
        tag="prod",
        provider="ipam-a",
        name_template=compile_name_template("{{.Tag}}-{{.Namespace}}-{{.Name}}"),
    )


@pytest.fixture
def reconciler(
    config: ReconcilerConfig,
    ipam: FakeIpam,
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> IpAddressReconciler:
    return build_reconciler(config=config, ipam=ipam, unit_of_work_factory=sqlite_unit_of_work)


def test_add_reconcile_delete_against_sqlite(
    reconciler: IpAddressReconciler,
    ipam: FakeIpam,
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    add_ip_address(namespace="default", name="foo", unit_of_work_factory=sqlite_unit_of_work)

    created = reconcile_ip_address(
        namespace="default",
        name="foo",
        reconciler=reconciler,
        unit_of_work_factory=sqlite_unit_of_work,
    )
    stored = get_ip_address(namespace="default", name="foo", unit_of_work_factory=sqlite_unit_of_work)

    assert created.action is ReconcileAction.ASSIGNED
    assert stored.status.address == "10.0.0.5"
    assert stored.status.name == "prod-default-foo"
    assert stored.status.provider == "ipam-a"

    again = reconcile_ip_address(
        namespace="default",
        name="foo",
        reconciler=reconciler,
        unit_of_work_factory=sqlite_unit_of_work,
    )
    assert again.action is ReconcileAction.UNCHANGED
    assert ipam.assigned == ["prod-default-foo"]

    deleted = delete_ip_address(
        namespace="default",
        name="foo",
        reconciler=reconciler,
        unit_of_work_factory=sqlite_unit_of_work,
    )
    assert deleted.action is ReconcileAction.RELEASED
    assert ipam.unassigned == ["10.0.0.5"]
    with pytest.raises(ResourceNotFoundError):
        get_ip_address(namespace="default", name="foo", unit_of_work_factory=sqlite_unit_of_work)


def test_failed_reference_records_warning_event(
    reconciler: IpAddressReconciler,
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    add_ip_address(
        namespace="default", name="foo", ref="host=x", unit_of_work_factory=sqlite_unit_of_work
    )

    with pytest.raises(ReferenceResolutionError):
        reconcile_ip_address(
            namespace="default",
            name="foo",
            reconciler=reconciler,
            unit_of_work_factory=sqlite_unit_of_work,
        )

    events = list_events(namespace="default", name="foo", unit_of_work_factory=sqlite_unit_of_work)
    assert [event.type for event in events] == [EventType.WARNING]
    assert "did not find address matching 'host=x'" in events[0].message
    stored = get_ip_address(namespace="default", name="foo", unit_of_work_factory=sqlite_unit_of_work)
    assert stored.status.address is None


def test_deleting_a_reference_keeps_the_address(
    reconciler: IpAddressReconciler,
    ipam: FakeIpam,
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    ipam.search_results = ["10.0.0.7"]
    add_ip_address(
        namespace="default", name="foo", ref="host=x", unit_of_work_factory=sqlite_unit_of_work
    )
    reconcile_ip_address(
        namespace="default",
        name="foo",
        reconciler=reconciler,
        unit_of_work_factory=sqlite_unit_of_work,
    )

    result = delete_ip_address(
        namespace="default",
        name="foo",
        reconciler=reconciler,
        unit_of_work_factory=sqlite_unit_of_work,
    )

    assert result.reason is SkipReason.REFERENCE
    assert ipam.unassigned == []


def test_failed_release_keeps_the_record(
    reconciler: IpAddressReconciler,
    ipam: FakeIpam,
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    add_ip_address(namespace="default", name="foo", unit_of_work_factory=sqlite_unit_of_work)
    reconcile_ip_address(
        namespace="default",
        name="foo",
        reconciler=reconciler,
        unit_of_work_factory=sqlite_unit_of_work,
    )
    ipam.unassign_error = IpamBackendError("backend down")

    with pytest.raises(AllocationError):
        delete_ip_address(
            namespace="default",
            name="foo",
            reconciler=reconciler,
            unit_of_work_factory=sqlite_unit_of_work,
        )

    stored = get_ip_address(namespace="default", name="foo", unit_of_work_factory=sqlite_unit_of_work)
    assert stored.status.address == "10.0.0.5"
