"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ipamkeeper.adapters.sqlalchemy.mappings import event_table, ip_address_table
from ipamkeeper.domain.errors import (
    ConcurrentUpdateError,
    ResourceExistsError,
    ResourceNotFoundError,
    StoreError,
)
from ipamkeeper.domain.model import (
    Event,
    EventType,
    IpAddress,
    IpAddressSpec,
    IpAddressStatus,
    ObjectReference,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy import CursorResult, Row
    from sqlalchemy.orm import Session
    from sqlalchemy.sql import Executable


def _row_to_ip_address(row: Row[Any]) -> IpAddress:
    return IpAddress(
        namespace=row.namespace,
        name=row.name,
        uid=row.uid,
        version=row.version,
        spec=IpAddressSpec(name=row.spec_name, ref=row.spec_ref),
        status=IpAddressStatus(
            address=row.status_address,
            name=row.status_name,
            provider=row.status_provider,
        ),
    )


def _row_to_event(row: Row[Any]) -> Event:
    return Event(
        id=row.id,
        involved_object=ObjectReference(
            kind=row.involved_kind,
            api_version=row.involved_api_version,
            namespace=row.involved_namespace,
            name=row.involved_name,
            uid=row.involved_uid,
            resource_version=row.involved_resource_version,
        ),
        message=row.message,
        type=EventType(row.type),
        generate_name=row.generate_name,
        first_timestamp=row.first_timestamp,
        last_timestamp=row.last_timestamp,
    )


class _SessionRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def _execute(self, statement: Executable) -> CursorResult[Any]:
        try:
            return cast("CursorResult[Any]", self.session.execute(statement))
        except SQLAlchemyError as exc:
            raise StoreError(str(exc)) from exc


class SqlAlchemyIpAddressRepository(_SessionRepository):
    def get(self, namespace: str, name: str) -> IpAddress | None:
        stmt = (
            select(ip_address_table)
            .where(ip_address_table.c.namespace == namespace)
            .where(ip_address_table.c.name == name)
        )
        row = self._execute(stmt).one_or_none()
        return _row_to_ip_address(row) if row is not None else None

    def list(self, *, namespace: str | None = None) -> Sequence[IpAddress]:
        stmt = select(ip_address_table).order_by(
            ip_address_table.c.namespace, ip_address_table.c.name
        )
        if namespace is not None:
            stmt = stmt.where(ip_address_table.c.namespace == namespace)
        return [_row_to_ip_address(row) for row in self._execute(stmt)]

    def list_referencing(self, address: str) -> Sequence[IpAddress]:
        stmt = (
            select(ip_address_table)
            .where(ip_address_table.c.status_address == address)
            .where(ip_address_table.c.spec_ref.is_not(None))
            .where(ip_address_table.c.spec_ref != "")
        )
        return [_row_to_ip_address(row) for row in self._execute(stmt)]

    def add(self, resource: IpAddress) -> None:
        stmt = insert(ip_address_table).values(
            uid=resource.uid,
            namespace=resource.namespace,
            name=resource.name,
            spec_name=resource.spec.name,
            spec_ref=resource.spec.ref,
            status_address=resource.status.address,
            status_name=resource.status.name,
            status_provider=resource.status.provider,
            version=resource.version,
        )
        try:
            self.session.execute(stmt)
        except IntegrityError as exc:
            raise ResourceExistsError(f"ip address '{resource.key}' already exists") from exc
        except SQLAlchemyError as exc:
            raise StoreError(str(exc)) from exc

    def update_status(self, resource: IpAddress, status: IpAddressStatus) -> IpAddress:
        new_version = resource.version + 1
        stmt = (
            update(ip_address_table)
            .where(ip_address_table.c.namespace == resource.namespace)
            .where(ip_address_table.c.name == resource.name)
            .where(ip_address_table.c.version == resource.version)
            .values(
                status_address=status.address,
                status_name=status.name,
                status_provider=status.provider,
                version=new_version,
            )
        )
        if self._execute(stmt).rowcount == 0:
            current = self.get(resource.namespace, resource.name)
            if current is None:
                raise ResourceNotFoundError(f"ip address '{resource.key}' no longer exists")
            raise ConcurrentUpdateError(
                f"ip address '{resource.key}' was modified concurrently "
                f"(expected version {resource.version}, found {current.version})",
                expected=resource.version,
                actual=current.version,
            )
        return replace(resource, status=status, version=new_version)

    def remove(self, resource: IpAddress) -> None:
        stmt = (
            delete(ip_address_table)
            .where(ip_address_table.c.namespace == resource.namespace)
            .where(ip_address_table.c.name == resource.name)
        )
        if self._execute(stmt).rowcount == 0:
            raise ResourceNotFoundError(f"ip address '{resource.key}' does not exist")


class SqlAlchemyEventRepository(_SessionRepository):
    def add(self, event: Event) -> None:
        involved = event.involved_object
        stmt = insert(event_table).values(
            id=event.id,
            generate_name=event.generate_name,
            involved_kind=involved.kind,
            involved_api_version=involved.api_version,
            involved_namespace=involved.namespace,
            involved_name=involved.name,
            involved_uid=involved.uid,
            involved_resource_version=involved.resource_version,
            type=event.type.value,
            message=event.message,
            first_timestamp=event.first_timestamp,
            last_timestamp=event.last_timestamp,
        )
        self._execute(stmt)

    def list_for(self, namespace: str, name: str) -> Sequence[Event]:
        stmt = (
            select(event_table)
            .where(event_table.c.involved_namespace == namespace)
            .where(event_table.c.involved_name == name)
            .order_by(event_table.c.first_timestamp)
        )
        return [_row_to_event(row) for row in self._execute(stmt)]
