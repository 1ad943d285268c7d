"""SQLAlchemy table metadata for the resource store."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import (
    Column,
    DateTime,
    Dialect,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
)


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_N_name)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

ip_address_table = Table(
    "ip_address",
    metadata,
    Column("uid", String(36), primary_key=True),
    Column("namespace", String, nullable=False),
    Column("name", String, nullable=False),
    Column("spec_name", String, nullable=True),
    Column("spec_ref", String, nullable=True),
    Column("status_address", String, nullable=True),
    Column("status_name", String, nullable=True),
    Column("status_provider", String, nullable=True),
    Column("version", Integer, nullable=False, default=1),
    UniqueConstraint("namespace", "name"),
    Index(None, "status_address"),
)

event_table = Table(
    "event",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("generate_name", String, nullable=False),
    Column("involved_kind", String, nullable=False),
    Column("involved_api_version", String, nullable=False),
    Column("involved_namespace", String, nullable=False),
    Column("involved_name", String, nullable=False),
    Column("involved_uid", String(36), nullable=False),
    Column("involved_resource_version", Integer, nullable=False),
    Column("type", String(16), nullable=False),
    Column("message", String, nullable=False),
    Column("first_timestamp", UTCDateTime, nullable=False),
    Column("last_timestamp", UTCDateTime, nullable=False),
    Index(None, "involved_namespace", "involved_name"),
)
