"""SQLAlchemy adapter package for ipamkeeper."""

from __future__ import annotations

from .mappings import event_table, ip_address_table, metadata
from .repositories import SqlAlchemyEventRepository, SqlAlchemyIpAddressRepository

__all__ = [
    "SqlAlchemyEventRepository",
    "SqlAlchemyIpAddressRepository",
    "event_table",
    "ip_address_table",
    "metadata",
]
