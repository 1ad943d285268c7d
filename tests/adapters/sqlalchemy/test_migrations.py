from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import inspect
from sqlalchemy.schema import CreateIndex, CreateTable

from ipamkeeper.adapters.sqlalchemy.mappings import event_table, ip_address_table

if TYPE_CHECKING:
    from sqlalchemy import Table
    from sqlalchemy.engine import Engine


def _declared_ddl(table: Table, engine: Engine) -> str:
    statements = [CreateTable(table), *(CreateIndex(index) for index in table.indexes)]
    return "\n".join(str(statement.compile(dialect=engine.dialect)) for statement in statements)


def test_unique_constraint_name_matches_naming_convention(sqlite_engine: Engine) -> None:
    reflected = inspect(sqlite_engine).get_unique_constraints("ip_address")

    assert [constraint["name"] for constraint in reflected] == ["uq_ip_address_namespace_name"]
    assert "CONSTRAINT uq_ip_address_namespace_name UNIQUE" in _declared_ddl(
        ip_address_table, sqlite_engine
    )


@pytest.mark.parametrize("table", [ip_address_table, event_table], ids=lambda t: t.name)
def test_migrated_index_names_match_declared_tables(sqlite_engine: Engine, table: Table) -> None:
    reflected = {index["name"] for index in inspect(sqlite_engine).get_indexes(table.name)}
    declared = _declared_ddl(table, sqlite_engine)

    assert reflected
    for name in reflected:
        assert name is not None
        assert f"INDEX {name} ON" in declared
