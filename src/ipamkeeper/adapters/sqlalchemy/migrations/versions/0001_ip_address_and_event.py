"""Create ip_address and event tables.

Revision ID: 0001
Revises:
Create Date: 2026-09-28
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "ip_address",
        sa.Column("uid", sa.String(length=36), nullable=False),
        sa.Column("namespace", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("spec_name", sa.String(), nullable=True),
        sa.Column("spec_ref", sa.String(), nullable=True),
        sa.Column("status_address", sa.String(), nullable=True),
        sa.Column("status_name", sa.String(), nullable=True),
        sa.Column("status_provider", sa.String(), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("uid", name="pk_ip_address"),
        sa.UniqueConstraint("namespace", "name", name="uq_ip_address_namespace_name"),
    )
    op.create_index("ix_ip_address_status_address", "ip_address", ["status_address"])

    op.create_table(
        "event",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("generate_name", sa.String(), nullable=False),
        sa.Column("involved_kind", sa.String(), nullable=False),
        sa.Column("involved_api_version", sa.String(), nullable=False),
        sa.Column("involved_namespace", sa.String(), nullable=False),
        sa.Column("involved_name", sa.String(), nullable=False),
        sa.Column("involved_uid", sa.String(length=36), nullable=False),
        sa.Column("involved_resource_version", sa.Integer(), nullable=False),
        sa.Column("type", sa.String(length=16), nullable=False),
        sa.Column("message", sa.String(), nullable=False),
        sa.Column("first_timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_event"),
    )
    op.create_index(
        "ix_event_involved_namespace", "event", ["involved_namespace", "involved_name"]
    )


def downgrade() -> None:
    op.drop_index("ix_event_involved_namespace", table_name="event")
    op.drop_table("event")
    op.drop_index("ix_ip_address_status_address", table_name="ip_address")
    op.drop_table("ip_address")
