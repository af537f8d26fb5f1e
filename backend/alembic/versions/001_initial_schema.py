"""Initial schema — main_state, servers, delegations, token_accounts, ledger_events.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# u64 does not fit a signed BIGINT
AMOUNT = sa.Numeric(20, 0)


def upgrade() -> None:
    op.create_table(
        "main_state",
        sa.Column("address", sa.String(64), primary_key=True),
        sa.Column("initialized", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("admin", sa.String(128), nullable=True),
        sa.Column("min_stake", AMOUNT, nullable=False, server_default="0"),
        sa.Column("max_stake", AMOUNT, nullable=False, server_default="0"),
        sa.Column("min_delegation", AMOUNT, nullable=False, server_default="0"),
        sa.Column("max_delegation", AMOUNT, nullable=False, server_default="0"),
        sa.Column("total_locked", AMOUNT, nullable=False, server_default="0"),
        sa.Column("server_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "servers",
        sa.Column("address", sa.String(64), primary_key=True),
        sa.Column("server_id", sa.String(65), nullable=False, unique=True),
        sa.Column("owner", sa.String(128), nullable=False),
        sa.Column("name", sa.String(32), nullable=False),
        sa.Column("staked_amount", AMOUNT, nullable=False, server_default="0"),
        sa.Column("delegated_total", AMOUNT, nullable=False, server_default="0"),
        sa.Column("delegator_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("active", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("removed", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_servers_owner", "servers", ["owner"])

    op.create_table(
        "delegations",
        sa.Column("address", sa.String(64), primary_key=True),
        sa.Column("delegator", sa.String(128), nullable=False),
        sa.Column(
            "server_id", sa.String(65),
            sa.ForeignKey("servers.server_id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("amount", AMOUNT, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("delegator", "server_id", name="uq_delegator_server"),
    )
    op.create_index("ix_delegations_delegator", "delegations", ["delegator"])

    op.create_table(
        "token_accounts",
        sa.Column("address", sa.String(128), primary_key=True),
        sa.Column("owner", sa.String(128), nullable=False),
        sa.Column("mint", sa.String(64), nullable=False),
        sa.Column("balance", AMOUNT, nullable=False, server_default="0"),
    )

    op.create_table(
        "ledger_events",
        sa.Column("sequence", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("kind", sa.String(32), nullable=False),
        sa.Column("server_id", sa.String(65), nullable=True),
        sa.Column("payload", sa.JSON, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_ledger_events_kind", "ledger_events", ["kind"])
    op.create_index("ix_ledger_events_server_id", "ledger_events", ["server_id"])


def downgrade() -> None:
    op.drop_table("ledger_events")
    op.drop_table("token_accounts")
    op.drop_table("delegations")
    op.drop_table("servers")
    op.drop_table("main_state")
