"""initial schema: users, network inventory and audit trail

Revision ID: 3f1a2b4c5d6e
Revises:
Create Date: 2026-10-19 09:12:41.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1a2b4c5d6e'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all dashboard tables."""
    # Check if tables already exist (idempotent)
    conn = op.get_bind()
    inspector = sa.inspect(conn)
    existing_tables = set(inspector.get_table_names())

    if "users" not in existing_tables:
        op.create_table(
            "users",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("username", sa.String(150), nullable=False, unique=True),
            sa.Column("email", sa.String(320), nullable=False, unique=True),
            sa.Column("password_hash", sa.String(255), nullable=False),
            sa.Column("name", sa.String(255), nullable=False),
            sa.Column("avatar", sa.Text(), nullable=True),
            sa.Column("role", sa.String(64), nullable=False, server_default="user"),
            sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        )

    if "tenants" not in existing_tables:
        op.create_table(
            "tenants",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("name", sa.String(255), nullable=False),
            sa.Column("data_usage", sa.BigInteger(), nullable=False, server_default="0"),
            sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        )
        op.create_index("idx_tenants_data_usage", "tenants", ["data_usage"])

    if "fleets" not in existing_tables:
        op.create_table(
            "fleets",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("name", sa.String(255), nullable=False),
            sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        )

    if "routers" not in existing_tables:
        op.create_table(
            "routers",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("name", sa.String(255), nullable=False),
            sa.Column("identifier", sa.String(128), nullable=False, unique=True),
            sa.Column("online", sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        )
        op.create_index("idx_routers_online", "routers", ["online"])

    if "hotspot_users" not in existing_tables:
        op.create_table(
            "hotspot_users",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("username", sa.String(150), nullable=False),
            sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
            sa.Column("router_id", sa.Integer(), sa.ForeignKey("routers.id"), nullable=False),
            sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        )
        op.create_index("idx_hotspot_users_router_id", "hotspot_users", ["router_id"])

    if "firewall_templates" not in existing_tables:
        op.create_table(
            "firewall_templates",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("name", sa.String(255), nullable=False),
            sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        )

    if "audit_trails" not in existing_tables:
        op.create_table(
            "audit_trails",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("description", sa.Text(), nullable=False),
            sa.Column("event", sa.String(32), nullable=False),
            sa.Column("category", sa.String(128), nullable=False),
            sa.Column("performed_by", sa.String(255), nullable=False),
            sa.Column("timestamp", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        )
        op.create_index("idx_audit_trails_timestamp", "audit_trails", ["timestamp"])


def downgrade() -> None:
    """Drop all dashboard tables."""
    op.drop_index("idx_audit_trails_timestamp", table_name="audit_trails")
    op.drop_table("audit_trails")
    op.drop_table("firewall_templates")
    op.drop_index("idx_hotspot_users_router_id", table_name="hotspot_users")
    op.drop_table("hotspot_users")
    op.drop_index("idx_routers_online", table_name="routers")
    op.drop_table("routers")
    op.drop_table("fleets")
    op.drop_index("idx_tenants_data_usage", table_name="tenants")
    op.drop_table("tenants")
    op.drop_table("users")
