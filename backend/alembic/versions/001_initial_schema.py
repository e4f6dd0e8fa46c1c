"""Initial schema — households, users, shopping_lists, items.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "households",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(100), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("name", sa.String(200), nullable=True),
        sa.Column("enabled", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("household_id", sa.Integer, sa.ForeignKey("households.id"), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "shopping_lists",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("is_default", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("household_id", sa.Integer, sa.ForeignKey("households.id"), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "items",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("quantity", sa.Integer, nullable=False, server_default="1"),
        sa.Column("is_checked", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("shopping_list_id", sa.Integer, sa.ForeignKey("shopping_lists.id"), nullable=True),
        sa.Column("added_by_user_id", sa.Integer, sa.ForeignKey("users.id"), nullable=True),
        sa.Column("added_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    # Indexes for the FK columns the stores group by
    op.create_index("ix_users_household_id", "users", ["household_id"])
    op.create_index("ix_shopping_lists_household_id", "shopping_lists", ["household_id"])
    op.create_index("ix_items_shopping_list_id", "items", ["shopping_list_id"])
    op.create_index("ix_items_added_by_user_id", "items", ["added_by_user_id"])


def downgrade() -> None:
    op.drop_index("ix_items_added_by_user_id", table_name="items")
    op.drop_index("ix_items_shopping_list_id", table_name="items")
    op.drop_index("ix_shopping_lists_household_id", table_name="shopping_lists")
    op.drop_index("ix_users_household_id", table_name="users")
    op.drop_table("items")
    op.drop_table("shopping_lists")
    op.drop_table("users")
    op.drop_table("households")
