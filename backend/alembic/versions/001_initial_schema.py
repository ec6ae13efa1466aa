"""Initial schema — users, preferences, grocery items, stores

Revision ID: 001
Revises:
Create Date: 2025-01-01 00:00:00.000000
"""
import uuid
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID, JSONB

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SEED_STORES = ["Whole Foods", "Trader Joe's", "Safeway"]


def upgrade() -> None:
    # --- users ---
    op.create_table(
        "users",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String, unique=True, index=True, nullable=False),
        sa.Column("name", sa.String),
        sa.Column("password_hash", sa.String, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    # --- user_preferences ---
    op.create_table(
        "user_preferences",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=False, unique=True, index=True),
        sa.Column("dietary_preferences", JSONB, nullable=False, server_default="[]"),
        sa.Column("allergies", JSONB, nullable=False, server_default="[]"),
        sa.Column("fitness_goals", JSONB, nullable=False, server_default="[]"),
        sa.Column("budget", sa.Float, nullable=False, server_default="100"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("budget >= 0", name="ck_user_preferences_budget"),
    )

    # --- grocery_items ---
    op.create_table(
        "grocery_items",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=False, index=True),
        sa.Column("name", sa.String, nullable=False),
        sa.Column("name_key", sa.String, nullable=False),
        sa.Column("category", sa.String, nullable=False, server_default="Other"),
        sa.Column("purchased", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("price", sa.Float),
        sa.Column("store", sa.String),
        sa.Column("expiration_date", sa.Date),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("price IS NULL OR price >= 0", name="ck_grocery_items_price"),
        # casefolded name, kept in sync by the ORM
        sa.UniqueConstraint("user_id", "name_key", name="uq_grocery_items_user_name_key"),
    )

    # --- stores ---
    stores = op.create_table(
        "stores",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String, unique=True, nullable=False),
        sa.Column("location", sa.String),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.bulk_insert(stores, [{"id": uuid.uuid4(), "name": name, "location": None} for name in SEED_STORES])


def downgrade() -> None:
    op.drop_table("stores")
    op.drop_table("grocery_items")
    op.drop_table("user_preferences")
    op.drop_table("users")
