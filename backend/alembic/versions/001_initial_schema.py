"""Initial schema — users, catalog, inventory, consumption log, resources

Revision ID: 001
Revises:
Create Date: 2026-10-18 00:00:00.000000
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

action_type = sa.Enum("PURCHASED", "CONSUMED", "WASTED", "DONATED", name="action_type")
resource_type = sa.Enum("TIP", "ARTICLE", "VIDEO", name="resource_type")
json_bag = sa.JSON().with_variant(JSONB(), "postgresql")


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    # --- users ---
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("email", sa.String, nullable=False),
        sa.Column("full_name", sa.String),
        sa.Column("household_size", sa.Integer, nullable=False, server_default="1"),
        sa.Column("dietary_preferences", json_bag),
        sa.Column("location", sa.String),
        *_timestamps(),
        sa.CheckConstraint("household_size >= 1", name="ck_users_household_size"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    # --- food_items ---
    op.create_table(
        "food_items",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("name", sa.String, nullable=False),
        sa.Column("category", sa.String),
        sa.Column("default_expiration_days", sa.Integer),
        sa.Column("average_cost", sa.Float),
        sa.Column("unit", sa.String),
        *_timestamps(),
    )
    op.create_index("ix_food_items_name", "food_items", ["name"], unique=True)
    op.create_index("ix_food_items_category", "food_items", ["category"])

    # --- inventory ---
    op.create_table(
        "inventory",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("user_id", sa.Uuid, sa.ForeignKey("users.id"), nullable=False),
        sa.Column("food_item_id", sa.Uuid, sa.ForeignKey("food_items.id", ondelete="SET NULL")),
        sa.Column("custom_name", sa.String, nullable=False),
        sa.Column("quantity", sa.Float, nullable=False, server_default="0"),
        sa.Column("unit", sa.String),
        sa.Column("purchase_date", sa.DateTime(timezone=True)),
        sa.Column("expiration_date", sa.DateTime(timezone=True)),
        sa.Column("source_image_url", sa.String),
        sa.Column("ai_metadata", json_bag),
        *_timestamps(),
        sa.CheckConstraint("quantity >= 0", name="ck_inventory_quantity_non_negative"),
    )
    op.create_index("ix_inventory_user_id", "inventory", ["user_id"])
    op.create_index("ix_inventory_food_item_id", "inventory", ["food_item_id"])
    op.create_index("ix_inventory_purchase_date", "inventory", ["purchase_date"])
    op.create_index("ix_inventory_expiration_date", "inventory", ["expiration_date"])
    op.create_index("ix_inventory_user_id_expiration_date", "inventory", ["user_id", "expiration_date"])

    # --- consumption_logs ---
    op.create_table(
        "consumption_logs",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("user_id", sa.Uuid, sa.ForeignKey("users.id"), nullable=False),
        sa.Column("food_name", sa.String),
        sa.Column("action_type", action_type, nullable=False),
        sa.Column("quantity", sa.Float, nullable=False),
        sa.Column("reason", sa.Text),
        sa.Column("log_date", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        *_timestamps(),
        sa.CheckConstraint("quantity >= 0", name="ck_consumption_logs_quantity_non_negative"),
    )
    op.create_index("ix_consumption_logs_user_id", "consumption_logs", ["user_id"])
    op.create_index("ix_consumption_logs_action_type", "consumption_logs", ["action_type"])
    op.create_index("ix_consumption_logs_log_date", "consumption_logs", ["log_date"])
    op.create_index("ix_consumption_logs_user_id_log_date", "consumption_logs", ["user_id", "log_date"])

    # --- resources ---
    op.create_table(
        "resources",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("title", sa.String, nullable=False),
        sa.Column("content", sa.Text),
        sa.Column("category_tag", sa.String),
        sa.Column("resource_type", resource_type, nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_resources_category_tag", "resources", ["category_tag"])
    op.create_index("ix_resources_resource_type", "resources", ["resource_type"])


def downgrade() -> None:
    op.drop_table("resources")
    op.drop_table("consumption_logs")
    op.drop_table("inventory")
    op.drop_table("food_items")
    op.drop_table("users")
    sa.Enum(name="resource_type").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="action_type").drop(op.get_bind(), checkfirst=True)
