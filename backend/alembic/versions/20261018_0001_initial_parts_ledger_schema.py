"""initial parts ledger schema

Revision ID: 20261018_0001
Revises:
Create Date: 2026-10-18 09:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261018_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "vendors",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("code", sa.String(length=50), nullable=False),
        sa.Column("contact_name", sa.String(length=200), nullable=True),
        sa.Column("email", sa.String(length=200), nullable=True),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("lead_time_days", sa.Integer(), nullable=False, server_default="7"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.UniqueConstraint("code", name="uq_vendors_code"),
        sa.CheckConstraint("lead_time_days >= 0", name="ck_vendors_lead_time_non_negative"),
    )
    op.create_index("ix_vendors_id", "vendors", ["id"], unique=False)

    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("parent_id", sa.Integer(), sa.ForeignKey("categories.id"), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.UniqueConstraint("name", name="uq_categories_name"),
    )
    op.create_index("ix_categories_id", "categories", ["id"], unique=False)

    op.create_table(
        "parts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("part_number", sa.String(length=100), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category_id", sa.Integer(), sa.ForeignKey("categories.id"), nullable=True),
        sa.Column("vendor_id", sa.Integer(), sa.ForeignKey("vendors.id"), nullable=True),
        sa.Column("unit_price", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("unit_of_measure", sa.String(length=20), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.CheckConstraint("unit_price >= 0", name="ck_parts_unit_price_non_negative"),
    )
    op.create_index("ix_parts_id", "parts", ["id"], unique=False)
    op.create_index("ix_parts_part_number", "parts", ["part_number"], unique=True)
    op.create_index("ix_parts_category_id", "parts", ["category_id"], unique=False)
    op.create_index("ix_parts_vendor_id", "parts", ["vendor_id"], unique=False)

    op.create_table(
        "inventory",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("part_id", sa.Integer(), sa.ForeignKey("parts.id", ondelete="CASCADE"), nullable=False),
        sa.Column("quantity_on_hand", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("quantity_reserved", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("reorder_point", sa.Integer(), nullable=False, server_default="10"),
        sa.Column("reorder_quantity", sa.Integer(), nullable=False, server_default="50"),
        sa.Column("max_quantity", sa.Integer(), nullable=True),
        sa.Column("location", sa.String(length=100), nullable=True),
        sa.Column("last_count_date", sa.DateTime(), nullable=True),
        sa.Column("last_order_date", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.CheckConstraint("quantity_on_hand >= 0", name="ck_inventory_on_hand_non_negative"),
        sa.CheckConstraint("quantity_reserved >= 0", name="ck_inventory_reserved_non_negative"),
        sa.CheckConstraint("reorder_point >= 0", name="ck_inventory_reorder_point_non_negative"),
        sa.CheckConstraint("reorder_quantity >= 0", name="ck_inventory_reorder_quantity_non_negative"),
        sa.CheckConstraint(
            "max_quantity IS NULL OR max_quantity >= 0",
            name="ck_inventory_max_quantity_non_negative",
        ),
    )
    op.create_index("ix_inventory_id", "inventory", ["id"], unique=False)
    op.create_index("ix_inventory_part_id", "inventory", ["part_id"], unique=True)

    op.create_table(
        "orders",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("order_number", sa.String(length=20), nullable=False),
        sa.Column("vendor_id", sa.Integer(), sa.ForeignKey("vendors.id"), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="DRAFT"),
        sa.Column("order_date", sa.DateTime(), nullable=True),
        sa.Column("expected_date", sa.DateTime(), nullable=True),
        sa.Column("received_date", sa.DateTime(), nullable=True),
        sa.Column("subtotal", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("tax", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("shipping", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("total", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("shipping_address", sa.Text(), nullable=True),
        sa.Column("tracking_number", sa.String(length=100), nullable=True),
        sa.Column("is_auto_generated", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.CheckConstraint(
            "status IN ('DRAFT', 'PENDING', 'APPROVED', 'ORDERED', 'SHIPPED', 'RECEIVED', 'CANCELLED')",
            name="ck_orders_status",
        ),
        sa.CheckConstraint("subtotal >= 0", name="ck_orders_subtotal_non_negative"),
        sa.CheckConstraint("tax >= 0", name="ck_orders_tax_non_negative"),
        sa.CheckConstraint("shipping >= 0", name="ck_orders_shipping_non_negative"),
    )
    op.create_index("ix_orders_id", "orders", ["id"], unique=False)
    op.create_index("ix_orders_order_number", "orders", ["order_number"], unique=True)
    op.create_index("ix_orders_vendor_id", "orders", ["vendor_id"], unique=False)
    op.create_index("ix_orders_vendor_status", "orders", ["vendor_id", "status"], unique=False)

    op.create_table(
        "order_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("order_id", sa.Integer(), sa.ForeignKey("orders.id", ondelete="CASCADE"), nullable=False),
        sa.Column("part_id", sa.Integer(), sa.ForeignKey("parts.id"), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("unit_price", sa.Numeric(12, 2), nullable=False),
        sa.Column("total_price", sa.Numeric(12, 2), nullable=False),
        sa.Column("quantity_received", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.CheckConstraint("quantity >= 1", name="ck_order_items_quantity_min_1"),
        sa.CheckConstraint("unit_price >= 0", name="ck_order_items_unit_price_non_negative"),
        sa.CheckConstraint("quantity_received >= 0", name="ck_order_items_received_non_negative"),
    )
    op.create_index("ix_order_items_id", "order_items", ["id"], unique=False)
    op.create_index("ix_order_items_order_id", "order_items", ["order_id"], unique=False)
    op.create_index("ix_order_items_part_id", "order_items", ["part_id"], unique=False)

    op.create_table(
        "inventory_logs",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("part_id", sa.Integer(), sa.ForeignKey("parts.id", ondelete="CASCADE"), nullable=False),
        sa.Column("change_type", sa.String(length=20), nullable=False),
        sa.Column("quantity_change", sa.Integer(), nullable=False),
        sa.Column("previous_qty", sa.Integer(), nullable=False),
        sa.Column("new_qty", sa.Integer(), nullable=False),
        sa.Column("order_id", sa.Integer(), sa.ForeignKey("orders.id"), nullable=True),
        sa.Column("reason", sa.Text(), nullable=True),
        sa.Column("performed_by", sa.String(length=100), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint(
            "change_type IN ('ADJUST', 'RECEIVE', 'SHIP')",
            name="ck_inventory_logs_change_type",
        ),
        sa.CheckConstraint(
            "new_qty = previous_qty + quantity_change",
            name="ck_inventory_logs_balanced",
        ),
    )
    op.create_index("ix_inventory_logs_id", "inventory_logs", ["id"], unique=False)
    op.create_index("ix_inventory_logs_part_id", "inventory_logs", ["part_id"], unique=False)
    op.create_index("ix_inventory_logs_order_id", "inventory_logs", ["order_id"], unique=False)
    op.create_index("ix_inventory_logs_part_created", "inventory_logs", ["part_id", "created_at"], unique=False)

    op.create_table(
        "reorder_alerts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("part_id", sa.Integer(), sa.ForeignKey("parts.id", ondelete="CASCADE"), nullable=False),
        sa.Column("part_number", sa.String(length=100), nullable=False),
        sa.Column("part_name", sa.String(length=200), nullable=False),
        sa.Column("current_qty", sa.Integer(), nullable=False),
        sa.Column("reorder_point", sa.Integer(), nullable=False),
        sa.Column("reorder_qty", sa.Integer(), nullable=False),
        sa.Column("vendor_id", sa.Integer(), nullable=True),
        sa.Column("vendor_name", sa.String(length=200), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="PENDING"),
        sa.Column("order_id", sa.Integer(), sa.ForeignKey("orders.id"), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("processed_at", sa.DateTime(), nullable=True),
        sa.CheckConstraint(
            "status IN ('PENDING', 'ORDERED', 'DISMISSED')",
            name="ck_reorder_alerts_status",
        ),
    )
    op.create_index("ix_reorder_alerts_id", "reorder_alerts", ["id"], unique=False)
    op.create_index("ix_reorder_alerts_part_id", "reorder_alerts", ["part_id"], unique=False)
    op.create_index(
        "ix_reorder_alerts_status_created", "reorder_alerts", ["status", "created_at"], unique=False,
    )
    op.create_index(
        "uq_reorder_alerts_pending_part",
        "reorder_alerts",
        ["part_id"],
        unique=True,
        sqlite_where=sa.text("status = 'PENDING'"),
        postgresql_where=sa.text("status = 'PENDING'"),
    )


def downgrade() -> None:
    op.drop_index("uq_reorder_alerts_pending_part", table_name="reorder_alerts")
    op.drop_index("ix_reorder_alerts_status_created", table_name="reorder_alerts")
    op.drop_index("ix_reorder_alerts_part_id", table_name="reorder_alerts")
    op.drop_index("ix_reorder_alerts_id", table_name="reorder_alerts")
    op.drop_table("reorder_alerts")

    op.drop_index("ix_inventory_logs_part_created", table_name="inventory_logs")
    op.drop_index("ix_inventory_logs_order_id", table_name="inventory_logs")
    op.drop_index("ix_inventory_logs_part_id", table_name="inventory_logs")
    op.drop_index("ix_inventory_logs_id", table_name="inventory_logs")
    op.drop_table("inventory_logs")

    op.drop_index("ix_order_items_part_id", table_name="order_items")
    op.drop_index("ix_order_items_order_id", table_name="order_items")
    op.drop_index("ix_order_items_id", table_name="order_items")
    op.drop_table("order_items")

    op.drop_index("ix_orders_vendor_status", table_name="orders")
    op.drop_index("ix_orders_vendor_id", table_name="orders")
    op.drop_index("ix_orders_order_number", table_name="orders")
    op.drop_index("ix_orders_id", table_name="orders")
    op.drop_table("orders")

    op.drop_index("ix_inventory_part_id", table_name="inventory")
    op.drop_index("ix_inventory_id", table_name="inventory")
    op.drop_table("inventory")

    op.drop_index("ix_parts_vendor_id", table_name="parts")
    op.drop_index("ix_parts_category_id", table_name="parts")
    op.drop_index("ix_parts_part_number", table_name="parts")
    op.drop_index("ix_parts_id", table_name="parts")
    op.drop_table("parts")

    op.drop_index("ix_categories_id", table_name="categories")
    op.drop_table("categories")

    op.drop_index("ix_vendors_id", table_name="vendors")
    op.drop_table("vendors")
