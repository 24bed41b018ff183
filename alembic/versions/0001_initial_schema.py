"""initial garage schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-16 09:00:00
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None

money = sa.Numeric(14, 2)


def upgrade() -> None:
    op.create_table(
        "parts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("part_number", sa.String(length=100), nullable=False),
        sa.Column("purchasing_cost", money, nullable=False),
        sa.Column("selling_cost", money, nullable=False),
        sa.Column("quantity_in_stock", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index("ix_parts_id", "parts", ["id"])
    op.create_index("ix_parts_part_number", "parts", ["part_number"], unique=True)

    op.create_table(
        "workers",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=150), nullable=False),
        sa.Column("job_title", sa.String(length=100), nullable=True),
        sa.Column("phone", sa.String(length=30), nullable=True),
        sa.Column("email", sa.String(length=150), nullable=True),
    )
    op.create_index("ix_workers_id", "workers", ["id"])

    op.create_table(
        "services",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=150), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=True),
        sa.Column("worker_id", sa.Integer(), sa.ForeignKey("workers.id", ondelete="SET NULL"), nullable=True),
    )
    op.create_index("ix_services_id", "services", ["id"])

    op.create_table(
        "vehicles",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("plate", sa.String(length=20), nullable=False),
        sa.Column("make", sa.String(length=100), nullable=True),
        sa.Column("model_name", sa.String(length=100), nullable=True),
        sa.Column("year", sa.Integer(), nullable=True),
        sa.Column("vin", sa.String(length=50), nullable=True),
        sa.Column("owner", sa.String(length=150), nullable=False),
        sa.Column("contact_number", sa.String(length=30), nullable=False),
        sa.Column("entry_time", sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("exit_time", sa.TIMESTAMP(timezone=True), nullable=True),
    )
    op.create_index("ix_vehicles_id", "vehicles", ["id"])
    op.create_index("ix_vehicles_plate", "vehicles", ["plate"])

    op.create_table(
        "vehicle_services",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("vehicle_id", sa.Integer(), sa.ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("service_id", sa.Integer(), sa.ForeignKey("services.id"), nullable=False),
        sa.Column("status", sa.String(length=30), nullable=False, server_default="pending"),
        sa.Column("completed_time", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.UniqueConstraint("vehicle_id", "service_id", name="uq_vehicle_service"),
    )
    op.create_index("ix_vehicle_services_id", "vehicle_services", ["id"])
    op.create_index("ix_vehicle_services_vehicle_id", "vehicle_services", ["vehicle_id"])

    op.create_table(
        "vehicle_parts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("vehicle_id", sa.Integer(), sa.ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("part_id", sa.Integer(), sa.ForeignKey("parts.id"), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default="1"),
    )
    op.create_index("ix_vehicle_parts_id", "vehicle_parts", ["id"])
    op.create_index("ix_vehicle_parts_vehicle_id", "vehicle_parts", ["vehicle_id"])

    op.create_table(
        "vehicle_service_parts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("vehicle_id", sa.Integer(), sa.ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("service_id", sa.Integer(), sa.ForeignKey("services.id"), nullable=False),
        sa.Column("part_id", sa.Integer(), sa.ForeignKey("parts.id"), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default="1"),
    )
    op.create_index("ix_vehicle_service_parts_id", "vehicle_service_parts", ["id"])
    op.create_index("ix_vehicle_service_parts_vehicle_id", "vehicle_service_parts", ["vehicle_id"])

    op.create_table(
        "invoices",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("vehicle_id", sa.Integer(), sa.ForeignKey("vehicles.id"), nullable=False),
        sa.Column("days_in_garage", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("garage_stay_rate", money, nullable=False),
        sa.Column("subtotal", money, nullable=False, server_default="0"),
        sa.Column("tax", money, nullable=False, server_default="0"),
        sa.Column("total", money, nullable=False, server_default="0"),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_invoices_id", "invoices", ["id"])
    op.create_index("ix_invoices_vehicle_id", "invoices", ["vehicle_id"])

    op.create_table(
        "invoice_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("invoice_id", sa.Integer(), sa.ForeignKey("invoices.id"), nullable=False),
        sa.Column("item_type", sa.Enum("service", "part", name="invoice_item_type"), nullable=False),
        sa.Column("item_id", sa.Integer(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("purchased_cost", money, nullable=True),
        sa.Column("unit_price", money, nullable=False),
        sa.Column("total", money, nullable=False),
    )
    op.create_index("ix_invoice_items_id", "invoice_items", ["id"])
    op.create_index("ix_invoice_items_invoice_id", "invoice_items", ["invoice_id"])

    op.create_table(
        "worker_payments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("worker_id", sa.Integer(), sa.ForeignKey("workers.id"), nullable=False),
        sa.Column("amount", money, nullable=False),
        sa.Column("method", sa.String(length=50), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("payment_date", sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=True),
    )
    op.create_index("ix_worker_payments_id", "worker_payments", ["id"])
    op.create_index("ix_worker_payments_worker_id", "worker_payments", ["worker_id"])


def downgrade() -> None:
    op.drop_table("worker_payments")
    op.drop_table("invoice_items")
    op.drop_table("invoices")
    op.drop_table("vehicle_service_parts")
    op.drop_table("vehicle_parts")
    op.drop_table("vehicle_services")
    op.drop_table("vehicles")
    op.drop_table("services")
    op.drop_table("workers")
    op.drop_table("parts")
    sa.Enum(name="invoice_item_type").drop(op.get_bind(), checkfirst=True)
