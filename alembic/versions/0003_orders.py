from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "0003_orders"
down_revision = "0002_accounts_reset_tokens"
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "orders",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("order_id", sa.String(length=80), nullable=False, unique=True),

        sa.Column("buyer", sa.String(length=200), nullable=True),
        sa.Column("seller", sa.String(length=200), nullable=True),
        sa.Column("buyer_id", sa.Integer(), nullable=True),

        sa.Column("total", sa.Float(), nullable=False),
        sa.Column("subtotal", sa.Float(), nullable=False),
        sa.Column("tax", sa.Float(), nullable=False, server_default="0"),

        sa.Column("payment_method", sa.String(length=40), nullable=False),
        sa.Column("payment_details", postgresql.JSONB(astext_type=sa.Text()), nullable=True),

        sa.Column("status", sa.String(length=30), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("items", postgresql.JSONB(astext_type=sa.Text()), nullable=True),

        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_orders_status", "orders", ["status"])


def downgrade():
    op.drop_index("ix_orders_status", table_name="orders")
    op.drop_table("orders")
