"""create reporting tables

Revision ID: 3b1f0c7a9d21
Revises:
Create Date: 2022-03-01 09:00:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "3b1f0c7a9d21"
down_revision = None
branch_labels = None
depends_on = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        server_default=sa.text("(CURRENT_TIMESTAMP)"),
        nullable=True,
    )


def upgrade():
    for table in ("tenants", "categories"):
        op.create_table(
            table,
            sa.Column("id", sa.String(length=36), nullable=False),
            sa.Column("source", sa.String(length=255), nullable=False),
            sa.Column("target", sa.String(length=255), nullable=True),
            _created_at(),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(f"ix_{table}_source", table, ["source"], unique=True)

    op.create_table(
        "products",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("source", sa.String(length=255), nullable=False),
        sa.Column("target", sa.String(length=255), nullable=True),
        sa.Column(
            "amount", sa.Numeric(precision=20, scale=6), nullable=False, server_default="0"
        ),
        sa.Column("unit", sa.String(length=50), nullable=False, server_default=""),
        sa.Column("during_start", sa.DateTime(timezone=True), nullable=True),
        sa.Column("during_end", sa.DateTime(timezone=True), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("source", "during_start", name="uq_products_source_during_start"),
    )
    op.create_index("ix_products_source", "products", ["source"])

    op.create_table(
        "discounts",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("source", sa.String(length=255), nullable=False),
        sa.Column(
            "discount", sa.Numeric(precision=5, scale=4), nullable=False, server_default="0"
        ),
        sa.Column("during_start", sa.DateTime(timezone=True), nullable=True),
        sa.Column("during_end", sa.DateTime(timezone=True), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "discount >= 0 AND discount < 1", name="ck_discounts_discount_range"
        ),
        sa.UniqueConstraint("source", "during_start", name="uq_discounts_source_during_start"),
    )
    op.create_index("ix_discounts_source", "discounts", ["source"])

    op.create_table(
        "queries",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("parent_id", sa.String(length=36), nullable=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("display_name", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("query", sa.Text(), nullable=False, server_default=""),
        sa.Column("unit", sa.String(length=50), nullable=False, server_default=""),
        sa.Column("during_start", sa.DateTime(timezone=True), nullable=True),
        sa.Column("during_end", sa.DateTime(timezone=True), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["parent_id"], ["queries.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_queries_parent_id", "queries", ["parent_id"])
    op.create_index("ix_queries_name", "queries", ["name"])

    op.create_table(
        "date_times",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("month", sa.Integer(), nullable=False),
        sa.Column("day", sa.Integer(), nullable=False),
        sa.Column("hour", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("timestamp", name="uq_date_times_timestamp"),
    )
    op.create_index("ix_date_times_year_month", "date_times", ["year", "month"])

    op.create_table(
        "facts",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("date_time_id", sa.String(length=36), nullable=False),
        sa.Column("query_id", sa.String(length=36), nullable=False),
        sa.Column("tenant_id", sa.String(length=36), nullable=False),
        sa.Column("category_id", sa.String(length=36), nullable=False),
        sa.Column("product_id", sa.String(length=36), nullable=False),
        sa.Column("discount_id", sa.String(length=36), nullable=False),
        sa.Column(
            "quantity", sa.Numeric(precision=20, scale=6), nullable=False, server_default="0"
        ),
        sa.ForeignKeyConstraint(["date_time_id"], ["date_times.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["query_id"], ["queries.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["category_id"], ["categories.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["product_id"], ["products.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["discount_id"], ["discounts.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("quantity >= 0", name="ck_facts_quantity_non_negative"),
        sa.UniqueConstraint(
            "date_time_id",
            "query_id",
            "tenant_id",
            "category_id",
            "product_id",
            "discount_id",
            name="uq_facts_dimensions",
        ),
    )
    for column in (
        "date_time_id",
        "query_id",
        "tenant_id",
        "category_id",
        "product_id",
        "discount_id",
    ):
        op.create_index(f"ix_facts_{column}", "facts", [column])


def downgrade():
    op.drop_table("facts")
    op.drop_table("date_times")
    op.drop_table("queries")
    op.drop_table("discounts")
    op.drop_table("products")
    op.drop_table("categories")
    op.drop_table("tenants")
