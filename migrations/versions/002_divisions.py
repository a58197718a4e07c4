"""Countries and first-level divisions; customers reference a division.

Revision ID: 002_divisions
Revises: 001_initial
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "002_divisions"
down_revision: Union[str, None] = "001_initial"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "countries",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_table(
        "first_level_divisions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("country_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["country_id"], ["countries.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_first_level_divisions_country_id"), "first_level_divisions", ["country_id"], unique=False
    )
    with op.batch_alter_table("customers") as batch_op:
        batch_op.create_foreign_key(
            "fk_customers_division_id", "first_level_divisions", ["division_id"], ["id"]
        )


def downgrade() -> None:
    with op.batch_alter_table("customers") as batch_op:
        batch_op.drop_constraint("fk_customers_division_id", type_="foreignkey")
    op.drop_index(op.f("ix_first_level_divisions_country_id"), table_name="first_level_divisions")
    op.drop_table("first_level_divisions")
    op.drop_table("countries")
