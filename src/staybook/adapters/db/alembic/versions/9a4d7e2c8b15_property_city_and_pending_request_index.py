"""property city and pending request index

Revision ID: 9a4d7e2c8b15
Revises: 3f6c2a1d9b07
Create Date: 2026-10-19 10:02:41.277904

"""

# pylint: disable=invalid-name

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# pylint: disable=no-member

# revision identifiers, used by Alembic.
revision: str = "9a4d7e2c8b15"
down_revision: str | Sequence[str] | None = "3f6c2a1d9b07"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

PENDING_ONLY = "status = 'PENDING'"


def upgrade() -> None:
    """Upgrade schema."""

    op.add_column(
        "properties",
        sa.Column("city", sa.String(length=100), nullable=False, server_default=""),
    )
    op.create_index("ix_properties_city", "properties", ["city"])

    op.create_index(
        "uq_change_role_requests_pending_user",
        "change_role_requests",
        ["user_id"],
        unique=True,
        postgresql_where=sa.text(PENDING_ONLY),
        sqlite_where=sa.text(PENDING_ONLY),
    )


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_index(
        "uq_change_role_requests_pending_user", table_name="change_role_requests"
    )
    op.drop_index("ix_properties_city", table_name="properties")
    op.drop_column("properties", "city")
