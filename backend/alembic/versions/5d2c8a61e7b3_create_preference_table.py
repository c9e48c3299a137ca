"""create_preference_table

Revision ID: 5d2c8a61e7b3
Revises: 3b7e1f2a9c40
Create Date: 2026-10-12 10:31:47.602915

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5d2c8a61e7b3'
down_revision: Union[str, Sequence[str], None] = '3b7e1f2a9c40'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "preference",
        sa.Column("key", sa.String(length=255), nullable=False),
        sa.Column("value", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("key"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("preference", if_exists=True)
