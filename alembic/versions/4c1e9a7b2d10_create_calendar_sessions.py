"""Create calendar_sessions for retained navigator state.

Revision ID: 4c1e9a7b2d10
Revises:
Create Date: 2026-10-16 09:12:41.208113

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "4c1e9a7b2d10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

view_mode = sa.Enum("week", "day", name="viewmode")


def upgrade() -> None:
    op.create_table(
        "calendar_sessions",
        sa.Column("session_id", sa.String(length=26), primary_key=True),
        sa.Column("reference_date", sa.Date(), nullable=False),
        sa.Column("view_mode", view_mode, nullable=False, server_default="week"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("calendar_sessions")
    view_mode.drop(op.get_bind(), checkfirst=True)
