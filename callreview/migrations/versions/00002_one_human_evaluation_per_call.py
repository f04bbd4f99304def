"""Allow at most one human evaluation per call.

Readers always treated the earliest evaluation as authoritative. Later
duplicates are removed and a unique constraint keeps it that way.

Revision ID: 00002
Revises: 00001
Create Date: 2026-10-16
"""

from alembic import op
from sqlalchemy import text

# revision identifiers, used by Alembic.
revision = "00002"
down_revision = "00001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.execute(text("""
        DELETE FROM evaluations
        WHERE id IN (
            SELECT id FROM (
                SELECT id,
                       ROW_NUMBER() OVER (
                           PARTITION BY call_id ORDER BY created_at, id
                       ) AS position
                FROM evaluations
            ) ranked
            WHERE position > 1
        )
    """))

    op.drop_index("ix_evaluations_call_id", "evaluations")
    op.create_unique_constraint("uq_evaluations_call_id", "evaluations", ["call_id"])


def downgrade() -> None:
    op.drop_constraint("uq_evaluations_call_id", "evaluations", type_="unique")
    op.create_index("ix_evaluations_call_id", "evaluations", ["call_id"])
