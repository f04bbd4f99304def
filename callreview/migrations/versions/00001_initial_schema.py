"""Initial schema - clinics, assistants, calls and evaluations.

Revision ID: 00001
Revises:
Create Date: 2026-10-16

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '00001'
down_revision = None
branch_labels = None
depends_on = None

CALL_TYPES = (
    'APPOINTMENT_ADJUSTMENT',
    'NEW_CLIENT_SPANISH',
    'GENERAL_INQUIRY',
    'GENERAL_INQUIRY_TRANSFER',
    'TIME_SENSITIVE',
    'NEW_CLIENT_ENGLISH',
    'LOOKING_FOR_SOMEONE',
    'MISSED_CALL',
    'MISCALANEOUS',
    'BILLING',
)


def upgrade() -> None:
    call_type = sa.Enum(*CALL_TYPES, name='call_type')

    # =====================
    # Ingested entities
    # =====================

    op.create_table(
        'clinics',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'assistants',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('clinic_id', sa.String(36), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['clinic_id'], ['clinics.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_assistants_clinic_id', 'assistants', ['clinic_id'])

    op.create_table(
        'calls',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('assistant_id', sa.String(36), nullable=False),
        sa.Column('start_time', sa.DateTime(), nullable=False),
        sa.Column('end_time', sa.DateTime(), nullable=True),
        sa.Column('duration', sa.Integer(), nullable=True),
        sa.Column('recording_url', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['assistant_id'], ['assistants.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_calls_assistant_id', 'calls', ['assistant_id'])
    op.create_index('ix_calls_start_time', 'calls', ['start_time'])

    # =====================
    # Reviews
    # =====================

    op.create_table(
        'evaluations',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('call_id', sa.String(36), nullable=False),
        sa.Column('reviewer_name', sa.String(255), nullable=False),
        sa.Column('outcome', sa.Boolean(), nullable=False),
        sa.Column('feedback', sa.Text(), nullable=False, server_default=''),
        sa.Column('call_type', call_type, nullable=False),
        sa.Column('tags', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['call_id'], ['calls.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_evaluations_call_id', 'evaluations', ['call_id'])

    op.create_table(
        'ai_evaluations',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('call_id', sa.String(36), nullable=False),
        sa.Column('score', sa.Float(), nullable=True),
        sa.Column('outcome', sa.Boolean(), nullable=False),
        sa.Column('llm_feedback', sa.Text(), nullable=True),
        sa.Column('call_type', call_type, nullable=True),
        sa.Column('tags', sa.JSON(), nullable=False),
        sa.Column('sentiment', sa.String(50), nullable=True),
        sa.Column('protocol_adherence', sa.Float(), nullable=True),
        sa.Column('approved', sa.Boolean(), nullable=True),
        sa.Column('reviewer_name', sa.String(255), nullable=True),
        sa.Column('review_comment', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['call_id'], ['calls.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('call_id'),
        sa.CheckConstraint('score BETWEEN 0 AND 100', name='ck_ai_eval_score'),
        sa.CheckConstraint('protocol_adherence BETWEEN 0 AND 100', name='ck_ai_eval_protocol'),
    )


def downgrade() -> None:
    # Drop in reverse order of dependencies
    op.drop_table('ai_evaluations')
    op.drop_index('ix_evaluations_call_id', 'evaluations')
    op.drop_table('evaluations')
    op.drop_index('ix_calls_start_time', 'calls')
    op.drop_index('ix_calls_assistant_id', 'calls')
    op.drop_table('calls')
    op.drop_index('ix_assistants_clinic_id', 'assistants')
    op.drop_table('assistants')
    op.drop_table('clinics')
    sa.Enum(name='call_type').drop(op.get_bind(), checkfirst=True)
