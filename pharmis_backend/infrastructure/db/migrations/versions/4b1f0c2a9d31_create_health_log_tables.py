"""create_health_log_tables

Revision ID: 4b1f0c2a9d31
Revises:
Create Date: 2025-04-26 08:08:37.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '4b1f0c2a9d31'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'daily_logs',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('mood', sa.Integer(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('user_id', 'date', name='uq_daily_logs_user_date'),
        sa.CheckConstraint('mood BETWEEN 1 AND 5', name='ck_daily_logs_mood'),
    )
    op.create_index('ix_daily_logs_user_id', 'daily_logs', ['user_id'])

    op.create_table(
        'symptoms',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('daily_log_id', postgresql.UUID(as_uuid=True),
                  sa.ForeignKey('daily_logs.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('severity', sa.Integer(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint('severity BETWEEN 1 AND 3', name='ck_symptoms_severity'),
    )
    op.create_index('ix_symptoms_daily_log_id', 'symptoms', ['daily_log_id'])

    op.create_table(
        'medication_logs',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('daily_log_id', postgresql.UUID(as_uuid=True),
                  sa.ForeignKey('daily_logs.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('dosage', sa.String(length=100), nullable=True),
        sa.Column('taken', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_medication_logs_daily_log_id', 'medication_logs', ['daily_log_id'])

    op.create_table(
        'lifestyle_logs',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('activity_type', sa.String(length=20), nullable=False),
        sa.Column('activity_name', sa.String(length=100), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=True),
        sa.Column('intensity', sa.String(length=50), nullable=True),
        sa.Column('quantity', sa.Integer(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_lifestyle_logs_user_id', 'lifestyle_logs', ['user_id'])
    op.create_index('ix_lifestyle_logs_date', 'lifestyle_logs', ['date'])

    op.create_table(
        'health_insights',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('category', sa.String(length=50), nullable=False),
        sa.Column('generated_date', sa.Date(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        # one insight per user per day; concurrent generators lose on insert
        sa.UniqueConstraint('user_id', 'generated_date', name='uq_health_insights_user_day'),
    )
    op.create_index('ix_health_insights_user_id', 'health_insights', ['user_id'])
    op.create_index('ix_health_insights_generated_date', 'health_insights', ['generated_date'])
    op.create_index('ix_health_insights_user_category', 'health_insights', ['user_id', 'category'])


def downgrade() -> None:
    op.drop_index('ix_health_insights_user_category', table_name='health_insights')
    op.drop_index('ix_health_insights_generated_date', table_name='health_insights')
    op.drop_index('ix_health_insights_user_id', table_name='health_insights')
    op.drop_table('health_insights')
    op.drop_index('ix_lifestyle_logs_date', table_name='lifestyle_logs')
    op.drop_index('ix_lifestyle_logs_user_id', table_name='lifestyle_logs')
    op.drop_table('lifestyle_logs')
    op.drop_index('ix_medication_logs_daily_log_id', table_name='medication_logs')
    op.drop_table('medication_logs')
    op.drop_index('ix_symptoms_daily_log_id', table_name='symptoms')
    op.drop_table('symptoms')
    op.drop_index('ix_daily_logs_user_id', table_name='daily_logs')
    op.drop_table('daily_logs')
