"""Add training plan, training session and academy settings tables

Revision ID: 001
Revises:
Create Date: 2026-10-12 09:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
import sqlmodel
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create training_plans, training_sessions and academy_settings tables."""
    op.create_table('training_plans', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('academy_id', sqlmodel.sql.sqltypes.AutoString(length=64), nullable=False),
        sa.Column('player_id', sqlmodel.sql.sqltypes.AutoString(length=64), nullable=False),
        sa.Column('plan', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('academy_id', 'player_id', name='uq_training_plan_academy_player'))
    op.create_index(op.f('ix_training_plans_academy_id'), 'training_plans', ['academy_id'])
    op.create_index(op.f('ix_training_plans_player_id'), 'training_plans', ['player_id'])

    op.create_table('training_sessions', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('academy_id', sqlmodel.sql.sqltypes.AutoString(length=64), nullable=False),
        sa.Column('date', sa.DateTime(), nullable=False),
        sa.Column('data', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_training_sessions_academy_id'), 'training_sessions', ['academy_id'])
    op.create_index(op.f('ix_training_sessions_date'), 'training_sessions', ['date'])

    op.create_table('academy_settings', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('academy_id', sqlmodel.sql.sqltypes.AutoString(length=64), nullable=False),
        sa.Column('analysis_window_days', sa.Integer(), nullable=False, server_default='7'),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_academy_settings_academy_id'), 'academy_settings', ['academy_id'], unique=True)


def downgrade() -> None:
    """Drop the training data tables."""
    op.drop_index(op.f('ix_academy_settings_academy_id'), table_name='academy_settings')
    op.drop_table('academy_settings')
    op.drop_index(op.f('ix_training_sessions_date'), table_name='training_sessions')
    op.drop_index(op.f('ix_training_sessions_academy_id'), table_name='training_sessions')
    op.drop_table('training_sessions')
    op.drop_index(op.f('ix_training_plans_player_id'), table_name='training_plans')
    op.drop_index(op.f('ix_training_plans_academy_id'), table_name='training_plans')
    op.drop_table('training_plans')
