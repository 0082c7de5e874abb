"""persisted dashboard filter values

Revision ID: 0001_filter_preferences
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


revision = '0001_filter_preferences'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'filter_preferences',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('scope', sa.String(length=128), nullable=False),
        sa.Column('pref_key', sa.String(length=64), nullable=False),
        sa.Column('value', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_filter_preferences_id', 'filter_preferences', ['id'])
    op.create_index('ix_filter_preferences_scope', 'filter_preferences', ['scope'])
    op.create_index('ix_filter_preferences_pref_key', 'filter_preferences', ['pref_key'])
    op.create_index(
        'ux_filter_preferences_scope_key',
        'filter_preferences',
        ['scope', 'pref_key'],
        unique=True,
    )


def downgrade() -> None:
    op.drop_index('ux_filter_preferences_scope_key', table_name='filter_preferences')
    op.drop_index('ix_filter_preferences_pref_key', table_name='filter_preferences')
    op.drop_index('ix_filter_preferences_scope', table_name='filter_preferences')
    op.drop_index('ix_filter_preferences_id', table_name='filter_preferences')
    op.drop_table('filter_preferences')
