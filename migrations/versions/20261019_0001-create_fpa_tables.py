"""Create financial records, lookup tables and change history.

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a1b2c3d4e5f6'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Financial records (immutable facts)
    op.create_table(
        'financial_records',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('type', sa.String(), nullable=False),
        sa.Column('account', sa.String(), nullable=False),
        sa.Column('department', sa.String(), nullable=True),
        # Period
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('month', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=20, scale=6), nullable=False),
        # Scenario / version tagging
        sa.Column('scenario', sa.String(), nullable=False),
        sa.Column('version', sa.String(), nullable=False),
        sa.Column('upload_timestamp', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_financial_records_type', 'financial_records', ['type'])
    op.create_index('ix_financial_records_account', 'financial_records', ['account'])
    op.create_index('ix_financial_records_department', 'financial_records', ['department'])
    op.create_index('ix_financial_records_scenario', 'financial_records', ['scenario'])
    op.create_index('ix_financial_records_upload_timestamp', 'financial_records', ['upload_timestamp'])
    op.create_index('ix_financial_records_scenario_version', 'financial_records', ['scenario', 'version'])
    op.create_index('ix_financial_records_period', 'financial_records', ['year', 'month'])

    # FX rates
    op.create_table(
        'fx_rates',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('from_currency', sa.String(), nullable=False),
        sa.Column('to_currency', sa.String(), nullable=False),
        sa.Column('rate', sa.Numeric(precision=18, scale=8), nullable=False),
        sa.Column('period', sa.String(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_fx_rates_from_currency', 'fx_rates', ['from_currency'])
    op.create_index('ix_fx_rates_to_currency', 'fx_rates', ['to_currency'])
    op.create_index('ix_fx_rates_period', 'fx_rates', ['period'])
    op.create_index('ix_fx_rate_pair_period', 'fx_rates', ['from_currency', 'to_currency', 'period'])

    # Account maps
    op.create_table(
        'account_maps',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('account_code', sa.String(), nullable=False),
        sa.Column('account_name', sa.String(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_account_maps_account_code', 'account_maps', ['account_code'])

    # Change history (append-only)
    op.create_table(
        'change_history',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('record_id', sa.String(), nullable=False),
        sa.Column('action', sa.String(), nullable=False),
        sa.Column('user_name', sa.String(), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['record_id'], ['financial_records.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_change_history_record_id', 'change_history', ['record_id'])
    op.create_index('ix_change_history_action', 'change_history', ['action'])
    op.create_index('ix_change_history_timestamp', 'change_history', ['timestamp'])
    op.create_index('ix_change_history_record_time', 'change_history', ['record_id', 'timestamp'])


def downgrade() -> None:
    op.drop_table('change_history')
    op.drop_table('account_maps')
    op.drop_table('fx_rates')
    op.drop_table('financial_records')
