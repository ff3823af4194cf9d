"""Initial schema

Tables:
    - items: Skin catalog, keyed by name_id
    - trades: Append-only BUY/SELL facts
    - inventory: Current position per item (weighted-average cost)

Revision ID: 001
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # ==========================================================================
    # ITEMS
    # ==========================================================================
    op.create_table(
        'items',
        sa.Column('id', sa.Integer(), primary_key=True, index=True),
        sa.Column('market_hash_name', sa.String(512), nullable=False, unique=True, index=True),
        sa.Column('en_name', sa.String(512), nullable=False),
        sa.Column('cn_name', sa.String(512), nullable=False),
        sa.Column('name_id', sa.Integer(), nullable=False, unique=True, index=True),
    )

    # ==========================================================================
    # TRADES
    # ==========================================================================
    op.create_table(
        'trades',
        sa.Column('id', sa.Integer(), primary_key=True, index=True),
        sa.Column('name_id', sa.Integer(), sa.ForeignKey('items.name_id'), nullable=False),
        sa.Column('trade_type', sa.Enum('BUY', 'SELL', name='tradetype'), nullable=False),
        sa.Column('unit_price', sa.Numeric(19, 4), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('total_amount', sa.Numeric(19, 4), nullable=False),
        sa.Column('platform', sa.String(128), nullable=True),
        sa.Column('counterparty', sa.String(128), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, index=True),
    )
    op.create_index('ix_trade_name_id_created_at', 'trades', ['name_id', 'created_at'])

    # ==========================================================================
    # INVENTORY
    # ==========================================================================
    op.create_table(
        'inventory',
        sa.Column('id', sa.Integer(), primary_key=True, index=True),
        sa.Column('name_id', sa.Integer(), sa.ForeignKey('items.name_id'), nullable=False, unique=True, index=True),
        sa.Column('current_quantity', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('weighted_average_cost', sa.Numeric(19, 4), nullable=False, server_default='0'),
        sa.Column('total_investment_cost', sa.Numeric(19, 4), nullable=False, server_default='0'),
        sa.Column('cost_total', sa.Numeric(28, 10), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('last_updated_at', sa.DateTime(timezone=True), nullable=False),
    )


def downgrade() -> None:
    op.drop_table('inventory')
    op.drop_index('ix_trade_name_id_created_at', table_name='trades')
    op.drop_table('trades')
    op.drop_table('items')
    sa.Enum(name='tradetype').drop(op.get_bind(), checkfirst=True)
