"""Create proposals and proposal_sections tables

Revision ID: 001
Revises:
Create Date: 2026-10-17

WHY: Proposals are owned by a single user; sections hang off a proposal and
inherit its ownership. The foreign key carries no ON DELETE clause; section
cleanup is done by the application before a proposal is removed.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """
    Create proposals and proposal_sections tables.
    """
    op.create_table(
        'proposals',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('user_id', sa.String(length=255), nullable=False, comment='Owner identity'),
        sa.Column('title', sa.Text(), nullable=False, comment='Internal proposal name'),
        sa.Column('client_name', sa.Text(), nullable=True),
        sa.Column('project_name', sa.Text(), nullable=True),
        sa.Column('currency', sa.String(length=16), nullable=True),
        sa.Column('estimated_value', sa.Float(), nullable=True),
        sa.Column('status', sa.String(length=64), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_proposals_user_id', 'proposals', ['user_id'])

    op.create_table(
        'proposal_sections',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('proposal_id', sa.String(length=64), nullable=False, comment='Parent proposal'),
        sa.Column('type', sa.String(length=64), nullable=True),
        sa.Column('order_index', sa.Integer(), nullable=False),
        sa.Column('heading', sa.Text(), nullable=True),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.ForeignKeyConstraint(['proposal_id'], ['proposals.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_proposal_sections_proposal_id', 'proposal_sections', ['proposal_id'])


def downgrade() -> None:
    """
    Drop proposal_sections and proposals tables.
    """
    # Drop sections first (has FK to proposals)
    op.drop_index('ix_proposal_sections_proposal_id', table_name='proposal_sections')
    op.drop_table('proposal_sections')

    op.drop_index('ix_proposals_user_id', table_name='proposals')
    op.drop_table('proposals')
