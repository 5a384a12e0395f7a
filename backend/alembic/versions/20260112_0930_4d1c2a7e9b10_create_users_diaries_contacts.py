"""create_users_diaries_contacts

Revision ID: 4d1c2a7e9b10
Revises:
Create Date: 2026-01-12 09:30:12.418203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '4d1c2a7e9b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('user_id', sa.Uuid(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        # NULL for accounts created through Google sign-in
        sa.Column('password_hash', sa.String(255), nullable=True),
        sa.Column('nickname', sa.String(100), nullable=False),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('timer_status', sa.String(16), nullable=False, server_default='active'),
        sa.Column('timer_idle_threshold_sec', sa.Integer(), nullable=False, server_default='2592000'),
        sa.Column('last_active_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'diaries',
        sa.Column('diary_id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_diaries_user_id', 'diaries', ['user_id'])
    op.create_index('ix_diaries_user_id_created_at', 'diaries', ['user_id', 'created_at'])

    op.create_table(
        'contacts',
        sa.Column('contact_id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('phone', sa.String(32), nullable=True),
    )
    op.create_index('ix_contacts_user_id', 'contacts', ['user_id'])


def downgrade() -> None:
    op.drop_index('ix_contacts_user_id', table_name='contacts')
    op.drop_table('contacts')

    op.drop_index('ix_diaries_user_id_created_at', table_name='diaries')
    op.drop_index('ix_diaries_user_id', table_name='diaries')
    op.drop_table('diaries')

    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
