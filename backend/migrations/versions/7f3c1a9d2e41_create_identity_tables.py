"""create users and pets tables

Revision ID: 7f3c1a9d2e41
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '7f3c1a9d2e41'
down_revision = None
branch_labels = None
depends_on = None

user_role = sa.Enum('USER', 'ADMIN', name='enum_user_role')
user_status = sa.Enum(
    'ACTIVE', 'SUSPENDED', 'DORMANT', 'DELETED', 'REGISTER', name='enum_user_status'
)


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=True),
        sa.Column('nickname', sa.String(length=50), nullable=True),
        sa.Column('profile_url', sa.String(length=512), nullable=True),
        sa.Column('role', user_role, nullable=False),
        sa.Column('status', user_status, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_users'),
        sa.UniqueConstraint('email', name='uq_users_email'),
        sa.UniqueConstraint('nickname', name='uq_users_nickname'),
    )
    op.create_index('ix_users_email', 'users', ['email'])

    op.create_table(
        'pets',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('device_id', sa.String(length=64), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_pets'),
        sa.UniqueConstraint('device_id', name='uq_pets_device_id'),
    )


def downgrade():
    op.drop_table('pets')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
    user_status.drop(op.get_bind(), checkfirst=True)
    user_role.drop(op.get_bind(), checkfirst=True)
