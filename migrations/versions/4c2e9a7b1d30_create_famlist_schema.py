"""create families, users and weekly shopping list tables

Revision ID: 4c2e9a7b1d30
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4c2e9a7b1d30'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'families',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index(op.f('ix_families_name'), 'families', ['name'], unique=True)

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(length=120), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('full_name', sa.String(length=100), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('last_login', sa.DateTime(), nullable=True),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('hobbies', sa.Text(), nullable=True),
        sa.Column('career', sa.String(length=100), nullable=True),
        sa.Column('location', sa.String(length=100), nullable=True),
        sa.Column('failed_login_attempts', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('locked_until', sa.DateTime(), nullable=True),
        sa.Column('family_id', sa.Integer(), sa.ForeignKey('families.id'), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='member'),
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_family_id'), 'users', ['family_id'], unique=False)

    op.create_table(
        'shopping_lists',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('family_id', sa.Integer(), sa.ForeignKey('families.id'), nullable=False),
        sa.Column('week_start', sa.Date(), nullable=False),
        sa.Column('week_end', sa.Date(), nullable=False),
        sa.Column('is_archived', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('archived_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index(op.f('ix_shopping_lists_family_id'), 'shopping_lists', ['family_id'], unique=False)
    op.create_index(op.f('ix_shopping_lists_week_start'), 'shopping_lists', ['week_start'], unique=False)
    op.create_index(
        'uq_shopping_lists_family_week_active',
        'shopping_lists',
        ['family_id', 'week_start'],
        unique=True,
        sqlite_where=sa.text('is_archived = 0'),
        postgresql_where=sa.text('is_archived = false'),
    )

    op.create_table(
        'shopping_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('shopping_list_id', sa.Integer(), sa.ForeignKey('shopping_lists.id'), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('category', sa.String(length=50), nullable=False, server_default='Other'),
        sa.Column('completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('skipped', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('added_by_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint('quantity >= 1', name='ck_shopping_items_quantity_positive'),
    )
    op.create_index(op.f('ix_shopping_items_shopping_list_id'), 'shopping_items', ['shopping_list_id'], unique=False)
    op.create_index(op.f('ix_shopping_items_added_by_id'), 'shopping_items', ['added_by_id'], unique=False)


def downgrade():
    op.drop_index(op.f('ix_shopping_items_added_by_id'), table_name='shopping_items')
    op.drop_index(op.f('ix_shopping_items_shopping_list_id'), table_name='shopping_items')
    op.drop_table('shopping_items')
    op.drop_index('uq_shopping_lists_family_week_active', table_name='shopping_lists')
    op.drop_index(op.f('ix_shopping_lists_week_start'), table_name='shopping_lists')
    op.drop_index(op.f('ix_shopping_lists_family_id'), table_name='shopping_lists')
    op.drop_table('shopping_lists')
    op.drop_index(op.f('ix_users_family_id'), table_name='users')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')
    op.drop_index(op.f('ix_families_name'), table_name='families')
    op.drop_table('families')
