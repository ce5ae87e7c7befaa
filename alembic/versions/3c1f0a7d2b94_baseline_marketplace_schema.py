"""baseline marketplace schema

Revision ID: 3c1f0a7d2b94
Revises: 
Create Date: 2026-09-28 10:12:41.518204

Creates users, ai_employees, hiring_records, reviews and favorites.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '3c1f0a7d2b94'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def table_exists(table_name: str) -> bool:
    """Check if a table exists in the database."""
    bind = op.get_bind()
    inspector = inspect(bind)
    return table_name in inspector.get_table_names()


def upgrade() -> None:
    if not table_exists('users'):
        op.create_table('users',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('email', sa.String(), nullable=False),
            sa.Column('username', sa.String(length=50), nullable=False),
            sa.Column('password_hash', sa.String(), nullable=False),
            sa.Column('role', sa.String(length=20), nullable=False),
            sa.Column('phone', sa.String(length=20), nullable=True),
            sa.Column('avatar_url', sa.String(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
        op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
        op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=True)

    if not table_exists('ai_employees'):
        op.create_table('ai_employees',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('employee_code', sa.String(length=50), nullable=False),
            sa.Column('name', sa.String(length=100), nullable=False),
            sa.Column('category', sa.String(length=50), nullable=False),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('avatar_url', sa.String(), nullable=True),
            sa.Column('hourly_rate', sa.Float(), nullable=False),
            sa.Column('monthly_rate', sa.Float(), nullable=False),
            sa.Column('status', sa.String(length=20), nullable=False),
            sa.Column('rating', sa.Float(), nullable=False),
            sa.Column('total_reviews', sa.Integer(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('idx_status_rating', 'ai_employees', ['status', 'rating'], unique=False)
        op.create_index(op.f('ix_ai_employees_id'), 'ai_employees', ['id'], unique=False)
        op.create_index(op.f('ix_ai_employees_employee_code'), 'ai_employees', ['employee_code'], unique=True)
        op.create_index(op.f('ix_ai_employees_name'), 'ai_employees', ['name'], unique=False)
        op.create_index(op.f('ix_ai_employees_category'), 'ai_employees', ['category'], unique=False)
        op.create_index(op.f('ix_ai_employees_status'), 'ai_employees', ['status'], unique=False)
        op.create_index(op.f('ix_ai_employees_created_at'), 'ai_employees', ['created_at'], unique=False)

    if not table_exists('hiring_records'):
        op.create_table('hiring_records',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column('ai_employee_id', sa.Integer(), nullable=False),
            sa.Column('hire_type', sa.String(length=20), nullable=False),
            sa.Column('rate', sa.Float(), nullable=False),
            sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
            sa.Column('end_date', sa.DateTime(timezone=True), nullable=True),
            sa.Column('task_description', sa.Text(), nullable=True),
            sa.Column('status', sa.String(length=20), nullable=False),
            sa.Column('total_cost', sa.Float(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
            sa.ForeignKeyConstraint(['ai_employee_id'], ['ai_employees.id'], ),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('idx_hiring_user_status', 'hiring_records', ['user_id', 'status'], unique=False)
        op.create_index(op.f('ix_hiring_records_id'), 'hiring_records', ['id'], unique=False)
        op.create_index(op.f('ix_hiring_records_user_id'), 'hiring_records', ['user_id'], unique=False)
        op.create_index(op.f('ix_hiring_records_ai_employee_id'), 'hiring_records', ['ai_employee_id'], unique=False)
        op.create_index(op.f('ix_hiring_records_status'), 'hiring_records', ['status'], unique=False)
        op.create_index(op.f('ix_hiring_records_created_at'), 'hiring_records', ['created_at'], unique=False)

    if not table_exists('reviews'):
        op.create_table('reviews',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column('ai_employee_id', sa.Integer(), nullable=False),
            sa.Column('hiring_record_id', sa.Integer(), nullable=False),
            sa.Column('rating', sa.Integer(), nullable=False),
            sa.Column('comment', sa.Text(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.CheckConstraint('rating >= 1 AND rating <= 5', name='ck_reviews_rating_range'),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
            sa.ForeignKeyConstraint(['ai_employee_id'], ['ai_employees.id'], ),
            sa.ForeignKeyConstraint(['hiring_record_id'], ['hiring_records.id'], ),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('hiring_record_id')
        )
        op.create_index(op.f('ix_reviews_id'), 'reviews', ['id'], unique=False)
        op.create_index(op.f('ix_reviews_user_id'), 'reviews', ['user_id'], unique=False)
        op.create_index(op.f('ix_reviews_ai_employee_id'), 'reviews', ['ai_employee_id'], unique=False)
        op.create_index(op.f('ix_reviews_created_at'), 'reviews', ['created_at'], unique=False)

    if not table_exists('favorites'):
        op.create_table('favorites',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column('ai_employee_id', sa.Integer(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
            sa.ForeignKeyConstraint(['ai_employee_id'], ['ai_employees.id'], ),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('user_id', 'ai_employee_id', name='uq_favorites_user_employee')
        )
        op.create_index(op.f('ix_favorites_id'), 'favorites', ['id'], unique=False)
        op.create_index(op.f('ix_favorites_user_id'), 'favorites', ['user_id'], unique=False)


def downgrade() -> None:
    op.drop_table('favorites')
    op.drop_table('reviews')
    op.drop_table('hiring_records')
    op.drop_table('ai_employees')
    op.drop_table('users')
