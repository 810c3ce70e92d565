"""Create users, notes and note_tags tables

Revision ID: 0001
Revises:
Create Date: 2025-09-20 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from notesapp.core.models.types import GUID


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', GUID(), primary_key=True),
        sa.Column('username', sa.String(length=20), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint('username'),
        sa.UniqueConstraint('email'),
        sa.CheckConstraint(
            'length(username) >= 3 AND length(username) <= 20', name='ck_users_username_len'
        ),
        sa.CheckConstraint('email = lower(email)', name='ck_users_email_lowercase'),
    )

    op.create_table(
        'notes',
        sa.Column('id', GUID(), primary_key=True),
        sa.Column('title', sa.String(length=100), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('is_public', sa.Boolean(), nullable=False),
        sa.Column(
            'author_id', GUID(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False
        ),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint('length(title) <= 100', name='ck_notes_title_len'),
        sa.CheckConstraint('length(content) <= 5000', name='ck_notes_content_len'),
    )
    op.create_index('idx_notes_author_updated', 'notes', ['author_id', 'updated_at'])
    op.create_index('idx_notes_public_updated', 'notes', ['is_public', 'updated_at'])

    op.create_table(
        'note_tags',
        sa.Column('id', GUID(), primary_key=True),
        sa.Column(
            'note_id', GUID(), sa.ForeignKey('notes.id', ondelete='CASCADE'), nullable=False
        ),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('idx_note_tags_note_id', 'note_tags', ['note_id'])
    op.create_index('idx_note_tags_name', 'note_tags', ['name'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('idx_note_tags_name', table_name='note_tags')
    op.drop_index('idx_note_tags_note_id', table_name='note_tags')
    op.drop_table('note_tags')
    op.drop_index('idx_notes_public_updated', table_name='notes')
    op.drop_index('idx_notes_author_updated', table_name='notes')
    op.drop_table('notes')
    op.drop_table('users')
