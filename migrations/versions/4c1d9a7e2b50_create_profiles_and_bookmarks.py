"""create_profiles_and_bookmarks

Revision ID: 4c1d9a7e2b50
Revises:
Create Date: 2026-10-19 10:12:41.508231

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4c1d9a7e2b50'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create profiles and bookmarks tables."""
    op.create_table('profiles',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('color_hex', sa.String(length=7), server_default='#3B82F6', nullable=False),
        sa.Column('is_default', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_profiles_user_created', 'profiles', ['user_id', 'created_at'], unique=False)
    # At most one default profile per user
    op.create_index(
        'uq_profiles_user_default',
        'profiles',
        ['user_id'],
        unique=True,
        postgresql_where=sa.text('is_default'),
    )

    op.create_table('bookmarks',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('profile_id', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('url', sa.Text(), nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('favicon', sa.Text(), nullable=True),
        sa.Column('added_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_bookmarks_profile_added', 'bookmarks', ['profile_id', 'added_at'], unique=False)
    op.create_index('ix_bookmarks_user_id', 'bookmarks', ['user_id'], unique=False)


def downgrade() -> None:
    """Drop profiles and bookmarks tables."""
    op.drop_index('ix_bookmarks_user_id', table_name='bookmarks')
    op.drop_index('ix_bookmarks_profile_added', table_name='bookmarks')
    op.drop_table('bookmarks')
    op.drop_index('uq_profiles_user_default', table_name='profiles')
    op.drop_index('ix_profiles_user_created', table_name='profiles')
    op.drop_table('profiles')
