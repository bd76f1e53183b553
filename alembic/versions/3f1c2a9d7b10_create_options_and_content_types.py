"""create_options_and_content_types

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""
import uuid
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '3f1c2a9d7b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the option store and content type registry."""
    op.create_table(
        'options',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('option_name', sa.String(191), nullable=False),
        sa.Column('option_value', postgresql.JSONB(), nullable=True),
        sa.Column('autoload', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_options_option_name', 'options', ['option_name'], unique=True)

    content_types = op.create_table(
        'content_types',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(20), nullable=False),
        sa.Column('label', sa.String(255), nullable=False),
        sa.Column('public', sa.Boolean(), nullable=False),
        sa.Column('builtin', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_content_types_name', 'content_types', ['name'], unique=True)

    # Built-in types every install starts with
    op.bulk_insert(
        content_types,
        [
            {'id': uuid.uuid4(), 'name': 'post', 'label': 'Posts', 'public': True, 'builtin': True},
            {'id': uuid.uuid4(), 'name': 'page', 'label': 'Pages', 'public': True, 'builtin': True},
            {'id': uuid.uuid4(), 'name': 'attachment', 'label': 'Media', 'public': True, 'builtin': True},
        ],
    )


def downgrade() -> None:
    """Drop the option store and content type registry."""
    op.drop_index('ix_content_types_name', table_name='content_types')
    op.drop_table('content_types')
    op.drop_index('ix_options_option_name', table_name='options')
    op.drop_table('options')
