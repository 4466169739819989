"""initial schema

Revision ID: 4f1c2a9e7b30
Revises:
Create Date: 2026-10-18 10:00:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '4f1c2a9e7b30'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table('projects',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=False, server_default='My React Project'),
        sa.Column('owner_id', sa.Text(), nullable=False),
        sa.Column('file_ids', sa.JSON(), nullable=False, server_default='[]'),
        sa.Column('framework', sa.String(length=20), nullable=False, server_default='react'),
        sa.Column('is_public', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('last_accessed', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_projects_owner_created', 'projects', ['owner_id', 'created_at'])
    op.create_index('ix_projects_last_accessed', 'projects', ['last_accessed'])

    op.create_table('project_files',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('path', sa.Text(), nullable=False),
        sa.Column('type', sa.String(length=10), nullable=False),
        sa.Column('content', sa.Text(), nullable=False, server_default=''),
        sa.Column('language', sa.String(length=30), nullable=False, server_default='plaintext'),
        sa.Column('project_id', sa.Uuid(), nullable=False),
        sa.Column('parent_id', sa.Uuid(), nullable=True),
        sa.Column('is_root', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['project_id'], ['projects.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['parent_id'], ['project_files.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('project_id', 'path', name='uq_project_files_project_path')
    )
    op.create_index('ix_project_files_project_id', 'project_files', ['project_id'])
    op.create_index('ix_project_files_parent_id', 'project_files', ['parent_id'])


def downgrade() -> None:
    op.drop_index('ix_project_files_parent_id', table_name='project_files')
    op.drop_index('ix_project_files_project_id', table_name='project_files')
    op.drop_table('project_files')
    op.drop_index('ix_projects_last_accessed', table_name='projects')
    op.drop_index('ix_projects_owner_created', table_name='projects')
    op.drop_table('projects')
