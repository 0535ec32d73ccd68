"""Create Users, Projects and Issues tables.

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-18 09:00:00.000000

Issues reference Projects with ON DELETE RESTRICT; assigned_to_user_id is
an opaque identity-provider id and carries no foreign key.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '0001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the Users, Projects and Issues tables with their indexes."""
    op.create_table(
        'Users',
        sa.Column('id', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('image', sa.String(length=500), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_Users_email', 'Users', ['email'], unique=True)

    op.create_table(
        'Projects',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_Projects_name', 'Projects', ['name'], unique=True)

    op.create_table(
        'Issues',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('issue_type', sa.String(length=20), nullable=False),
        sa.Column('assigned_to_user_id', sa.String(length=255), nullable=True),
        sa.Column('project_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ['project_id'],
            ['Projects.id'],
            name='fk_issues_project_id_projects',
            ondelete='RESTRICT',
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_Issues_status', 'Issues', ['status'], unique=False)
    op.create_index('ix_Issues_issue_type', 'Issues', ['issue_type'], unique=False)
    op.create_index('ix_Issues_assigned_to_user_id', 'Issues', ['assigned_to_user_id'], unique=False)
    op.create_index('ix_Issues_project_id', 'Issues', ['project_id'], unique=False)
    op.create_index('ix_Issues_created_at', 'Issues', ['created_at'], unique=False)


def downgrade() -> None:
    """Drop the Issues, Projects and Users tables."""
    op.drop_index('ix_Issues_created_at', table_name='Issues')
    op.drop_index('ix_Issues_project_id', table_name='Issues')
    op.drop_index('ix_Issues_assigned_to_user_id', table_name='Issues')
    op.drop_index('ix_Issues_issue_type', table_name='Issues')
    op.drop_index('ix_Issues_status', table_name='Issues')
    op.drop_table('Issues')

    op.drop_index('ix_Projects_name', table_name='Projects')
    op.drop_table('Projects')

    op.drop_index('ix_Users_email', table_name='Users')
    op.drop_table('Users')
