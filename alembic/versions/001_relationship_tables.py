"""Create relationship tables

Revision ID: 001_relationship_tables
Revises:
Create Date: 2026-10-19

Creates character_relationship (one row per undirected pair per project)
and relationship_analysis (one row per analyzed project).
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '001_relationship_tables'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'character_relationship',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('project_id', sa.String(64), nullable=False),
        sa.Column('character1', sa.Text(), nullable=False),
        sa.Column('character2', sa.Text(), nullable=False),
        sa.Column('strength', sa.Float(), nullable=False),
        sa.Column('scenes', sa.JSON(), nullable=False),
        sa.Column('relationship_type', sa.String(20), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint(
            'project_id', 'character1', 'character2', name='uq_relationship_pair'
        ),
    )
    op.create_index(
        'ix_character_relationship_project_id', 'character_relationship', ['project_id']
    )

    op.create_table(
        'relationship_analysis',
        sa.Column('project_id', sa.String(64), nullable=False),
        sa.Column('analysis_method', sa.String(16), nullable=False),
        sa.Column('relationship_count', sa.Integer(), nullable=False),
        sa.Column('analyzed_at', sa.TIMESTAMP(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('project_id'),
    )


def downgrade():
    op.drop_table('relationship_analysis')
    op.drop_index('ix_character_relationship_project_id', table_name='character_relationship')
    op.drop_table('character_relationship')
