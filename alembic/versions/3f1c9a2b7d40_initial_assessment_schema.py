"""initial_assessment_schema

Revision ID: 3f1c9a2b7d40
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a2b7d40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('courses',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('icon', sa.String(500), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_courses_id', 'courses', ['id'])
    op.create_index('ix_courses_name', 'courses', ['name'], unique=True)

    op.create_table('course_configs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('course_id', sa.Integer(), nullable=False),
        sa.Column('language', sa.String(16), nullable=False),
        sa.Column('config_json', sa.Text(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['course_id'], ['courses.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('course_id', 'language', name='uq_course_language')
    )
    op.create_index('ix_course_configs_id', 'course_configs', ['id'])
    op.create_index('ix_course_configs_course_id', 'course_configs', ['course_id'])

    op.create_table('participants',
        sa.Column('pin', sa.BigInteger(), autoincrement=False, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('result_tests_json', sa.Text(), nullable=True),
        sa.Column('result_updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('validation_code', sa.String(64), nullable=True),
        sa.PrimaryKeyConstraint('pin')
    )

    op.create_table('journals',
        sa.Column('pin', sa.BigInteger(), nullable=False),
        sa.Column('course', sa.String(100), nullable=True),
        sa.Column('language', sa.String(16), nullable=True),
        sa.Column('structure_json', sa.Text(), nullable=True),
        sa.Column('log_json', sa.Text(), nullable=True),
        sa.Column('last_changed', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('pin'),
        sa.ForeignKeyConstraint(['pin'], ['participants.pin'], ondelete='CASCADE')
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('journals')
    op.drop_table('participants')
    op.drop_index('ix_course_configs_course_id', table_name='course_configs')
    op.drop_index('ix_course_configs_id', table_name='course_configs')
    op.drop_table('course_configs')
    op.drop_index('ix_courses_name', table_name='courses')
    op.drop_index('ix_courses_id', table_name='courses')
    op.drop_table('courses')
