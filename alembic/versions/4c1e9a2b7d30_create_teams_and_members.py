"""create_teams_and_members

Revision ID: 4c1e9a2b7d30
Revises:
Create Date: 2026-10-18 10:00:00.000000

팀(teams)과 회원(members) 테이블 생성.
Create teams and members tables.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4c1e9a2b7d30'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # teams — 팀 (Teams)
    op.create_table(
        'teams',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(100), nullable=False, unique=True),
    )

    # members — 회원, 팀 삭제 시 team_id는 NULL
    # Members; team_id is nulled when the team is deleted
    op.create_table(
        'members',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('username', sa.String(100), nullable=True),
        sa.Column('age', sa.Integer(), server_default=sa.text('0'), nullable=False),
        sa.Column('team_id', sa.Integer(), sa.ForeignKey('teams.id', ondelete='SET NULL'), nullable=True),
    )

    # 인덱스 — Indexes
    op.create_index('ix_members_team_id', 'members', ['team_id'])


def downgrade() -> None:
    op.drop_index('ix_members_team_id', table_name='members')
    op.drop_table('members')
    op.drop_table('teams')
