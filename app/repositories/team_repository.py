"""팀 레포지토리 — 팀 조회 및 회원 수 집계.

Team Repository — Team lookups and per-team member counts.
"""

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.member import Member
from app.models.team import Team
from app.repositories.base import BaseRepository


class TeamRepository(BaseRepository[Team]):
    """팀 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the teams table.
    """

    def __init__(self) -> None:
        super().__init__(Team)

    async def get_by_name(self, db: AsyncSession, name: str) -> Team | None:
        result = await db.execute(select(Team).where(Team.name == name))
        return result.scalar_one_or_none()

    async def list_with_member_count(self, db: AsyncSession) -> list[tuple[Team, int]]:
        """모든 팀과 소속 회원 수를 조회합니다.

        List every team with its member count. The outer join keeps teams
        without members (count 0).

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)

        Returns:
            list[tuple[Team, int]]: (팀, 회원 수) 목록, ID 순 (Teams with counts, by id)
        """
        query: Select = (
            select(Team, func.count(Member.id))
            .outerjoin(Team.members)
            .group_by(Team.id)
            .order_by(Team.id)
        )
        result = await db.execute(query)
        return [(team, count) for team, count in result.all()]


# 싱글턴 인스턴스 — Singleton instance
team_repository: TeamRepository = TeamRepository()
