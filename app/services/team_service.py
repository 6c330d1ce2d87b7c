"""팀 서비스 — 팀 생성/조회 비즈니스 로직.

Team Service — Business logic for creating and listing teams.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.team import Team
from app.repositories.member_repository import member_repository
from app.repositories.team_repository import team_repository
from app.schemas.team import TeamAgeAverage, TeamCreate, TeamResponse
from app.utils.exceptions import DuplicateError


class TeamService:
    """팀 관련 비즈니스 로직을 처리하는 서비스.

    Service handling team business logic.
    """

    def _to_response(self, team: Team, member_count: int = 0) -> TeamResponse:
        return TeamResponse(id=team.id, name=team.name, member_count=member_count)

    async def list_teams(self, db: AsyncSession) -> list[TeamResponse]:
        """팀 목록을 회원 수와 함께 조회합니다 (List teams with member counts)."""
        rows = await team_repository.list_with_member_count(db)
        return [self._to_response(team, count) for team, count in rows]

    async def create_team(self, db: AsyncSession, data: TeamCreate) -> TeamResponse:
        """새 팀을 생성합니다.

        Create a new team.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 팀 생성 데이터 (Team creation data)

        Returns:
            TeamResponse: 생성된 팀 (Created team)

        Raises:
            DuplicateError: 같은 이름의 팀이 이미 존재할 때 (Team name taken)
        """
        if await team_repository.get_by_name(db, data.name) is not None:
            raise DuplicateError("Team name already exists")

        team: Team = await team_repository.create(db, {"name": data.name})
        return self._to_response(team)

    async def average_age_by_team(
        self,
        db: AsyncSession,
        having_min_average: float | None = None,
    ) -> list[TeamAgeAverage]:
        return await member_repository.average_age_by_team(db, having_min_average)


# 싱글턴 인스턴스 — Singleton instance
team_service: TeamService = TeamService()
