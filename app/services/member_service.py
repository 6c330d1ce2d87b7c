"""회원 서비스 — 회원 생성/조회 및 검색 비즈니스 로직.

Member Service — Business logic for member creation, lookup and search.
Selects the paging strategy requested by the client and converts ORM
instances to response schemas.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.member import Member
from app.models.team import Team
from app.repositories.member_repository import member_repository
from app.repositories.team_repository import team_repository
from app.schemas.member import (
    AgeStatistics,
    BulkUpdateResult,
    MemberCreate,
    MemberResponse,
    MemberSearchCondition,
    MemberTeamDto,
    PageStrategy,
)
from app.utils.exceptions import NotFoundError
from app.utils.pagination import Page, PageRequest


class MemberService:
    """회원 관련 비즈니스 로직을 처리하는 서비스.

    Service handling member business logic.
    """

    def _to_response(self, member: Member, team: Team | None = None) -> MemberResponse:
        """회원 모델을 응답 스키마로 변환합니다.

        Convert a Member to a MemberResponse. The team must already be
        loaded (or passed in) since lazy loading is unavailable under asyncio.
        """
        return MemberResponse(
            id=member.id,
            username=member.username,
            age=member.age,
            team_id=member.team_id,
            team_name=team.name if team is not None else None,
        )

    async def create_member(self, db: AsyncSession, data: MemberCreate) -> MemberResponse:
        """새 회원을 생성합니다.

        Create a new member, optionally attached to an existing team.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 회원 생성 데이터 (Member creation data)

        Returns:
            MemberResponse: 생성된 회원 (Created member)

        Raises:
            NotFoundError: team_id에 해당하는 팀이 없을 때 (Team not found)
        """
        team: Team | None = None
        if data.team_id is not None:
            team = await team_repository.get_by_id(db, data.team_id)
            if team is None:
                raise NotFoundError("Team not found")

        member: Member = await member_repository.create(
            db, {"username": data.username, "age": data.age, "team_id": data.team_id}
        )
        return self._to_response(member, team)

    async def get_member(self, db: AsyncSession, member_id: int) -> MemberResponse:
        """회원을 팀 정보와 함께 조회합니다.

        Raises:
            NotFoundError: 회원이 없을 때 (Member not found)
        """
        member: Member | None = await member_repository.get_detail(db, member_id)
        if member is None:
            raise NotFoundError("Member not found")
        return self._to_response(member, member.team)

    async def search(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
    ) -> list[MemberTeamDto]:
        return await member_repository.search(db, condition)

    async def search_page(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        page_request: PageRequest,
        strategy: PageStrategy = PageStrategy.OPTIMIZED,
    ) -> Page[MemberTeamDto]:
        """선택한 전략으로 회원 검색 결과를 페이지 단위로 조회합니다.

        Page through the search results with the requested strategy.
        The lazy strategy is materialized here since the response carries
        the total.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            condition: 검색 조건 (Search condition)
            page_request: 페이지 요청 (Page request)
            strategy: 페이지네이션 전략 (Paging strategy)

        Returns:
            Page[MemberTeamDto]: 검색 결과 페이지 (Page of search results)
        """
        if strategy is PageStrategy.SIMPLE:
            return await member_repository.search_page_simple(db, condition, page_request)
        if strategy is PageStrategy.COMPLEX:
            return await member_repository.search_page_complex(db, condition, page_request)
        if strategy is PageStrategy.LAZY:
            lazy = await member_repository.search_page_lazy(db, condition, page_request)
            return await lazy.to_page()
        return await member_repository.search_page_optimized(db, condition, page_request)

    async def statistics(self, db: AsyncSession) -> AgeStatistics:
        return await member_repository.aggregate_ages(db)

    async def add_age(self, db: AsyncSession, amount: int) -> BulkUpdateResult:
        affected: int = await member_repository.bulk_add_age(db, amount)
        return BulkUpdateResult(affected=affected)

    async def delete_older_than(self, db: AsyncSession, age: int) -> BulkUpdateResult:
        affected: int = await member_repository.bulk_delete_older_than(db, age)
        return BulkUpdateResult(affected=affected)


# 싱글턴 인스턴스 — Singleton instance
member_service: MemberService = MemberService()
