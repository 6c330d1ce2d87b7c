"""회원 레포지토리 — 동적 검색 쿼리 및 페이지네이션.

Member Repository — Dynamic search queries and pagination.
Builds the member search WHERE clause from optional conditions and offers
four paging strategies around the same search query, plus the join,
aggregation, sorting and bulk-update queries used across the API.
"""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import ColumnElement, Select, delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager

from app.models.member import Member
from app.models.team import Team
from app.repositories.base import BaseRepository, conjunction
from app.schemas.member import AgeStatistics, MemberSearchCondition, MemberTeamDto
from app.schemas.team import TeamAgeAverage
from app.utils.pagination import (
    LazyPage,
    Page,
    PageRequest,
    fetch_page_with_total,
    get_page,
)


# ---------------------------------------------------------------------------
# 조건 빌더 — Predicate builders (None means "no condition")
# ---------------------------------------------------------------------------
def username_eq(username: str | None) -> ColumnElement[bool] | None:
    return Member.username == username if username else None


def team_name_eq(team_name: str | None) -> ColumnElement[bool] | None:
    return Team.name == team_name if team_name else None


def age_goe(age: int | None) -> ColumnElement[bool] | None:
    return Member.age >= age if age is not None else None


def age_loe(age: int | None) -> ColumnElement[bool] | None:
    return Member.age <= age if age is not None else None


def age_eq(age: int | None) -> ColumnElement[bool] | None:
    return Member.age == age if age is not None else None


def search_predicates(condition: MemberSearchCondition) -> list[ColumnElement[bool]]:
    """검색 조건을 WHERE 조건 목록으로 변환합니다.

    Translate a search condition into the list of predicates to AND together.
    Empty strings count as absent for the text fields.
    """
    return conjunction(
        username_eq(condition.username),
        team_name_eq(condition.team_name),
        age_goe(condition.age_goe),
        age_loe(condition.age_loe),
    )


class MemberRepository(BaseRepository[Member]):
    """회원 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the members table.
    """

    def __init__(self) -> None:
        super().__init__(Member)

    # -----------------------------------------------------------------------
    # 검색 쿼리 — Search query construction
    # -----------------------------------------------------------------------
    def _search_query(self, condition: MemberSearchCondition) -> Select:
        """회원-팀 프로젝션 검색 쿼리 (Member/team projection search query)."""
        return (
            select(
                Member.id.label("member_id"),
                Member.username,
                Member.age,
                Team.id.label("team_id"),
                Team.name.label("team_name"),
            )
            .select_from(Member)
            .outerjoin(Member.team)
            .where(*search_predicates(condition))
            .order_by(Member.id)
        )

    def _count_query(self, condition: MemberSearchCondition) -> Select:
        """검색 조건에 대한 카운트 쿼리 (Count query for a search condition)."""
        return (
            select(func.count(Member.id))
            .select_from(Member)
            .outerjoin(Member.team)
            .where(*search_predicates(condition))
        )

    async def _count(self, db: AsyncSession, condition: MemberSearchCondition) -> int:
        return (await db.execute(self._count_query(condition))).scalar() or 0

    async def _fetch_content(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        page_request: PageRequest,
    ) -> list[MemberTeamDto]:
        query: Select = (
            self._search_query(condition)
            .offset(page_request.offset)
            .limit(page_request.size)
        )
        result = await db.execute(query)
        return [MemberTeamDto(**row) for row in result.mappings().all()]

    async def search(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
    ) -> list[MemberTeamDto]:
        """조건에 맞는 모든 회원을 팀 정보와 함께 조회합니다.

        Run the search without paging.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            condition: 검색 조건 (Search condition)

        Returns:
            list[MemberTeamDto]: 회원-팀 DTO 목록 (Matching rows, ordered by member id)
        """
        result = await db.execute(self._search_query(condition))
        return [MemberTeamDto(**row) for row in result.mappings().all()]

    async def search_page_simple(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        page_request: PageRequest,
    ) -> Page[MemberTeamDto]:
        """내용과 전체 개수를 한 번에 조회하는 단순한 방법.

        Rows and total in a single round trip; the windowed count ignores the
        ORDER BY of the search query.
        """
        items, total = await fetch_page_with_total(
            db, self._search_query(condition), page_request
        )
        content = [MemberTeamDto(**item) for item in items]
        return Page.of(content, page_request, total)

    async def search_page_complex(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        page_request: PageRequest,
    ) -> Page[MemberTeamDto]:
        """내용 쿼리와 전체 카운트 쿼리를 별도로 실행하는 방법.

        Content query and count query are independent; both always run.
        """
        content = await self._fetch_content(db, condition, page_request)
        total: int = await self._count(db, condition)
        return Page.of(content, page_request, total)

    async def search_page_lazy(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        page_request: PageRequest,
    ) -> LazyPage[MemberTeamDto]:
        """카운트 쿼리를 호출자가 필요로 할 때만 실행하는 방법.

        The content is fetched now; the count query is deferred until the
        caller awaits ``get_total()`` or ``to_page()`` on the result.
        """
        content = await self._fetch_content(db, condition, page_request)
        return LazyPage(content, page_request, lambda: self._count(db, condition))

    async def search_page_optimized(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        page_request: PageRequest,
    ) -> Page[MemberTeamDto]:
        """카운트 쿼리 최적화 — 생략 가능한 경우 생략.

        The count query is skipped on a short first page and on a short
        last page, where the total is offset + returned rows.
        """
        content = await self._fetch_content(db, condition, page_request)
        return await get_page(content, page_request, lambda: self._count(db, condition))

    # -----------------------------------------------------------------------
    # 기본 조회 — Basic selects
    # -----------------------------------------------------------------------
    async def find_by_username(self, db: AsyncSession, username: str) -> Member | None:
        result = await db.execute(select(Member).where(Member.username == username))
        return result.scalar_one_or_none()

    async def find_by_username_and_age(
        self,
        db: AsyncSession,
        username: str,
        age: int,
    ) -> Member | None:
        """이름과 나이가 모두 일치하는 회원 (AND of two equality conditions)."""
        result = await db.execute(
            select(Member).where(Member.username == username, Member.age == age)
        )
        return result.scalar_one_or_none()

    async def search_members(
        self,
        db: AsyncSession,
        username: str | None = None,
        age: int | None = None,
    ) -> list[Member]:
        """이름/나이 동적 조건 검색 — None인 조건은 무시됩니다.

        Dynamic where: username equality and age equality, each applied only
        when given.
        """
        query: Select = (
            select(Member)
            .where(*conjunction(username_eq(username), age_eq(age)))
            .order_by(Member.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_sorted(self, db: AsyncSession, age: int) -> list[Member]:
        """나이 내림차순, 이름 오름차순 정렬. 이름이 없으면 마지막.

        Members of the given age ordered by age DESC, username ASC NULLS LAST.
        """
        query: Select = (
            select(Member)
            .where(Member.age == age)
            .order_by(Member.age.desc(), Member.username.asc().nulls_last())
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_paged(self, db: AsyncSession, offset: int, limit: int) -> list[Member]:
        """조회 건수 제한 — 카운트 쿼리 없음 (Offset/limit only, no count query)."""
        query: Select = (
            select(Member).order_by(Member.username.desc()).offset(offset).limit(limit)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_paged_with_total(
        self,
        db: AsyncSession,
        page_request: PageRequest,
    ) -> "Page[Member]":
        """이름 내림차순 페이지와 전체 개수 (Page ordered by username DESC with total)."""
        items, total = await fetch_page_with_total(
            db, select(Member).order_by(Member.username.desc()), page_request
        )
        return Page.of([item["Member"] for item in items], page_request, total)

    # -----------------------------------------------------------------------
    # 집계 — Aggregation
    # -----------------------------------------------------------------------
    async def aggregate_ages(self, db: AsyncSession) -> AgeStatistics:
        """회원 수, 나이 합/평균/최대/최소 (COUNT, SUM, AVG, MAX, MIN of ages)."""
        query: Select = select(
            func.count(Member.id),
            func.sum(Member.age),
            func.avg(Member.age),
            func.max(Member.age),
            func.min(Member.age),
        )
        count, total, average, maximum, minimum = (await db.execute(query)).one()
        return AgeStatistics(
            count=count,
            sum=total,
            avg=float(average) if average is not None else None,
            max=maximum,
            min=minimum,
        )

    async def average_age_by_team(
        self,
        db: AsyncSession,
        having_min_average: float | None = None,
    ) -> list[TeamAgeAverage]:
        """팀 이름별 평균 나이 — 선택적으로 HAVING 조건 적용.

        Average member age grouped by team name, ordered by team name.
        Members without a team are excluded by the inner join.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            having_min_average: 평균 나이 하한, HAVING 절 (Minimum average, HAVING filter)

        Returns:
            list[TeamAgeAverage]: 팀별 평균 나이 (Average age per team)
        """
        average = func.avg(Member.age)
        query: Select = (
            select(Team.name, average)
            .select_from(Member)
            .join(Member.team)
            .group_by(Team.name)
            .order_by(Team.name)
        )
        if having_min_average is not None:
            query = query.having(average >= having_min_average)

        result = await db.execute(query)
        return [
            TeamAgeAverage(team_name=name, average_age=float(avg))
            for name, avg in result.all()
        ]

    # -----------------------------------------------------------------------
    # 조인 — Joins
    # -----------------------------------------------------------------------
    async def find_by_team_name(self, db: AsyncSession, team_name: str) -> list[Member]:
        """팀에 소속된 모든 회원 — 내부 조인 (Inner join on the relationship)."""
        query: Select = (
            select(Member)
            .join(Member.team)
            .where(Team.name == team_name)
            .order_by(Member.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_username_matching_team_name(self, db: AsyncSession) -> list[Member]:
        """세타 조인 — 회원 이름이 팀 이름과 같은 회원.

        Theta join over unrelated columns: FROM members, teams
        WHERE members.username = teams.name.
        """
        query: Select = (
            select(Member)
            .where(Member.username == Team.name)
            .order_by(Member.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_with_team_filtered_on(
        self,
        db: AsyncSession,
        team_name: str,
    ) -> Sequence[tuple[Member, Team | None]]:
        """조인 대상 필터링 — 팀 이름이 일치하는 팀만 조인, 회원은 모두 조회.

        LEFT OUTER JOIN whose ON clause also filters the team name. Every
        member is returned; the team is None when it was filtered out.
        """
        query: Select = (
            select(Member, Team)
            .outerjoin(Member.team.and_(Team.name == team_name))
            .order_by(Member.id)
        )
        result = await db.execute(query)
        return [(member, team) for member, team in result.all()]

    async def find_with_team_by_name_match(
        self,
        db: AsyncSession,
    ) -> Sequence[tuple[Member, Team | None]]:
        """연관관계 없는 엔티티 외부 조인 — 회원 이름 = 팀 이름.

        LEFT OUTER JOIN on an unrelated column pair.
        """
        query: Select = (
            select(Member, Team)
            .outerjoin(Team, Member.username == Team.name)
            .order_by(Member.id)
        )
        result = await db.execute(query)
        return [(member, team) for member, team in result.all()]

    async def get_with_team(self, db: AsyncSession, username: str) -> Member | None:
        """페치 조인 — 회원과 팀을 한 번의 SELECT로 로드.

        Fetch join: the team is populated from the same SELECT, no lazy load.
        """
        query: Select = (
            select(Member)
            .join(Member.team)
            .options(contains_eager(Member.team))
            .where(Member.username == username)
            .execution_options(populate_existing=True)
        )
        result = await db.execute(query)
        return result.unique().scalar_one_or_none()

    async def get_detail(self, db: AsyncSession, member_id: int) -> Member | None:
        """ID로 회원을 팀과 함께 조회 — 팀이 없어도 조회.

        Member by id with its team fetch-joined through an outer join.
        """
        query: Select = (
            select(Member)
            .outerjoin(Member.team)
            .options(contains_eager(Member.team))
            .where(Member.id == member_id)
            .execution_options(populate_existing=True)
        )
        result = await db.execute(query)
        return result.unique().scalar_one_or_none()

    # -----------------------------------------------------------------------
    # 벌크 연산 — Bulk statements
    # 세션의 엔티티를 무시하고 실행되므로 실행 후 세션을 만료시킨다
    # Bulk statements bypass loaded entities, so the session is expired afterwards
    # -----------------------------------------------------------------------
    async def _execute_bulk(self, db: AsyncSession, statement: Any) -> int:
        result = await db.execute(
            statement.execution_options(synchronize_session=False)
        )
        db.expire_all()
        return result.rowcount

    async def bulk_rename_younger_than(
        self,
        db: AsyncSession,
        age: int,
        new_username: str,
    ) -> int:
        statement = update(Member).where(Member.age < age).values(username=new_username)
        return await self._execute_bulk(db, statement)

    async def bulk_add_age(self, db: AsyncSession, amount: int) -> int:
        statement = update(Member).values(age=Member.age + amount)
        return await self._execute_bulk(db, statement)

    async def bulk_delete_older_than(self, db: AsyncSession, age: int) -> int:
        statement = delete(Member).where(Member.age > age)
        return await self._execute_bulk(db, statement)


# 싱글턴 인스턴스 — Singleton instance
member_repository: MemberRepository = MemberRepository()
