"""회원 동적 검색 및 페이지네이션 전략 테스트.

Member dynamic search and paging strategy tests — predicate composition,
strategy agreement, and the number of queries each strategy issues.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.member import Member
from app.repositories.member_repository import (
    age_goe,
    member_repository,
    search_predicates,
    team_name_eq,
    username_eq,
)
from app.schemas.member import MemberSearchCondition
from app.utils.pagination import PageRequest


def _usernames(rows) -> list[str | None]:
    return [row.username for row in rows]


class TestPredicates:
    """조건 빌더 테스트."""

    def test_absent_fields_produce_no_predicate(self):
        assert username_eq(None) is None
        assert username_eq("") is None
        assert team_name_eq("") is None
        assert age_goe(None) is None

    def test_zero_age_is_a_condition(self):
        """0은 값이 있는 조건 — None만 조건 없음."""
        assert age_goe(0) is not None

    def test_empty_condition_has_no_where_clause(self):
        assert search_predicates(MemberSearchCondition()) == []
        query = select(Member).where(*search_predicates(MemberSearchCondition()))
        assert "WHERE" not in str(query)

    def test_only_present_fields_are_combined(self):
        condition = MemberSearchCondition(team_name="teamB", age_goe=31)
        predicates = search_predicates(condition)
        assert len(predicates) == 2
        sql = str(select(Member).where(*predicates))
        assert "teams.name =" in sql
        assert "members.age >=" in sql
        assert "members.username" not in sql.split("WHERE")[1]


class TestSearch:
    """페이지 없는 검색 테스트."""

    async def test_no_filters_returns_all(self, db: AsyncSession, teams):
        rows = await member_repository.search(db, MemberSearchCondition())
        assert _usernames(rows) == ["member1", "member2", "member3", "member4"]

    async def test_age_goe_only(self, db: AsyncSession, teams):
        rows = await member_repository.search(db, MemberSearchCondition(age_goe=20))
        assert _usernames(rows) == ["member2", "member3", "member4"]

    async def test_combined_conditions(self, db: AsyncSession, teams):
        condition = MemberSearchCondition(team_name="teamB", age_goe=35, age_loe=40)
        rows = await member_repository.search(db, condition)
        assert len(rows) == 1
        assert rows[0].username == "member4"
        assert rows[0].team_name == "teamB"
        assert rows[0].age == 40

    async def test_username_filter(self, db: AsyncSession, teams):
        rows = await member_repository.search(db, MemberSearchCondition(username="member1"))
        assert _usernames(rows) == ["member1"]
        assert rows[0].team_name == "teamA"

    async def test_empty_strings_are_ignored(self, db: AsyncSession, teams):
        rows = await member_repository.search(
            db, MemberSearchCondition(username="", team_name="")
        )
        assert len(rows) == 4

    async def test_member_without_team_is_kept(self, db: AsyncSession, teams):
        """팀이 없는 회원도 외부 조인으로 조회된다."""
        db.add(Member(username="loner", age=50))
        await db.flush()
        rows = await member_repository.search(db, MemberSearchCondition(age_goe=50))
        assert len(rows) == 1
        assert rows[0].team_id is None
        assert rows[0].team_name is None

    async def test_contradictory_range_returns_nothing(self, db: AsyncSession, teams):
        rows = await member_repository.search(
            db, MemberSearchCondition(age_goe=30, age_loe=20)
        )
        assert rows == []


class TestPagingStrategies:
    """페이지네이션 전략 테스트."""

    async def test_strategies_agree(self, db: AsyncSession, teams):
        """단순/분리/지연 전략은 같은 내용과 같은 전체 개수를 반환한다."""
        condition = MemberSearchCondition(age_goe=20)
        for page_number in (1, 2, 3):
            request = PageRequest(page=page_number, size=2)
            simple = await member_repository.search_page_simple(db, condition, request)
            complex_ = await member_repository.search_page_complex(db, condition, request)
            lazy = await (await member_repository.search_page_lazy(db, condition, request)).to_page()
            optimized = await member_repository.search_page_optimized(db, condition, request)

            assert simple.content == complex_.content == lazy.content == optimized.content
            assert simple.total == complex_.total == lazy.total == optimized.total == 3

    async def test_simple_page_content(self, db: AsyncSession, teams):
        page = await member_repository.search_page_simple(
            db, MemberSearchCondition(), PageRequest(page=2, size=3)
        )
        assert _usernames(page.content) == ["member4"]
        assert page.total == 4
        assert page.total_pages == 2
        assert page.offset == 3

    async def test_simple_is_single_query(self, db: AsyncSession, teams, statements):
        statements.reset()
        await member_repository.search_page_simple(
            db, MemberSearchCondition(), PageRequest(page=1, size=2)
        )
        assert statements.count == 1
        assert "OVER ()" in statements.statements[0]

    async def test_simple_empty_page_falls_back_to_count(self, db: AsyncSession, teams, statements):
        """오프셋이 끝을 넘으면 정렬 없는 카운트 쿼리로 전체 개수를 구한다."""
        statements.reset()
        page = await member_repository.search_page_simple(
            db, MemberSearchCondition(), PageRequest(page=5, size=2)
        )
        assert page.content == []
        assert page.total == 4
        assert statements.count == 2
        assert "ORDER BY" not in statements.statements[1]

    async def test_complex_always_counts(self, db: AsyncSession, teams, statements):
        statements.reset()
        page = await member_repository.search_page_complex(
            db, MemberSearchCondition(), PageRequest(page=1, size=10)
        )
        assert page.total == 4
        assert statements.count == 2

    async def test_lazy_counts_only_when_asked(self, db: AsyncSession, teams, statements):
        statements.reset()
        lazy = await member_repository.search_page_lazy(
            db, MemberSearchCondition(), PageRequest(page=1, size=2)
        )
        assert len(lazy.content) == 2
        assert statements.count == 1

        assert await lazy.get_total() == 4
        assert statements.count == 2

    async def test_optimized_skips_count_on_short_first_page(self, db: AsyncSession, teams, statements):
        statements.reset()
        page = await member_repository.search_page_optimized(
            db, MemberSearchCondition(), PageRequest(page=1, size=10)
        )
        assert page.total == 4
        assert statements.count == 1

    async def test_optimized_infers_total_on_last_page(self, db: AsyncSession, teams, statements):
        condition = MemberSearchCondition(age_goe=20)
        request = PageRequest(page=2, size=2)
        expected = await member_repository.search_page_complex(db, condition, request)

        statements.reset()
        page = await member_repository.search_page_optimized(db, condition, request)
        assert statements.count == 1
        assert page.total == expected.total == request.offset + len(page.content)

    async def test_optimized_counts_on_full_page(self, db: AsyncSession, teams, statements):
        statements.reset()
        page = await member_repository.search_page_optimized(
            db, MemberSearchCondition(), PageRequest(page=1, size=2)
        )
        assert page.total == 4
        assert page.has_next is True
        assert statements.count == 2
