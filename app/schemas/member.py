"""회원 관련 Pydantic 요청/응답 스키마 정의.

Member Pydantic request/response schema definitions.
Includes the search condition, the member/team projection DTO,
and the aggregate result shapes.
"""

from enum import Enum

from pydantic import BaseModel, Field


class MemberSearchCondition(BaseModel):
    """회원 검색 조건 — 모든 필드는 선택 사항.

    Member search condition. Every field is optional; an absent field
    contributes no predicate to the WHERE clause.

    Attributes:
        username: 회원 이름 일치 (Exact username match)
        team_name: 팀 이름 일치 (Exact team name match)
        age_goe: 최소 나이, 이상 (Minimum age, inclusive)
        age_loe: 최대 나이, 이하 (Maximum age, inclusive)
    """

    username: str | None = None
    team_name: str | None = None
    age_goe: int | None = None
    age_loe: int | None = None


class MemberTeamDto(BaseModel):
    """회원-팀 조회용 프로젝션 DTO.

    Read projection pairing member fields with the team's id and name.
    team_id/team_name are None for members without a team.
    """

    member_id: int
    username: str | None
    age: int
    team_id: int | None
    team_name: str | None


class MemberCreate(BaseModel):
    """회원 생성 요청 스키마.

    Member creation request schema.

    Attributes:
        username: 회원 이름, NULL 허용 (Username, optional)
        age: 나이 (Age, default 0)
        team_id: 소속 팀 ID (Team to join, optional)
    """

    username: str | None = Field(None, max_length=100)
    age: int = Field(0, ge=0)
    team_id: int | None = None


class MemberResponse(BaseModel):
    """회원 응답 스키마.

    Member response schema with the team name resolved.
    """

    id: int
    username: str | None
    age: int
    team_id: int | None
    team_name: str | None = None


class AgeStatistics(BaseModel):
    """회원 나이 집계 결과.

    COUNT/SUM/AVG/MAX/MIN over member ages. Everything but count is None
    when there are no members.
    """

    count: int
    sum: int | None
    avg: float | None
    max: int | None
    min: int | None


class BulkUpdateResult(BaseModel):
    """벌크 연산 결과 — 영향받은 행 수 (Rows affected by a bulk statement)."""

    affected: int


class PageStrategy(str, Enum):
    """검색 페이지네이션 전략.

    Paging strategy for the member search endpoint:
        simple: 내용과 전체 개수를 한 번에 조회 (rows and total in one round trip)
        complex: 내용 쿼리와 카운트 쿼리를 분리 (separate content and count queries)
        lazy: 카운트 쿼리를 지연 실행 (count deferred until the total is needed)
        optimized: 추론 가능하면 카운트 생략 (count skipped when inferable)
    """

    SIMPLE = "simple"
    COMPLEX = "complex"
    LAZY = "lazy"
    OPTIMIZED = "optimized"
