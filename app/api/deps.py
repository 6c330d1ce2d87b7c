"""FastAPI 의존성 주입 모듈 — 검색 조건 및 페이지 요청.

FastAPI dependency injection module — Search condition and page request.
Collects query parameters into the objects the search endpoints consume,
so routers receive a ready MemberSearchCondition / PageRequest.

Query Parameters:
    - username, team_name: 문자열 일치 조건, 빈 문자열은 조건 없음
      (Exact-match filters; empty string means no filter)
    - age_goe, age_loe: 나이 범위 조건 (Inclusive age bounds)
    - page, size: 1부터 시작하는 페이지 번호와 크기 (1-based page and page size)
"""

from typing import Annotated

from fastapi import Query

from app.config import settings
from app.schemas.member import MemberSearchCondition
from app.utils.pagination import PageRequest


def get_search_condition(
    username: Annotated[str | None, Query(max_length=100)] = None,
    team_name: Annotated[str | None, Query(max_length=100)] = None,
    age_goe: Annotated[int | None, Query(ge=0)] = None,
    age_loe: Annotated[int | None, Query(ge=0)] = None,
) -> MemberSearchCondition:
    """쿼리 파라미터에서 회원 검색 조건을 생성합니다.

    Build the member search condition from query parameters.
    """
    return MemberSearchCondition(
        username=username,
        team_name=team_name,
        age_goe=age_goe,
        age_loe=age_loe,
    )


def get_page_request(
    page: Annotated[int, Query(ge=1)] = 1,
    size: Annotated[int | None, Query(ge=1, le=settings.MAX_PAGE_SIZE)] = None,
) -> PageRequest:
    """쿼리 파라미터에서 페이지 요청을 생성합니다.

    Build the page request; size falls back to DEFAULT_PAGE_SIZE.
    """
    return PageRequest(page=page, size=size or settings.DEFAULT_PAGE_SIZE)
