"""페이지네이션 유틸리티 모듈.

Pagination utility module for SQLAlchemy async queries.
Provides the page request/response models plus the building blocks the
repositories combine into their paging strategies:

    - fetch_page_with_total: 페이지와 전체 개수를 한 번에 조회
      (rows and total in one round trip via a windowed COUNT)
    - count_rows: ORDER BY를 제거한 카운트 쿼리 (count query with ordering stripped)
    - get_page: 카운트 쿼리 생략 최적화 (skips the count when it can be inferred)
    - LazyPage: 카운트를 호출자가 필요할 때만 실행 (count runs only when awaited)
"""

from collections.abc import Awaitable, Callable, Sequence
from math import ceil
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")

# 카운트 공급자 — Awaitable factory producing the total row count
CountSupplier = Callable[[], Awaitable[int]]

# 윈도우 카운트 컬럼 라벨 — Label of the windowed total column
TOTAL_LABEL = "__total_count"


class PageRequest(BaseModel):
    """페이지 요청 모델.

    Page request: 1-based page number and page size.

    Attributes:
        page: 요청 페이지 번호, 1부터 시작 (Page number, 1-indexed)
        size: 페이지당 항목 수 (Items per page)
    """

    page: int = Field(1, ge=1)
    size: int = Field(20, ge=1)

    @property
    def offset(self) -> int:
        """첫 항목의 오프셋 (Offset of the first row on this page)."""
        return (self.page - 1) * self.size


class Page(BaseModel, Generic[T]):
    """페이지네이션 결과 모델.

    Pagination result model for typed responses.

    Attributes:
        content: 현재 페이지 항목 목록 (Items for the current page)
        total: 전체 항목 수 (Total count across all pages)
        page: 현재 페이지 번호 (Current page number, 1-based)
        size: 페이지당 항목 수 (Items per page)
        offset: 현재 페이지 오프셋 (Offset used for this page)
        total_pages: 전체 페이지 수 (Total pages, ceil(total/size))
        has_next: 다음 페이지 존재 여부 (Whether another page follows)
    """

    content: list[T]
    total: int
    page: int
    size: int
    offset: int
    total_pages: int
    has_next: bool

    @classmethod
    def of(cls, content: Sequence[T], page_request: PageRequest, total: int) -> "Page[T]":
        """항목과 전체 개수로 페이지를 구성합니다 (Build a page from rows and total)."""
        total_pages: int = ceil(total / page_request.size) if total else 0
        return cls(
            content=list(content),
            total=total,
            page=page_request.page,
            size=page_request.size,
            offset=page_request.offset,
            total_pages=total_pages,
            has_next=page_request.page < total_pages,
        )


async def count_rows(db: AsyncSession, query: Select[Any]) -> int:
    """쿼리 결과의 전체 행 수를 계산합니다.

    Count the rows a query would return. The ORDER BY clause is stripped
    before wrapping the query in a subquery since it never affects a count.

    Args:
        db: 비동기 DB 세션 (Async database session)
        query: 카운트할 SELECT 쿼리 (Query to count)

    Returns:
        int: 전체 행 수 (Total row count)
    """
    count_query = select(func.count()).select_from(query.order_by(None).subquery())
    return (await db.execute(count_query)).scalar() or 0


async def fetch_page_with_total(
    db: AsyncSession,
    query: Select[Any],
    page_request: PageRequest,
) -> tuple[list[dict[str, Any]], int]:
    """페이지 항목과 전체 개수를 한 번의 왕복으로 조회합니다.

    Fetch one page of rows together with the total count in a single round
    trip. A ``COUNT(*) OVER ()`` column is appended to the query: the window
    is evaluated before OFFSET/LIMIT and has no ordering of its own, so every
    returned row carries the total of the unpaged, unordered result.

    An empty page (offset past the last row) carries no total; in that case
    a count query with the ordering stripped is issued instead.

    Args:
        db: 비동기 DB 세션 (Async database session)
        query: 페이지를 적용할 SELECT 쿼리 (Base query to paginate)
        page_request: 페이지 요청 (Page request)

    Returns:
        tuple[list[dict[str, Any]], int]: (행 매핑 목록, 전체 개수)
            (Row mappings keyed by column label without the total column, total count)
    """
    windowed = (
        query.add_columns(func.count().over().label(TOTAL_LABEL))
        .offset(page_request.offset)
        .limit(page_request.size)
    )
    rows = (await db.execute(windowed)).mappings().all()

    if not rows:
        return [], await count_rows(db, query)

    total: int = rows[0][TOTAL_LABEL]
    items: list[dict[str, Any]] = [
        {key: value for key, value in row.items() if key != TOTAL_LABEL} for row in rows
    ]
    return items, total


async def get_page(
    content: Sequence[T],
    page_request: PageRequest,
    count_supplier: CountSupplier,
) -> Page[T]:
    """카운트 쿼리가 필요할 때만 실행하여 페이지를 구성합니다.

    Build a page, running the count supplier only when the total cannot be
    inferred from the page itself:

        - 첫 페이지이면서 항목 수가 페이지 크기보다 작을 때 → total = len(content)
          (first page and short → the page is everything)
        - 마지막 페이지일 때 → total = offset + len(content)
          (non-empty short page past the start → it is the last page)

    Args:
        content: 현재 페이지 항목 (Rows already fetched for the page)
        page_request: 페이지 요청 (Page request used for the content query)
        count_supplier: 전체 개수를 조회하는 비동기 함수 (Awaitable count factory)

    Returns:
        Page[T]: 페이지 결과 (Page result)
    """
    returned: int = len(content)
    if page_request.offset == 0:
        if returned < page_request.size:
            return Page.of(content, page_request, returned)
    elif 0 < returned < page_request.size:
        return Page.of(content, page_request, page_request.offset + returned)

    return Page.of(content, page_request, await count_supplier())


class LazyPage(Generic[T]):
    """전체 개수를 지연 조회하는 페이지.

    Page whose total is only queried when a caller asks for it. The content
    is available immediately; the count supplier runs at most once.
    """

    def __init__(
        self,
        content: Sequence[T],
        page_request: PageRequest,
        count_supplier: CountSupplier,
    ) -> None:
        self.content: list[T] = list(content)
        self.page_request: PageRequest = page_request
        self._count_supplier: CountSupplier = count_supplier
        self._total: int | None = None

    @property
    def is_counted(self) -> bool:
        """카운트 쿼리 실행 여부 (Whether the count has been materialized)."""
        return self._total is not None

    async def get_total(self) -> int:
        if self._total is None:
            self._total = await self._count_supplier()
        return self._total

    async def to_page(self) -> Page[T]:
        """전체 개수를 확정하여 Page로 변환합니다 (Materialize into a Page)."""
        return Page.of(self.content, self.page_request, await self.get_total())
