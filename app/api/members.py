"""회원 라우터 — 회원 생성/조회, 동적 검색 및 페이지네이션 엔드포인트.

Member Router — Member creation/lookup, dynamic search and paging endpoints.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_page_request, get_search_condition
from app.database import get_db
from app.schemas.member import (
    AgeStatistics,
    BulkUpdateResult,
    MemberCreate,
    MemberResponse,
    MemberSearchCondition,
    MemberTeamDto,
    PageStrategy,
)
from app.services.member_service import member_service
from app.utils.pagination import Page, PageRequest

router: APIRouter = APIRouter()


@router.get("/search", response_model=list[MemberTeamDto])
async def search_members(
    db: Annotated[AsyncSession, Depends(get_db)],
    condition: Annotated[MemberSearchCondition, Depends(get_search_condition)],
) -> list[MemberTeamDto]:
    """조건에 맞는 모든 회원을 팀 정보와 함께 조회합니다.

    Search members by the optional conditions, without paging.
    """
    return await member_service.search(db, condition)


@router.get("/search/page", response_model=Page[MemberTeamDto])
async def search_members_page(
    db: Annotated[AsyncSession, Depends(get_db)],
    condition: Annotated[MemberSearchCondition, Depends(get_search_condition)],
    page_request: Annotated[PageRequest, Depends(get_page_request)],
    strategy: Annotated[PageStrategy, Query()] = PageStrategy.OPTIMIZED,
) -> Page[MemberTeamDto]:
    """회원 검색 결과를 페이지 단위로 조회합니다.

    Page through the search results using the requested paging strategy.
    """
    return await member_service.search_page(db, condition, page_request, strategy)


@router.get("/statistics", response_model=AgeStatistics)
async def member_statistics(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AgeStatistics:
    """회원 나이 집계 (Count, sum, average, max and min of member ages)."""
    return await member_service.statistics(db)


@router.post("/bulk/add-age", response_model=BulkUpdateResult)
async def bulk_add_age(
    db: Annotated[AsyncSession, Depends(get_db)],
    amount: Annotated[int, Query()] = 1,
) -> BulkUpdateResult:
    """모든 회원의 나이에 amount를 더합니다 (Add amount to every member's age)."""
    result: BulkUpdateResult = await member_service.add_age(db, amount)
    await db.commit()
    return result


@router.delete("/bulk/older-than/{age}", response_model=BulkUpdateResult)
async def bulk_delete_older_than(
    age: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BulkUpdateResult:
    """나이가 age보다 많은 회원을 일괄 삭제합니다 (Delete members older than age)."""
    result: BulkUpdateResult = await member_service.delete_older_than(db, age)
    await db.commit()
    return result


@router.post("", response_model=MemberResponse, status_code=201)
async def create_member(
    data: MemberCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MemberResponse:
    """새 회원을 생성합니다.

    Create a new member, optionally attached to a team.
    """
    result: MemberResponse = await member_service.create_member(db, data)
    await db.commit()
    return result


@router.get("/{member_id}", response_model=MemberResponse)
async def get_member(
    member_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MemberResponse:
    """회원을 팀 정보와 함께 조회합니다 (Member with its team)."""
    return await member_service.get_member(db, member_id)
