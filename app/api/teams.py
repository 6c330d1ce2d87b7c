"""팀 라우터 — 팀 생성/목록 및 팀별 평균 나이 엔드포인트.

Team Router — Team creation, listing and per-team average age.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.team import TeamAgeAverage, TeamCreate, TeamResponse
from app.services.team_service import team_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[TeamResponse])
async def list_teams(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[TeamResponse]:
    """팀 목록을 회원 수와 함께 조회합니다 (List teams with member counts)."""
    return await team_service.list_teams(db)


@router.get("/average-age", response_model=list[TeamAgeAverage])
async def average_age_by_team(
    db: Annotated[AsyncSession, Depends(get_db)],
    min_average: Annotated[float | None, Query(ge=0)] = None,
) -> list[TeamAgeAverage]:
    """팀별 평균 나이를 조회합니다.

    Average member age per team; min_average filters groups (HAVING).
    """
    return await team_service.average_age_by_team(db, min_average)


@router.post("", response_model=TeamResponse, status_code=201)
async def create_team(
    data: TeamCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TeamResponse:
    """새 팀을 생성합니다 (Create a new team)."""
    result: TeamResponse = await team_service.create_team(db, data)
    await db.commit()
    return result
