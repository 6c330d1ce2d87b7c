"""API 라우터 패키지 — 모든 엔드포인트 통합.

API Router package — Aggregates the member and team endpoints into a
single router for inclusion in the FastAPI application.

Included routers:
    - teams: 팀 생성/목록, 팀별 평균 나이 (Team management and aggregates)
    - members: 회원 생성/조회, 동적 검색, 페이지네이션, 벌크 연산
      (Member lookup, dynamic search, paging strategies, bulk statements)
"""

from fastapi import APIRouter

from app.api.members import router as members_router
from app.api.teams import router as teams_router

api_router: APIRouter = APIRouter()

api_router.include_router(teams_router, prefix="/teams", tags=["Teams"])
api_router.include_router(members_router, prefix="/members", tags=["Members"])
