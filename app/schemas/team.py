"""팀 관련 Pydantic 요청/응답 스키마 정의.

Team Pydantic request/response schema definitions.
"""

from pydantic import BaseModel, Field


class TeamCreate(BaseModel):
    """팀 생성 요청 스키마.

    Team creation request schema.

    Attributes:
        name: 팀 이름 (Team name, unique)
    """

    name: str = Field(..., min_length=1, max_length=100)  # 팀 이름 (Team name)


class TeamResponse(BaseModel):
    """팀 응답 스키마.

    Team response schema with its member count.

    Attributes:
        id: 팀 ID (Team identifier)
        name: 팀 이름 (Team name)
        member_count: 소속 회원 수 (Number of members in the team)
    """

    id: int
    name: str
    member_count: int = 0  # 소속 회원 수 — 서비스에서 계산 (Computed by service)


class TeamAgeAverage(BaseModel):
    """팀별 평균 나이 스키마.

    Average member age per team (GROUP BY team name).

    Attributes:
        team_name: 팀 이름 (Team name)
        average_age: 평균 나이 (Average age of the team's members)
    """

    team_name: str
    average_age: float
