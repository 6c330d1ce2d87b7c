"""팀 SQLAlchemy ORM 모델 정의.

Team SQLAlchemy ORM model definition.

Tables:
    - teams: 회원이 소속되는 팀 (Teams that members belong to)
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Team(Base):
    """팀 모델 — 0명 이상의 회원을 보유.

    Team model — Owns zero or more members.

    Attributes:
        id: 고유 식별자 (Auto-increment primary key)
        name: 팀 이름 (Team name, unique)

    Relationships:
        members: 소속 회원 목록 (Members referencing this team)
    """

    __tablename__ = "teams"

    # 팀 고유 식별자 — Team primary key (auto-increment)
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # 팀 이름 — Team display name
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)

    # 관계 — 팀 삭제 시 회원은 남고 team_id만 NULL (members survive team deletion)
    members = relationship("Member", back_populates="team", passive_deletes=True)

    def __repr__(self) -> str:
        return f"Team(id={self.id}, name={self.name})"
