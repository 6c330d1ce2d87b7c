"""회원 SQLAlchemy ORM 모델 정의.

Member SQLAlchemy ORM model definition.
A member references at most one team (many-to-one). Both the team reference
and the username may be NULL; neither is an error state.

Tables:
    - members: 회원 (Members with optional team reference)
"""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.team import Team


class Member(Base):
    """회원 모델.

    Member model.

    Attributes:
        id: 고유 식별자 (Auto-increment primary key)
        username: 회원 이름, NULL 허용 (Username, nullable)
        age: 나이 (Age, defaults to 0)
        team_id: 소속 팀 FK, NULL 허용 (Team foreign key, nullable)

    Relationships:
        team: 소속 팀 (Owning team, may be None)
    """

    __tablename__ = "members"

    # 회원 고유 식별자 — Member primary key (auto-increment)
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # 회원 이름 — NULL이면 정렬 시 마지막 (NULL usernames sort last)
    username: Mapped[str | None] = mapped_column(String(100), nullable=True)
    # 나이 — Age in years
    age: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # 소속 팀 FK — 팀 삭제 시 NULL (SET NULL on team deletion)
    team_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("teams.id", ondelete="SET NULL"), nullable=True, index=True
    )

    team: Mapped[Team | None] = relationship("Team", back_populates="members")

    def change_team(self, team: Team) -> None:
        """소속 팀을 변경합니다.

        Move the member to another team. back_populates keeps team.members
        in sync without loading the collection.
        """
        self.team = team

    def __repr__(self) -> str:
        return f"Member(id={self.id}, username={self.username}, age={self.age})"
