"""초기 데이터 시드 스크립트 — 팀과 회원 생성.

Seed script — Creates the sample teams and members.
Run this script once to bootstrap the database with data to query.

Usage:
    python -m app.seed

Creates:
    - 2개 팀: teamA, teamB (2 teams)
    - 4명 회원: member1(10, teamA), member2(20, teamA),
      member3(30, teamB), member4(40, teamB) (4 members)
"""

import asyncio

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import async_session, engine, Base
from app.models import Member, Team

# 시드 회원 — (username, age, team name)
SEED_MEMBERS: list[tuple[str, int, str]] = [
    ("member1", 10, "teamA"),
    ("member2", 20, "teamA"),
    ("member3", 30, "teamB"),
    ("member4", 40, "teamB"),
]


async def seed_data(db: AsyncSession) -> dict[str, Team]:
    """팀과 회원을 추가합니다 (flush만 수행, 커밋은 호출자 책임).

    Insert the sample teams and members. Only flushes; the caller commits.

    Returns:
        dict[str, Team]: 이름별 팀 (Teams keyed by name)
    """
    teams: dict[str, Team] = {name: Team(name=name) for name in ("teamA", "teamB")}
    db.add_all(teams.values())

    for username, age, team_name in SEED_MEMBERS:
        member = Member(username=username, age=age)
        member.change_team(teams[team_name])
        db.add(member)

    await db.flush()
    return teams


async def seed() -> None:
    """데이터베이스를 초기 데이터로 시드합니다.

    Create tables if they don't exist, then insert the sample data.

    Idempotent: 이미 시드된 경우 건너뜁니다 (Skips if already seeded).
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        result = await db.execute(select(Team).limit(1))
        if result.scalar_one_or_none():
            print("Already seeded. Skipping.")
            return

        await seed_data(db)
        await db.commit()

    print("Seed complete!")
    print("  Teams: teamA, teamB")
    print(f"  Members: {', '.join(name for name, _, _ in SEED_MEMBERS)}")


if __name__ == "__main__":
    asyncio.run(seed())
