"""기본 레포지토리 — 모든 레포지토리의 부모 클래스.

Base Repository — Parent class for all domain repositories.
Provides generic lookup/create operations and the predicate conjunction
helper used to build conditional WHERE clauses.

Usage:
    class TeamRepository(BaseRepository[Team]):
        def __init__(self) -> None:
            super().__init__(Team)
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Base

# 제네릭 타입 변수 — SQLAlchemy 모델을 나타냄
# Generic type variable representing a SQLAlchemy model
ModelType = TypeVar("ModelType", bound=Base)


def conjunction(*predicates: ColumnElement[bool] | None) -> list[ColumnElement[bool]]:
    """존재하는 조건만 모아 AND 결합 대상 목록을 만듭니다.

    Collect the predicates that are present. None entries are dropped rather
    than replaced by an always-true placeholder, so ``query.where(*result)``
    adds exactly the given conditions and an empty result adds no WHERE clause.

    Args:
        *predicates: 조건식 또는 None (Predicate expressions or None)

    Returns:
        list[ColumnElement[bool]]: None을 제외한 조건 목록 (Present predicates, in order)
    """
    return [predicate for predicate in predicates if predicate is not None]


class BaseRepository(Generic[ModelType]):
    """제네릭 레포지토리.

    Generic repository providing common database operations.

    Attributes:
        model: SQLAlchemy 모델 클래스 (The SQLAlchemy model class)
    """

    def __init__(self, model: type[ModelType]) -> None:
        self.model: type[ModelType] = model

    async def get_by_id(
        self,
        db: AsyncSession,
        record_id: int,
    ) -> ModelType | None:
        """ID로 단일 레코드를 조회합니다.

        Retrieve a single record by its primary key.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            record_id: 조회할 레코드의 ID (Primary key of the record)

        Returns:
            ModelType | None: 조회된 레코드 또는 None (Found record or None)
        """
        query: Select = select(self.model).where(self.model.id == record_id)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def create(
        self,
        db: AsyncSession,
        obj_data: dict[str, Any],
    ) -> ModelType:
        """새 레코드를 생성합니다.

        Create a new record and flush it so its primary key is assigned.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            obj_data: 생성할 레코드의 데이터 딕셔너리
                      (Dictionary of data for the new record)

        Returns:
            ModelType: 생성된 레코드 (The created record)
        """
        db_obj: ModelType = self.model(**obj_data)
        db.add(db_obj)
        await db.flush()
        await db.refresh(db_obj)
        return db_obj
