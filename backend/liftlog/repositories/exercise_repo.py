from __future__ import annotations
from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from liftlog.models import Exercise, User
from liftlog.repositories.base import BaseRepository
from liftlog.repositories.user_repo import UserRepository

def _with_relations(stmt):
    return stmt.options(
        selectinload(Exercise.sets),
        selectinload(Exercise.user),
        selectinload(Exercise.exercise_type),
    )

class ExerciseRepository(BaseRepository[Exercise]):
    model = Exercise

    def list_all(self) -> list[Exercise]:
        stmt = _with_relations(select(Exercise).order_by(Exercise.id.asc()))
        return list(self.db.execute(stmt).scalars().all())

    def list_by_user(self, user_id: int) -> list[Exercise]:
        return self.list_by_users([user_id])

    def list_by_users(self, user_ids: Iterable[int]) -> list[Exercise]:
        ids = list(user_ids)
        if not ids:
            return []
        stmt = _with_relations(
            select(Exercise).where(Exercise.user_id.in_(ids)).order_by(Exercise.id.asc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def owner_of(self, exercise: Exercise, *, for_update: bool = False) -> Optional[User]:
        if for_update:
            return UserRepository(self.db).get_for_update(exercise.user_id)
        return self.db.get(User, exercise.user_id)

    def create(self, *, user_id: int, exercise_type_id: int, note: str | None) -> Exercise:
        return self.add_and_refresh(Exercise(user_id=user_id, exercise_type_id=exercise_type_id, note=note))
