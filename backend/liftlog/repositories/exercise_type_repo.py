from __future__ import annotations
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite

from liftlog.models import Exercise, ExerciseType
from liftlog.repositories.base import BaseRepository

_INSERTS = {"postgresql": postgresql.insert, "sqlite": sqlite.insert}

class ExerciseTypeRepository(BaseRepository[ExerciseType]):
    model = ExerciseType

    def list(self) -> list[ExerciseType]:
        stmt = select(ExerciseType).order_by(ExerciseType.id.asc())
        return list(self.db.execute(stmt).scalars().all())

    def get_by_name(self, name: str) -> Optional[ExerciseType]:
        stmt = select(ExerciseType).where(ExerciseType.name == name)
        return self.db.execute(stmt).scalar_one_or_none()

    def upsert_by_name(self, name: str) -> ExerciseType:
        """Return the type called `name`, inserting it if missing.

        INSERT .. ON CONFLICT DO NOTHING keeps two concurrent callers from
        both creating the same name; the follow-up read sees whichever row won.
        """
        insert = _INSERTS.get(self.db.get_bind().dialect.name)
        if insert is None:
            existing = self.get_by_name(name)
            if existing:
                return existing
            return self.add_and_refresh(ExerciseType(name=name))
        self.db.execute(insert(ExerciseType).values(name=name).on_conflict_do_nothing(index_elements=["name"]))
        return self.get_by_name(name)

    def rename(self, exercise_type: ExerciseType, *, name: str) -> ExerciseType:
        exercise_type.name = name
        self.db.flush()
        return exercise_type

    def count_exercises(self, exercise_type_id: int) -> int:
        stmt = select(func.count()).select_from(Exercise).where(Exercise.exercise_type_id == exercise_type_id)
        return self.db.execute(stmt).scalar_one()
