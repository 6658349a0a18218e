from __future__ import annotations
from decimal import Decimal
from typing import Optional

from sqlalchemy import delete, func, select
from liftlog.models import Exercise, ExerciseSet
from liftlog.repositories.base import BaseRepository

class SetRepository(BaseRepository[ExerciseSet]):
    model = ExerciseSet

    def owner_ids(self, set_id: int) -> Optional[tuple[int, int]]:
        """(exercise_id, user_id) for a set, read without loading the set row."""
        stmt = (
            select(ExerciseSet.exercise_id, Exercise.user_id)
            .join(Exercise, Exercise.id == ExerciseSet.exercise_id)
            .where(ExerciseSet.id == set_id)
        )
        row = self.db.execute(stmt).one_or_none()
        return (row.exercise_id, row.user_id) if row else None

    def get_fresh(self, set_id: int) -> Optional[ExerciseSet]:
        """Re-read the row from the database, replacing any identity-map copy."""
        stmt = (
            select(ExerciseSet)
            .where(ExerciseSet.id == set_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def list_by_exercise(self, exercise_id: int) -> list[ExerciseSet]:
        stmt = (
            select(ExerciseSet)
            .where(ExerciseSet.exercise_id == exercise_id)
            .order_by(ExerciseSet.id.asc())
            .execution_options(populate_existing=True)
        )
        return list(self.db.execute(stmt).scalars().all())

    def create(self, exercise_id: int, *, num_reps: int, weight: Decimal) -> ExerciseSet:
        return self.add_and_refresh(ExerciseSet(exercise_id=exercise_id, num_reps=num_reps, weight=weight))

    def update(self, s: ExerciseSet, *, num_reps: int, weight: Decimal) -> ExerciseSet:
        s.num_reps = num_reps
        s.weight = weight
        self.db.flush()
        return s

    def delete_row(self, s: ExerciseSet) -> bool:
        """DELETE one set; False when another transaction already removed it."""
        result = self.db.execute(
            delete(ExerciseSet).where(ExerciseSet.id == s.id),
            execution_options={"synchronize_session": False},
        )
        self.db.expunge(s)
        return result.rowcount == 1

    def delete_many(self, sets: list[ExerciseSet]) -> None:
        for s in sets:
            self.db.delete(s)
        self.db.flush()

    def total_for_user(self, user_id: int) -> Decimal:
        """SUM(num_reps * weight) over every set of every exercise the user owns."""
        stmt = (
            select(func.coalesce(func.sum(ExerciseSet.num_reps * ExerciseSet.weight), 0))
            .join(Exercise, Exercise.id == ExerciseSet.exercise_id)
            .where(Exercise.user_id == user_id)
        )
        return Decimal(str(self.db.execute(stmt).scalar_one()))
