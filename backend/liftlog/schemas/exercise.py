from datetime import datetime
from typing import Annotated
from pydantic import StringConstraints
from liftlog.schemas.base import ApiModel
from liftlog.schemas.exercise_set import SetCreate, SetRead
from liftlog.schemas.exercise_type import ExerciseTypeRead, TypeNameStr
from liftlog.schemas.user import UserRead

NoteStr = Annotated[str, StringConstraints(max_length=500)]

class ExerciseCreate(ApiModel):
    exercise_type_name: TypeNameStr
    user_id: int
    note: NoteStr | None = None
    sets: list[SetCreate] = []

class ExerciseUpdate(ApiModel):
    exercise_type_name: TypeNameStr | None = None
    note: NoteStr | None = None
    # Omitted (or null) leaves the sets, and the owner's total, untouched
    sets: list[SetCreate] | None = None

class ExerciseRead(ApiModel):
    id: int
    note: str | None = None
    created_at: datetime
    updated_at: datetime
    sets: list[SetRead]
    user: UserRead
    exercise_type: ExerciseTypeRead
