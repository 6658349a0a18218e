from typing import Annotated
from datetime import datetime
from pydantic import StringConstraints
from liftlog.schemas.base import ApiModel

TypeNameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]

class ExerciseTypeCreate(ApiModel):
    name: TypeNameStr

class ExerciseTypeRead(ApiModel):
    id: int
    name: str
    created_at: datetime
    updated_at: datetime
