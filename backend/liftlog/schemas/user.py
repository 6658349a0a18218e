from typing import Annotated
from datetime import datetime
from pydantic import StringConstraints
from liftlog.schemas.base import ApiModel

NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]

class UserCreate(ApiModel):
    name: NameStr

class UserUpdate(ApiModel):
    name: NameStr

class UserRead(ApiModel):
    id: int
    name: str
    total_weight_lifted: float
    created_at: datetime
    updated_at: datetime

class StatisticsRead(ApiModel):
    user_id: int
    total_weight_lifted: float
