from typing import Annotated
from datetime import datetime
from pydantic import StringConstraints
from liftlog.schemas.base import ApiModel

GroupNameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]

class GroupCreate(ApiModel):
    name: GroupNameStr

class GroupUpdate(ApiModel):
    name: GroupNameStr

class GroupRead(ApiModel):
    id: int
    name: str
    created_at: datetime
    updated_at: datetime

class MemberAdd(ApiModel):
    user_id: int
