from typing import Annotated
from datetime import datetime
from pydantic import StringConstraints
from liftlog.schemas.base import ApiModel
from liftlog.schemas.user import UserRead

TextStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=2000)]

class CommentCreate(ApiModel):
    text: TextStr
    user_id: int

class CommentUpdate(ApiModel):
    text: TextStr

class CommentRead(ApiModel):
    id: int
    text: str
    created_at: datetime
    updated_at: datetime
    user: UserRead
