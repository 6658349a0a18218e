from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import selectinload
from liftlog.models import Comment
from liftlog.repositories.base import BaseRepository

class CommentRepository(BaseRepository[Comment]):
    model = Comment

    def list_by_exercise(self, exercise_id: int) -> list[Comment]:
        stmt = (
            select(Comment)
            .where(Comment.exercise_id == exercise_id)
            .options(selectinload(Comment.user))
            .order_by(Comment.id.asc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def create(self, exercise_id: int, *, user_id: int, text: str) -> Comment:
        return self.add_and_refresh(Comment(exercise_id=exercise_id, user_id=user_id, text=text))

    def update_text(self, comment: Comment, *, text: str) -> Comment:
        comment.text = text
        self.db.flush()
        return comment
