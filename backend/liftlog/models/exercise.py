from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, ForeignKey, String
from liftlog.db import Base
from liftlog.models.mixins import TimestampMixin

class Exercise(TimestampMixin, Base):
    __tablename__ = "exercises"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    exercise_type_id: Mapped[int] = mapped_column(ForeignKey("exercise_types.id"), index=True)
    note: Mapped[str | None] = mapped_column(String(500), nullable=True)

    user = relationship("User", back_populates="exercises")
    exercise_type = relationship("ExerciseType", back_populates="exercises")
    sets = relationship(
        "ExerciseSet", back_populates="exercise", cascade="all, delete-orphan",
        order_by="ExerciseSet.id",
    )
    comments = relationship(
        "Comment", back_populates="exercise", cascade="all, delete-orphan",
        order_by="Comment.id",
    )
