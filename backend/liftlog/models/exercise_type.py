from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, String
from liftlog.db import Base
from liftlog.models.mixins import TimestampMixin

class ExerciseType(TimestampMixin, Base):
    __tablename__ = "exercise_types"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(120), unique=True, index=True, nullable=False)

    exercises = relationship("Exercise", back_populates="exercise_type", passive_deletes="all")
