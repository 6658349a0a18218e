from decimal import Decimal
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, ForeignKey, Numeric
from liftlog.db import Base
from liftlog.models.mixins import TimestampMixin

class ExerciseSet(TimestampMixin, Base):
    __tablename__ = "exercise_sets"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    exercise_id: Mapped[int] = mapped_column(ForeignKey("exercises.id", ondelete="CASCADE"), index=True)
    num_reps: Mapped[int] = mapped_column(Integer, nullable=False)
    # kilograms
    weight: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    exercise = relationship("Exercise", back_populates="sets")
