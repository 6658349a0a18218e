from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, String
from liftlog.db import Base
from liftlog.models.mixins import TimestampMixin
from liftlog.models.user import user_groups

class Group(TimestampMixin, Base):
    __tablename__ = "groups"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)

    members = relationship("User", secondary=user_groups, back_populates="groups", order_by="User.id")
