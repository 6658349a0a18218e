# liftlog/repositories/user_repo.py
from __future__ import annotations
from decimal import Decimal
from typing import Optional

from sqlalchemy import select

from liftlog.models import User
from liftlog.repositories.base import BaseRepository

class UserRepository(BaseRepository[User]):
    model = User

    # READS
    def list(self) -> list[User]:
        stmt = select(User).order_by(User.id.asc())
        return list(self.db.execute(stmt).scalars().all())

    def get_for_update(self, user_id: int) -> Optional[User]:
        """Load the row with a write lock held until the transaction ends.

        Postgres blocks other writers of the same user here; sqlite ignores
        FOR UPDATE but only ever has one writer.
        """
        stmt = (
            select(User)
            .where(User.id == user_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    # WRITES
    def create(self, *, name: str) -> User:
        return self.add_and_refresh(User(name=name, total_weight_lifted=Decimal("0")))

    def update_name(self, user: User, *, name: str) -> User:
        user.name = name
        self.db.flush()
        return user

    def set_total_weight(self, user: User, total: Decimal) -> User:
        user.total_weight_lifted = total
        self.db.flush()
        return user
