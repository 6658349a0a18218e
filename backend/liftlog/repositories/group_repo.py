from __future__ import annotations

from sqlalchemy import select
from liftlog.models import Group, User
from liftlog.repositories.base import BaseRepository

class GroupRepository(BaseRepository[Group]):
    model = Group

    def list(self) -> list[Group]:
        stmt = select(Group).order_by(Group.id.asc())
        return list(self.db.execute(stmt).scalars().all())

    def create(self, *, name: str) -> Group:
        return self.add_and_refresh(Group(name=name))

    def rename(self, group: Group, *, name: str) -> Group:
        group.name = name
        self.db.flush()
        return group

    def add_member(self, group: Group, user: User) -> None:
        if user not in group.members:
            group.members.append(user)
            self.db.flush()

    def remove_member(self, group: Group, user: User) -> None:
        if user in group.members:
            group.members.remove(user)
            self.db.flush()
