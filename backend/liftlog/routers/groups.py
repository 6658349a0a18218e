from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from liftlog.db import get_db
from liftlog.models import Group, User
from liftlog.repositories.exercise_repo import ExerciseRepository
from liftlog.repositories.group_repo import GroupRepository
from liftlog.repositories.user_repo import UserRepository
from liftlog.schemas.exercise import ExerciseRead
from liftlog.schemas.group import GroupCreate, GroupRead, GroupUpdate, MemberAdd
from liftlog.schemas.user import UserRead
from liftlog.services.uow import unit_of_work

router = APIRouter(prefix="/groups", tags=["groups"])

def _get_group_or_404(db: Session, group_id: int) -> Group:
    group = GroupRepository(db).get(group_id)
    if not group:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Group not found")
    return group

def _get_user_or_404(db: Session, user_id: int) -> User:
    user = UserRepository(db).get(user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user

@router.get("", response_model=list[GroupRead])
def list_groups(db: Session = Depends(get_db)):
    return GroupRepository(db).list()

@router.post("", response_model=GroupRead, status_code=status.HTTP_201_CREATED)
def create_group(payload: GroupCreate, db: Session = Depends(get_db)):
    with unit_of_work(db):
        group = GroupRepository(db).create(name=payload.name)
    return group

@router.get("/{group_id}", response_model=GroupRead)
def get_group(group_id: int, db: Session = Depends(get_db)):
    return _get_group_or_404(db, group_id)

@router.patch("/{group_id}", response_model=GroupRead)
def update_group(group_id: int, payload: GroupUpdate, db: Session = Depends(get_db)):
    with unit_of_work(db):
        group = GroupRepository(db).rename(_get_group_or_404(db, group_id), name=payload.name)
    return group

@router.delete("/{group_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_group(group_id: int, db: Session = Depends(get_db)):
    with unit_of_work(db):
        GroupRepository(db).delete(_get_group_or_404(db, group_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/{group_id}/members", response_model=list[UserRead])
def list_members(group_id: int, db: Session = Depends(get_db)):
    return _get_group_or_404(db, group_id).members

@router.post("/{group_id}/members", status_code=status.HTTP_204_NO_CONTENT)
def add_member(group_id: int, payload: MemberAdd, db: Session = Depends(get_db)):
    with unit_of_work(db):
        group = _get_group_or_404(db, group_id)
        GroupRepository(db).add_member(group, _get_user_or_404(db, payload.user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.delete("/{group_id}/members/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_member(group_id: int, user_id: int, db: Session = Depends(get_db)):
    with unit_of_work(db):
        group = _get_group_or_404(db, group_id)
        GroupRepository(db).remove_member(group, _get_user_or_404(db, user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/{group_id}/exercises", response_model=list[ExerciseRead])
def list_group_exercises(group_id: int, db: Session = Depends(get_db)):
    """Exercises of every member of the group."""
    group = _get_group_or_404(db, group_id)
    return ExerciseRepository(db).list_by_users(member.id for member in group.members)
