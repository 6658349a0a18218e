from __future__ import annotations
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from liftlog.db import get_db
from liftlog.models import User
from liftlog.repositories.exercise_repo import ExerciseRepository
from liftlog.repositories.user_repo import UserRepository
from liftlog.schemas.exercise import ExerciseRead
from liftlog.schemas.group import GroupRead
from liftlog.schemas.user import StatisticsRead, UserCreate, UserRead, UserUpdate
from liftlog.services import aggregate
from liftlog.services.uow import run_in_transaction, unit_of_work

router = APIRouter(prefix="/users", tags=["users"])

def _get_user_or_404(db: Session, user_id: int) -> User:
    user = UserRepository(db).get(user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user

@router.get("", response_model=list[UserRead])
def list_users(db: Session = Depends(get_db)):
    return UserRepository(db).list()

@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    with unit_of_work(db):
        user = UserRepository(db).create(name=payload.name)
    return user

@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: int, db: Session = Depends(get_db)):
    return _get_user_or_404(db, user_id)

@router.patch("/{user_id}", response_model=UserRead)
def update_user(user_id: int, payload: UserUpdate, db: Session = Depends(get_db)):
    with unit_of_work(db):
        user = UserRepository(db).update_name(_get_user_or_404(db, user_id), name=payload.name)
    return user

@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: int, db: Session = Depends(get_db)):
    # exercises, their sets and the user's comments go with the row
    with unit_of_work(db):
        repo = UserRepository(db)
        repo.delete(_get_user_or_404(db, user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/{user_id}/groups", response_model=list[GroupRead])
def list_user_groups(user_id: int, db: Session = Depends(get_db)):
    return _get_user_or_404(db, user_id).groups

@router.get("/{user_id}/exercises", response_model=list[ExerciseRead])
def list_user_exercises(user_id: int, db: Session = Depends(get_db)):
    _get_user_or_404(db, user_id)
    return ExerciseRepository(db).list_by_user(user_id)

@router.get("/{user_id}/statistics", response_model=StatisticsRead)
def get_statistics(user_id: int, db: Session = Depends(get_db)):
    user = aggregate.get_statistics(db, user_id)
    return StatisticsRead(user_id=user.id, total_weight_lifted=user.total_weight_lifted)

@router.post("/{user_id}/statistics/reconcile", response_model=StatisticsRead)
def reconcile_statistics(user_id: int, db: Session = Depends(get_db)):
    """Recompute totalWeightLifted from the stored sets."""
    user = run_in_transaction(db, aggregate.reconcile_total_weight, user_id)
    return StatisticsRead(user_id=user.id, total_weight_lifted=user.total_weight_lifted)
