from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from liftlog.db import get_db
from liftlog.models import Comment, Exercise
from liftlog.repositories.comment_repo import CommentRepository
from liftlog.repositories.exercise_repo import ExerciseRepository
from liftlog.repositories.set_repo import SetRepository
from liftlog.repositories.user_repo import UserRepository
from liftlog.schemas.comment import CommentCreate, CommentRead, CommentUpdate
from liftlog.schemas.exercise import ExerciseCreate, ExerciseRead, ExerciseUpdate
from liftlog.schemas.exercise_set import SetCreate, SetRead, SetUpdate
from liftlog.services import aggregate
from liftlog.services.uow import run_in_transaction, unit_of_work

router = APIRouter(prefix="/exercises", tags=["exercises"])

def _get_exercise_or_404(db: Session, exercise_id: int) -> Exercise:
    exercise = ExerciseRepository(db).get(exercise_id)
    if not exercise:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exercise not found")
    return exercise

def _get_comment_or_404(db: Session, exercise_id: int, comment_id: int) -> Comment:
    comment = CommentRepository(db).get(comment_id)
    if not comment or comment.exercise_id != exercise_id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Comment not found")
    return comment

# ---- exercises ---------------------------------------------------------------

@router.get("", response_model=list[ExerciseRead])
def list_exercises(db: Session = Depends(get_db)):
    return ExerciseRepository(db).list_all()

@router.post("", response_model=ExerciseRead, status_code=status.HTTP_201_CREATED)
def create_exercise(payload: ExerciseCreate, db: Session = Depends(get_db)):
    return run_in_transaction(
        db,
        aggregate.create_exercise,
        user_id=payload.user_id,
        exercise_type_name=payload.exercise_type_name,
        note=payload.note,
        sets=[s.model_dump() for s in payload.sets],
    )

@router.get("/{exercise_id}", response_model=ExerciseRead)
def get_exercise(exercise_id: int, db: Session = Depends(get_db)):
    return _get_exercise_or_404(db, exercise_id)

@router.patch("/{exercise_id}", response_model=ExerciseRead)
def update_exercise(exercise_id: int, payload: ExerciseUpdate, db: Session = Depends(get_db)):
    # exclude_unset: an omitted `sets` must not touch the owner's total
    changes = payload.model_dump(exclude_unset=True)
    return run_in_transaction(db, aggregate.update_exercise, exercise_id, changes)

@router.delete("/{exercise_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_exercise(exercise_id: int, db: Session = Depends(get_db)):
    run_in_transaction(db, aggregate.delete_exercise, exercise_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

# ---- sets --------------------------------------------------------------------

@router.get("/{exercise_id}/sets", response_model=list[SetRead])
def list_sets(exercise_id: int, db: Session = Depends(get_db)):
    _get_exercise_or_404(db, exercise_id)
    return SetRepository(db).list_by_exercise(exercise_id)

@router.post("/{exercise_id}/sets", response_model=SetRead, status_code=status.HTTP_201_CREATED)
def add_set(exercise_id: int, payload: SetCreate, db: Session = Depends(get_db)):
    return run_in_transaction(
        db, aggregate.create_set, exercise_id, num_reps=payload.num_reps, weight=payload.weight
    )

@router.patch("/{exercise_id}/sets/{set_id}", response_model=SetRead)
def update_set(exercise_id: int, set_id: int, payload: SetUpdate, db: Session = Depends(get_db)):
    return run_in_transaction(
        db,
        aggregate.update_set,
        set_id,
        exercise_id=exercise_id,
        num_reps=payload.num_reps,
        weight=payload.weight,
    )

@router.delete("/{exercise_id}/sets/{set_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_set(exercise_id: int, set_id: int, db: Session = Depends(get_db)):
    run_in_transaction(db, aggregate.delete_set, set_id, exercise_id=exercise_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

# ---- comments ------------------------------------------------------------------

@router.get("/{exercise_id}/comments", response_model=list[CommentRead])
def list_comments(exercise_id: int, db: Session = Depends(get_db)):
    _get_exercise_or_404(db, exercise_id)
    return CommentRepository(db).list_by_exercise(exercise_id)

@router.post("/{exercise_id}/comments", response_model=CommentRead, status_code=status.HTTP_201_CREATED)
def add_comment(exercise_id: int, payload: CommentCreate, db: Session = Depends(get_db)):
    with unit_of_work(db):
        _get_exercise_or_404(db, exercise_id)
        if not UserRepository(db).get(payload.user_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        comment = CommentRepository(db).create(exercise_id, user_id=payload.user_id, text=payload.text)
    return comment

@router.patch("/{exercise_id}/comments/{comment_id}", response_model=CommentRead)
def update_comment(exercise_id: int, comment_id: int, payload: CommentUpdate, db: Session = Depends(get_db)):
    with unit_of_work(db):
        comment = CommentRepository(db).update_text(
            _get_comment_or_404(db, exercise_id, comment_id), text=payload.text
        )
    return comment

@router.delete("/{exercise_id}/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_comment(exercise_id: int, comment_id: int, db: Session = Depends(get_db)):
    with unit_of_work(db):
        CommentRepository(db).delete(_get_comment_or_404(db, exercise_id, comment_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
