from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from liftlog.db import get_db
from liftlog.errors import ConflictError
from liftlog.models import ExerciseType
from liftlog.repositories.exercise_type_repo import ExerciseTypeRepository
from liftlog.schemas.exercise_type import ExerciseTypeCreate, ExerciseTypeRead
from liftlog.services.uow import unit_of_work

router = APIRouter(prefix="/exercise-types", tags=["exercise-types"])

def _get_type_or_404(repo: ExerciseTypeRepository, type_id: int) -> ExerciseType:
    exercise_type = repo.get(type_id)
    if not exercise_type:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exercise type not found")
    return exercise_type

@router.get("", response_model=list[ExerciseTypeRead])
def list_exercise_types(db: Session = Depends(get_db)):
    return ExerciseTypeRepository(db).list()

@router.post("", response_model=ExerciseTypeRead, status_code=status.HTTP_201_CREATED)
def create_exercise_type(payload: ExerciseTypeCreate, db: Session = Depends(get_db)):
    # names are unique; posting an existing name returns that type
    with unit_of_work(db):
        exercise_type = ExerciseTypeRepository(db).upsert_by_name(payload.name)
    return exercise_type

@router.get("/{type_id}", response_model=ExerciseTypeRead)
def get_exercise_type(type_id: int, db: Session = Depends(get_db)):
    return _get_type_or_404(ExerciseTypeRepository(db), type_id)

@router.patch("/{type_id}", response_model=ExerciseTypeRead)
def rename_exercise_type(type_id: int, payload: ExerciseTypeCreate, db: Session = Depends(get_db)):
    with unit_of_work(db):
        repo = ExerciseTypeRepository(db)
        exercise_type = _get_type_or_404(repo, type_id)
        other = repo.get_by_name(payload.name)
        if other and other.id != exercise_type.id:
            raise ConflictError("Exercise type name already exists")
        repo.rename(exercise_type, name=payload.name)
    return exercise_type

@router.delete("/{type_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_exercise_type(type_id: int, db: Session = Depends(get_db)):
    with unit_of_work(db):
        repo = ExerciseTypeRepository(db)
        exercise_type = _get_type_or_404(repo, type_id)
        if repo.count_exercises(exercise_type.id):
            raise ConflictError("Exercise type is still used by exercises")
        repo.delete(exercise_type)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
