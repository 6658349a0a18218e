"""Keeps ``User.total_weight_lifted`` equal to the sum of its sets.

Every function here is a unit-of-work step: it takes the Session as its first
argument, never commits, and is meant to be run through
``liftlog.services.uow.run_in_transaction`` so the set rows and the owner's
total are committed (or rolled back) together.

Each mutation locks the owning user row before reading the old set values, so
two requests that touch the same user's sets are serialized by the database.
Arithmetic is done in Decimal at two decimal places, matching the NUMERIC
columns, so the incremental total does not drift from the recomputed one.
"""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable, Mapping

from sqlalchemy.orm import Session

from liftlog.errors import NotFoundError
from liftlog.models import Exercise, ExerciseSet, User
from liftlog.repositories.exercise_repo import ExerciseRepository
from liftlog.repositories.exercise_type_repo import ExerciseTypeRepository
from liftlog.repositories.set_repo import SetRepository
from liftlog.repositories.user_repo import UserRepository

log = logging.getLogger(__name__)

_CENTS = Decimal("0.01")

SetFields = Mapping[str, object]  # {"num_reps": int, "weight": float}


def to_weight(value) -> Decimal:
    return Decimal(str(value)).quantize(_CENTS)


def weight_of(num_reps: int, weight) -> Decimal:
    """num_reps * weight, the contribution of one set to its owner's total."""
    return (Decimal(num_reps) * to_weight(weight)).quantize(_CENTS)


def set_weight(s: ExerciseSet) -> Decimal:
    return weight_of(s.num_reps, s.weight)


def total_of(sets: Iterable) -> Decimal:
    total = Decimal("0.00")
    for s in sets:
        if isinstance(s, ExerciseSet):
            total += set_weight(s)
        else:
            total += weight_of(s["num_reps"], s["weight"])
    return total


# ---- lookups ---------------------------------------------------------------

def _get_exercise(db: Session, exercise_id: int) -> Exercise:
    exercise = ExerciseRepository(db).get(exercise_id)
    if not exercise:
        raise NotFoundError("Exercise not found")
    return exercise


def _lock_user(db: Session, user_id: int) -> User:
    user = UserRepository(db).get_for_update(user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


def _lock_owner(db: Session, exercise: Exercise) -> User:
    owner = ExerciseRepository(db).owner_of(exercise, for_update=True)
    if not owner:
        raise NotFoundError("User not found")
    return owner


def apply_delta(db: Session, user: User, delta: Decimal) -> User:
    """Add `delta` to the (already locked) user's total."""
    if not delta:
        return user
    current = to_weight(user.total_weight_lifted or 0)
    UserRepository(db).set_total_weight(user, current + delta)
    log.info("user_id=%s total_weight_lifted %s -> %s (delta %s)",
             user.id, current, user.total_weight_lifted, delta)
    return user


def _create_sets(db: Session, exercise_id: int, new_sets: Iterable[SetFields]) -> list[ExerciseSet]:
    repo = SetRepository(db)
    return [
        repo.create(exercise_id, num_reps=int(s["num_reps"]), weight=to_weight(s["weight"]))
        for s in new_sets
    ]


# ---- set mutations -----------------------------------------------------------

def create_set(db: Session, exercise_id: int, *, num_reps: int, weight) -> ExerciseSet:
    exercise = _get_exercise(db, exercise_id)
    owner = _lock_owner(db, exercise)
    new_set = SetRepository(db).create(exercise.id, num_reps=num_reps, weight=to_weight(weight))
    apply_delta(db, owner, set_weight(new_set))
    db.expire(exercise, ["sets"])
    return new_set


def _lock_set(db: Session, set_id: int, exercise_id: int | None) -> tuple[ExerciseSet, User]:
    """Lock the set's owner, then re-read the set while that lock is held."""
    repo = SetRepository(db)
    ids = repo.owner_ids(set_id)
    if ids is None or (exercise_id is not None and ids[0] != exercise_id):
        raise NotFoundError("Set not found")
    owner = _lock_user(db, ids[1])
    s = repo.get_fresh(set_id)
    if not s or s.exercise_id != ids[0]:
        raise NotFoundError("Set not found")
    return s, owner


def update_set(
    db: Session,
    set_id: int,
    *,
    exercise_id: int | None = None,
    num_reps: int | None = None,
    weight=None,
) -> ExerciseSet:
    s, owner = _lock_set(db, set_id, exercise_id)
    old_weight = set_weight(s)
    SetRepository(db).update(
        s,
        num_reps=s.num_reps if num_reps is None else num_reps,
        weight=s.weight if weight is None else to_weight(weight),
    )
    apply_delta(db, owner, set_weight(s) - old_weight)
    return s


def delete_set(db: Session, set_id: int, *, exercise_id: int | None = None) -> None:
    s, owner = _lock_set(db, set_id, exercise_id)
    removed = set_weight(s)
    parent_id = s.exercise_id
    if not SetRepository(db).delete_row(s):
        raise NotFoundError("Set not found")
    apply_delta(db, owner, -removed)
    parent = ExerciseRepository(db).get(parent_id)
    if parent is not None:
        db.expire(parent, ["sets"])


# ---- exercise mutations ----------------------------------------------------

def create_exercise(
    db: Session,
    *,
    user_id: int,
    exercise_type_name: str,
    note: str | None = None,
    sets: Iterable[SetFields] = (),
) -> Exercise:
    owner = _lock_user(db, user_id)
    exercise_type = ExerciseTypeRepository(db).upsert_by_name(exercise_type_name)
    exercise = ExerciseRepository(db).create(user_id=owner.id, exercise_type_id=exercise_type.id, note=note)
    created = _create_sets(db, exercise.id, sets)
    apply_delta(db, owner, total_of(created))
    db.expire(exercise, ["sets"])
    return exercise


def replace_exercise_sets(db: Session, exercise_id: int, new_sets: Iterable[SetFields]) -> Exercise:
    exercise = _get_exercise(db, exercise_id)
    owner = _lock_owner(db, exercise)
    repo = SetRepository(db)
    old_sets = repo.list_by_exercise(exercise.id)
    old_total = total_of(old_sets)
    repo.delete_many(old_sets)
    new_total = total_of(_create_sets(db, exercise.id, new_sets))
    apply_delta(db, owner, new_total - old_total)
    db.expire(exercise, ["sets"])
    return exercise


def update_exercise(db: Session, exercise_id: int, changes: Mapping[str, object]) -> Exercise:
    """Apply a partial update. Only a present, non-null ``sets`` touches the owner's total."""
    exercise = _get_exercise(db, exercise_id)
    if "note" in changes:
        exercise.note = changes["note"]
    if changes.get("exercise_type_name"):
        exercise_type = ExerciseTypeRepository(db).upsert_by_name(changes["exercise_type_name"])
        exercise.exercise_type_id = exercise_type.id
    db.flush()
    db.expire(exercise, ["exercise_type"])
    if changes.get("sets") is not None:
        replace_exercise_sets(db, exercise.id, changes["sets"])
    return exercise


def delete_exercise(db: Session, exercise_id: int) -> None:
    exercise = _get_exercise(db, exercise_id)
    owner = _lock_owner(db, exercise)
    repo = SetRepository(db)
    sets = repo.list_by_exercise(exercise.id)
    apply_delta(db, owner, -total_of(sets))
    repo.delete_many(sets)
    ExerciseRepository(db).delete(exercise)


# ---- reads & reconciliation ------------------------------------------------

def get_statistics(db: Session, user_id: int) -> User:
    user = UserRepository(db).get(user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


def reconcile_total_weight(db: Session, user_id: int) -> User:
    """Recompute the total from the set rows and store it."""
    user = _lock_user(db, user_id)
    recomputed = SetRepository(db).total_for_user(user.id).quantize(_CENTS)
    stored = to_weight(user.total_weight_lifted or 0)
    if recomputed != stored:
        log.warning("user_id=%s total_weight_lifted drifted: stored=%s recomputed=%s",
                    user.id, stored, recomputed)
        UserRepository(db).set_total_weight(user, recomputed)
    return user
