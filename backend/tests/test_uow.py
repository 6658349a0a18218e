from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from liftlog.db import SessionLocal
from liftlog.errors import ConflictError, NotFoundError, TransactionFailure
from liftlog.models import User
from liftlog.repositories.user_repo import UserRepository
from liftlog.services import aggregate
from liftlog.services.uow import run_in_transaction, unit_of_work


def _count_users():
    with SessionLocal() as db:
        return len(UserRepository(db).list())


def test_commits_on_success():
    db = SessionLocal()
    user = run_in_transaction(db, lambda s: UserRepository(s).create(name="ok"))
    db.close()
    assert user.id
    assert _count_users() == 1


def test_domain_error_rolls_back_and_propagates():
    db = SessionLocal()

    def steps(s):
        UserRepository(s).create(name="ghost")
        raise NotFoundError("Exercise not found")

    with pytest.raises(NotFoundError):
        run_in_transaction(db, steps)
    db.close()
    assert _count_users() == 0


def test_store_error_becomes_transaction_failure():
    db = SessionLocal()

    def steps(s):
        UserRepository(s).create(name="ghost")
        raise OperationalError("UPDATE users", {}, Exception("boom"))

    with pytest.raises(TransactionFailure) as info:
        run_in_transaction(db, steps)
    assert isinstance(info.value.__cause__, OperationalError)
    db.close()
    assert _count_users() == 0


def test_integrity_error_becomes_conflict():
    db = SessionLocal()
    with pytest.raises(ConflictError):
        with unit_of_work(db):
            db.add(User(name=None))  # NOT NULL
            db.flush()
    db.close()
    assert _count_users() == 0


def test_aggregate_steps_share_one_transaction():
    db = SessionLocal()
    user = run_in_transaction(db, lambda s: UserRepository(s).create(name="lifter"))
    exercise = run_in_transaction(
        db, aggregate.create_exercise,
        user_id=user.id, exercise_type_name="Squat", sets=[{"num_reps": 5, "weight": 100}],
    )

    def create_then_fail(s):
        aggregate.create_set(s, exercise.id, num_reps=1, weight=200)
        raise RuntimeError("client went away")

    with pytest.raises(RuntimeError):
        run_in_transaction(db, create_then_fail)
    db.close()

    with SessionLocal() as fresh:
        assert aggregate.get_statistics(fresh, user.id).total_weight_lifted == Decimal("500.00")


def test_weight_of_uses_two_decimal_places():
    assert aggregate.weight_of(10, 5) == Decimal("50.00")
    assert aggregate.weight_of(3, 0.1) == Decimal("0.30")
    assert aggregate.total_of([{"num_reps": 5, "weight": 2}, {"num_reps": 3, "weight": 1}]) == Decimal("13.00")
