"""Unit of work: one commit or one rollback per request-level operation.

The Session is the transaction handle. Callers pass it in explicitly and every
repository touched inside the unit is built from that same Session, so all
reads and writes belong to one database transaction.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from liftlog.errors import ConflictError, LiftlogError, TransactionFailure

log = logging.getLogger(__name__)

R = TypeVar("R")


@contextmanager
def unit_of_work(db: Session) -> Iterator[Session]:
    """Commit when the block exits cleanly, roll back otherwise.

    Domain errors are re-raised as-is after the rollback. Store errors become
    ConflictError (integrity violations) or TransactionFailure.
    """
    try:
        yield db
        db.commit()
    except LiftlogError:
        db.rollback()
        raise
    except IntegrityError as exc:
        db.rollback()
        log.warning("unit of work rolled back on integrity error: %s", exc.orig)
        raise ConflictError("Database conflict") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        log.exception("unit of work rolled back")
        raise TransactionFailure() from exc
    except Exception:
        db.rollback()
        raise


def run_in_transaction(db: Session, steps: Callable[..., R], *args, **kwargs) -> R:
    """Run `steps(db, *args, **kwargs)` as a single atomic unit and return its result."""
    with unit_of_work(db):
        result = steps(db, *args, **kwargs)
    return result
