"""Repository functions for evaluation records.

Every storage fault is logged and re-raised as StorageError; callers never
see driver exceptions.
"""

import logging
from collections.abc import Sequence
from datetime import datetime, timezone
from functools import wraps

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from evaluaciones.errors import NotFoundError, StorageError
from evaluaciones.models import Evaluation
from evaluaciones.schemas.evaluation import EvaluationForm
from evaluaciones.utils.pins import normalize_pin, pin_digest, pin_hint

logger = logging.getLogger(__name__)

LIST_LIMIT = 200

# SQLite INTEGER is a signed 64-bit value; larger ids cannot exist
MAX_ROW_ID = 2**63 - 1


def _now_iso() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


def _storage_guard(func):
    @wraps(func)
    async def wrapper(db: AsyncSession, *args, **kwargs):
        try:
            return await func(db, *args, **kwargs)
        except SQLAlchemyError as e:
            logger.exception("Storage failure in %s", func.__name__)
            await db.rollback()
            raise StorageError() from e

    return wrapper


def _valid_id(evaluation_id: int) -> bool:
    return -MAX_ROW_ID - 1 <= evaluation_id <= MAX_ROW_ID


def _newest_first(query):
    return query.order_by(Evaluation.created_at.desc(), Evaluation.id.desc())


@_storage_guard
async def create_evaluation(
    db: AsyncSession, form: EvaluationForm, pepper: str = ""
) -> Evaluation:
    """Insert one record; the raw PIN is kept only as digest and hint."""
    now = _now_iso()
    ev = Evaluation(
        student_name=form.student_name,
        student_id=form.student_id,
        course=form.course,
        date=form.date,
        score=form.score,
        comments=form.comments,
        rubric_json=form.rubric_json,
        pin_digest=pin_digest(form.view_code, pepper),
        pin_hint=pin_hint(form.view_code),
        created_at=now,
        updated_at=now,
    )
    db.add(ev)
    await db.commit()
    await db.refresh(ev)
    logger.info("Created evaluation %s", ev.id)
    return ev


@_storage_guard
async def list_evaluations(
    db: AsyncSession, search: str | None = None, limit: int = LIST_LIMIT
) -> Sequence[Evaluation]:
    """Newest first; ``search`` matches name, student id or course by substring."""
    query = select(Evaluation)
    search = (search or "").strip()
    if search:
        query = query.where(
            or_(
                Evaluation.student_name.contains(search, autoescape=True),
                Evaluation.student_id.contains(search, autoescape=True),
                Evaluation.course.contains(search, autoescape=True),
            )
        )
    result = await db.execute(_newest_first(query).limit(limit))
    return result.scalars().all()


@_storage_guard
async def get_evaluation_by_id(db: AsyncSession, evaluation_id: int) -> Evaluation:
    ev = await db.get(Evaluation, evaluation_id) if _valid_id(evaluation_id) else None
    if ev is None:
        raise NotFoundError("Evaluación no encontrada")
    return ev


@_storage_guard
async def delete_evaluation_by_id(db: AsyncSession, evaluation_id: int) -> bool:
    """Hard delete. Returns False when no row had that id."""
    if not _valid_id(evaluation_id):
        return False
    ev = await db.get(Evaluation, evaluation_id)
    if ev is None:
        return False
    await db.delete(ev)
    await db.commit()
    logger.info("Deleted evaluation %s", evaluation_id)
    return True


@_storage_guard
async def find_evaluation_by_pin(
    db: AsyncSession, raw_pin: str | None, pepper: str = ""
) -> Evaluation:
    pin = normalize_pin(raw_pin)
    if not pin:
        raise NotFoundError("No se encontró una evaluación con ese PIN.")
    result = await db.execute(
        _newest_first(
            select(Evaluation).where(Evaluation.pin_digest == pin_digest(pin, pepper))
        ).limit(1)
    )
    ev = result.scalars().first()
    if ev is None:
        raise NotFoundError("No se encontró una evaluación con ese PIN.")
    return ev


@_storage_guard
async def export_evaluations(db: AsyncSession) -> list[dict]:
    """All records newest first, ``comments`` flattened to a single line."""
    result = await db.execute(_newest_first(select(Evaluation)))
    rows = []
    for ev in result.scalars():
        rows.append(
            {
                "id": ev.id,
                "student_name": ev.student_name,
                "student_id": ev.student_id or "",
                "course": ev.course or "",
                "date": ev.date or "",
                "score": "" if ev.score is None else ev.score,
                "comments": (ev.comments or "").replace("\r", " ").replace("\n", " "),
                "created_at": ev.created_at,
            }
        )
    return rows
