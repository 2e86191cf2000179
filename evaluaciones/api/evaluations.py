"""Teacher endpoints for creating, viewing and deleting evaluations."""

import logging
from typing import Annotated
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from evaluaciones.auth.middleware import TeacherDep
from evaluaciones.database import get_db
from evaluaciones.rendering import page
from evaluaciones.schemas.evaluation import EvaluationForm, load_rubric
from evaluaciones.storage.repositories import (
    create_evaluation,
    delete_evaluation_by_id,
    get_evaluation_by_id,
)
from evaluaciones.utils.pins import PIN_MAX_LENGTH, PIN_MIN_LENGTH

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/evaluations/new")
async def new_evaluation(request: Request, teacher: TeacherDep):
    return page(
        request,
        "Nueva evaluación",
        "new.html",
        pin_min=PIN_MIN_LENGTH,
        pin_max=PIN_MAX_LENGTH,
    )


@router.post("/evaluations")
async def submit_evaluation(
    request: Request,
    teacher: TeacherDep,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """
    Validate and store one evaluation.
    The full PIN appears on this response only; afterwards just its hint is shown.
    """
    form = EvaluationForm.from_form(await request.form())
    ev = await create_evaluation(db, form, request.app.state.settings.pin_pepper)
    return page(
        request,
        "Evaluación creada",
        "created.html",
        evaluation=ev,
        pin=form.view_code,
        lookup_url="/ver?" + urlencode({"codigo": form.view_code}),
    )


@router.get("/evaluations/{evaluation_id:int}")
async def show_evaluation(
    request: Request,
    evaluation_id: int,
    teacher: TeacherDep,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    ev = await get_evaluation_by_id(db, evaluation_id)
    return page(
        request,
        f"Evaluación #{ev.id}",
        "detail.html",
        ev=ev,
        rubric=load_rubric(ev.rubric_json),
    )


@router.post("/evaluations/{evaluation_id:int}/delete")
async def remove_evaluation(
    evaluation_id: int,
    teacher: TeacherDep,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    if not await delete_evaluation_by_id(db, evaluation_id):
        logger.info("Delete requested for missing evaluation %s", evaluation_id)
        return RedirectResponse("/admin", status_code=302)
    return RedirectResponse(f"/admin?eliminada={evaluation_id}", status_code=302)
