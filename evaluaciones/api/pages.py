"""Public pages: landing and student PIN lookup."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from evaluaciones.database import get_db
from evaluaciones.rendering import page
from evaluaciones.schemas.evaluation import load_rubric
from evaluaciones.storage.repositories import find_evaluation_by_pin

router = APIRouter()


@router.get("/")
async def home(request: Request):
    return page(request, "Plataforma de Evaluaciones", "home.html")


@router.get("/ver")
async def lookup(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
    codigo: str = "",
):
    """Show the lookup form, or the record whose PIN digest matches ``codigo``.

    An unknown PIN raises NotFoundError, rendered as the 404 page.
    """
    if not codigo.strip():
        return page(request, "Consulta", "lookup.html")
    ev = await find_evaluation_by_pin(db, codigo, request.app.state.settings.pin_pepper)
    return page(
        request,
        "Resultado de evaluación",
        "result.html",
        ev=ev,
        rubric=load_rubric(ev.rubric_json),
    )
