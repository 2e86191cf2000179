"""Teacher panel: record list and CSV export."""

import csv
import io
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from evaluaciones.auth.middleware import TeacherDep
from evaluaciones.database import get_db
from evaluaciones.rendering import page
from evaluaciones.storage.repositories import export_evaluations, list_evaluations

router = APIRouter()

CSV_COLUMNS = [
    "id",
    "student_name",
    "student_id",
    "course",
    "date",
    "score",
    "comments",
    "created_at",
]


@router.get("/admin")
async def admin_panel(
    request: Request,
    teacher: TeacherDep,
    db: Annotated[AsyncSession, Depends(get_db)],
    q: str = "",
    eliminada: int | None = None,
):
    q = q.strip()
    evaluations = await list_evaluations(db, search=q or None)
    flash = f"Evaluación #{eliminada} eliminada." if eliminada is not None else None
    return page(
        request,
        "Panel del docente",
        "admin.html",
        flash=flash,
        q=q,
        evaluations=evaluations,
    )


def _csv_lines(rows: list[dict]):
    """Header line, then one fully quoted line per record."""
    yield ",".join(CSV_COLUMNS) + "\n"
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for row in rows:
        writer.writerow([row[col] for col in CSV_COLUMNS])
        yield buf.getvalue()
        buf.seek(0)
        buf.truncate()


@router.get("/admin/export.csv")
async def export_csv(
    teacher: TeacherDep,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    rows = await export_evaluations(db)
    return StreamingResponse(
        _csv_lines(rows),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": 'attachment; filename="evaluaciones.csv"'},
    )
