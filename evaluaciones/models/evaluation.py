"""Evaluation record model."""

from sqlalchemy import Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from evaluaciones.database import Base


class Evaluation(Base):
    """One student evaluation. Created and deleted, never updated."""

    __tablename__ = "evaluations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    student_name: Mapped[str] = mapped_column(Text, nullable=False)
    student_id: Mapped[str | None] = mapped_column(Text, nullable=True)
    course: Mapped[str | None] = mapped_column(Text, nullable=True)
    date: Mapped[str | None] = mapped_column(Text, nullable=True)
    score: Mapped[float | None] = mapped_column(Float, nullable=True)
    comments: Mapped[str | None] = mapped_column(Text, nullable=True)
    rubric_json: Mapped[str | None] = mapped_column(Text, nullable=True)
    pin_digest: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    pin_hint: Mapped[str] = mapped_column(String(2), nullable=False)
    created_at: Mapped[str] = mapped_column(String(50), nullable=False)
    updated_at: Mapped[str] = mapped_column(String(50), nullable=False)
