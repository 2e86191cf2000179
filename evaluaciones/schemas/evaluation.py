"""Evaluation form schemas."""

import json
import logging
import math
from collections.abc import Mapping

from pydantic import BaseModel, Field, FiniteFloat, TypeAdapter, computed_field, field_validator
from pydantic import ValidationError as PydanticValidationError

from evaluaciones.errors import ValidationError
from evaluaciones.utils.pins import PIN_MAX_LENGTH, PIN_MIN_LENGTH, is_valid_pin, normalize_pin
from evaluaciones.utils.sanitize import clean

logger = logging.getLogger(__name__)


class RubricItem(BaseModel):
    """One rubric criterion; contributes weight * score to the total."""

    name: str
    weight: FiniteFloat = 1.0
    score: FiniteFloat = 0.0

    @field_validator("name", mode="before")
    @classmethod
    def sanitize_name(cls, v):
        return clean(v)

    @computed_field
    @property
    def partial(self) -> float:
        return round(self.weight * self.score, 2)


_rubric_adapter = TypeAdapter(list[RubricItem])


def parse_score(raw: str | None) -> float | None:
    """Blank or non-numeric input is stored as NULL rather than rejected."""
    text = (raw or "").strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        logger.warning("Discarding non-numeric score input")
        return None
    if not math.isfinite(value):
        logger.warning("Discarding non-finite score input")
        return None
    return value


def parse_rubric(raw: str | None) -> list[RubricItem]:
    text = (raw or "").strip()
    if not text:
        return []
    try:
        items = _rubric_adapter.validate_json(text)
    except PydanticValidationError as e:
        raise ValidationError("Rúbrica no válida") from e
    # criteria without a name are empty rows of the form
    items = [item for item in items if item.name]
    # weight * score can overflow even when both factors are finite
    if not math.isfinite(rubric_total(items)):
        raise ValidationError("Rúbrica no válida")
    return items


def rubric_total(items: list[RubricItem]) -> float:
    return round(sum(item.weight * item.score for item in items), 2)


def load_rubric(stored: str | None) -> list[RubricItem] | None:
    """Decode a stored rubric for display; None when it cannot be read."""
    if not stored:
        return []
    try:
        return _rubric_adapter.validate_json(stored)
    except PydanticValidationError:
        logger.warning("Stored rubric could not be decoded")
        return None


class EvaluationForm(BaseModel):
    """Sanitized teacher submission for POST /evaluations."""

    student_name: str
    student_id: str | None = None
    course: str | None = None
    date: str | None = None
    score: float | None = None
    comments: str | None = None
    view_code: str = Field(min_length=PIN_MIN_LENGTH, max_length=PIN_MAX_LENGTH)
    rubric: list[RubricItem] = Field(default_factory=list)

    @property
    def rubric_json(self) -> str | None:
        if not self.rubric:
            return None
        return json.dumps(
            [item.model_dump() for item in self.rubric], ensure_ascii=False
        )

    @classmethod
    def from_form(cls, form: Mapping[str, str]) -> "EvaluationForm":
        """Sanitize raw form fields; raise ValidationError on missing name or PIN."""
        student_name = clean(form.get("student_name"))
        view_code = normalize_pin(form.get("view_code"))
        if not student_name or not view_code:
            raise ValidationError("Faltan campos obligatorios")
        if not is_valid_pin(view_code):
            raise ValidationError(
                f"El PIN debe tener entre {PIN_MIN_LENGTH} y {PIN_MAX_LENGTH} caracteres"
            )

        rubric = parse_rubric(form.get("rubric_json"))
        score = parse_score(form.get("score"))
        if score is None and rubric:
            score = rubric_total(rubric)

        return cls(
            student_name=student_name,
            student_id=clean(form.get("student_id")) or None,
            course=clean(form.get("course")) or None,
            date=clean(form.get("date")) or None,
            score=score,
            comments=clean(form.get("comments")) or None,
            view_code=view_code,
            rubric=rubric,
        )
