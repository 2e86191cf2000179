"""Unit tests for form parsing, score coercion and rubric totals."""

import json

import pytest

from evaluaciones.errors import ValidationError
from evaluaciones.schemas.evaluation import (
    EvaluationForm,
    load_rubric,
    parse_rubric,
    parse_score,
)


@pytest.mark.parametrize(
    "raw, expected",
    [("", None), (None, None), ("  ", None), ("8.5", 8.5), ("10", 10.0), ("abc", None), ("nan", None), ("inf", None)],
)
def test_parse_score(raw, expected):
    assert parse_score(raw) == expected


def test_form_requires_name_and_pin():
    with pytest.raises(ValidationError):
        EvaluationForm.from_form({"student_name": "Ana", "view_code": ""})
    with pytest.raises(ValidationError):
        EvaluationForm.from_form({"student_name": "", "view_code": "4837"})
    # a name that sanitizes to nothing counts as missing
    with pytest.raises(ValidationError):
        EvaluationForm.from_form({"student_name": "<script>x</script>", "view_code": "4837"})


def test_form_rejects_pin_outside_length():
    with pytest.raises(ValidationError):
        EvaluationForm.from_form({"student_name": "Ana", "view_code": "123"})
    with pytest.raises(ValidationError):
        EvaluationForm.from_form({"student_name": "Ana", "view_code": "1" * 13})


def test_form_sanitizes_and_blanks_to_none():
    form = EvaluationForm.from_form(
        {
            "student_name": "  <b>Ana</b> Pérez ",
            "student_id": "",
            "course": "Física<script>x()</script>",
            "score": "no es número",
            "comments": "Bien\nhecho",
            "view_code": " 4837 ",
        }
    )
    assert form.student_name == "Ana Pérez"
    assert form.student_id is None
    assert form.course == "Física"
    assert form.score is None
    assert form.comments == "Bien\nhecho"
    assert form.view_code == "4837"
    assert form.rubric_json is None


def test_rubric_total_fills_blank_score():
    rubric = [
        {"name": "Programación", "weight": 2, "score": 3},
        {"name": "Documentación", "weight": 1, "score": 4.5},
        {"name": "", "weight": 5, "score": 5},
    ]
    form = EvaluationForm.from_form(
        {"student_name": "Ana", "view_code": "4837", "rubric_json": json.dumps(rubric)}
    )
    assert form.score == 10.5
    assert [item.name for item in form.rubric] == ["Programación", "Documentación"]
    stored = json.loads(form.rubric_json)
    assert stored[0]["partial"] == 6.0


def test_explicit_score_wins_over_rubric():
    form = EvaluationForm.from_form(
        {
            "student_name": "Ana",
            "view_code": "4837",
            "score": "7",
            "rubric_json": '[{"name": "A", "weight": 1, "score": 3}]',
        }
    )
    assert form.score == 7.0


def test_malformed_rubric_is_rejected():
    with pytest.raises(ValidationError):
        parse_rubric("{not json")
    with pytest.raises(ValidationError):
        parse_rubric('[{"name": "A", "weight": "mucho"}]')


def test_load_rubric_roundtrip_and_corrupt():
    form = EvaluationForm.from_form(
        {"student_name": "Ana", "view_code": "4837", "rubric_json": '[{"name": "A", "weight": 2, "score": 2}]'}
    )
    items = load_rubric(form.rubric_json)
    assert items[0].name == "A"
    assert items[0].partial == 4.0
    assert load_rubric(None) == []
    assert load_rubric("garbage") is None


def test_rubric_overflowing_partial_is_rejected():
    """Finite weight and score whose product overflows must not reach the store."""
    with pytest.raises(ValidationError):
        parse_rubric('[{"name": "A", "weight": 1e308, "score": 10}]')
    with pytest.raises(ValidationError):
        EvaluationForm.from_form(
            {
                "student_name": "Ana",
                "view_code": "4837",
                "rubric_json": '[{"name": "A", "weight": 1e308, "score": 1e308}]',
            }
        )
