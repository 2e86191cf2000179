"""Page renderer: Jinja2 fragments wrapped in the shared shell.

Autoescaping is on for every template, so values reach the page escaped
regardless of whether they were sanitized on the way in.
"""

from datetime import date
from pathlib import Path

from fastapi import Request
from fastapi.responses import HTMLResponse
from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup

from evaluaciones.auth.middleware import is_teacher

TEMPLATES_DIR = Path(__file__).parent / "templates"

env = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    autoescape=True,
    trim_blocks=True,
    lstrip_blocks=True,
)


def render_fragment(template: str, **context) -> Markup:
    """Render a page body; the result is trusted markup for the shell."""
    return Markup(env.get_template(template).render(**context))


def render_shell(
    title: str,
    body: Markup,
    *,
    is_teacher: bool = False,
    flash: str | None = None,
    year: int | None = None,
) -> str:
    """Full HTML document: nav for the auth state, optional flash, footer."""
    return env.get_template("shell.html").render(
        title=title,
        body=body,
        is_teacher=is_teacher,
        flash=flash,
        year=year or date.today().year,
    )


def page(
    request: Request,
    title: str,
    template: str,
    status_code: int = 200,
    flash: str | None = None,
    **context,
) -> HTMLResponse:
    body = render_fragment(template, **context)
    html = render_shell(title, body, is_teacher=is_teacher(request), flash=flash)
    return HTMLResponse(html, status_code=status_code)
