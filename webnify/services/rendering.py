"""
Server-side rendering of the demo page and its package table.
"""
from __future__ import annotations

from pathlib import Path
from typing import Iterable

from fastapi.templating import Jinja2Templates

from webnify.domain.demo_utils import format_number
from webnify.domain.models import SamplePackage

PACKAGE_ROOT = Path(__file__).resolve().parents[1]
TEMPLATES_DIR = PACKAGE_ROOT / "templates"
STATIC_DIR = PACKAGE_ROOT / "static"

TABLE_HEADERS = ("ID", "Tool Name", "Version", "Downloads")

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["format_number"] = format_number


def render_package_table(packages: Iterable[SamplePackage]) -> str:
    """
    Render the data table fragment (header row, one body row per package and
    the table's style block).
    """
    template = templates.env.get_template("partials/package_table.html")
    return template.render(headers=TABLE_HEADERS, packages=list(packages))
