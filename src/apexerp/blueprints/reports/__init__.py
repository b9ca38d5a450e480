"""Reports blueprint package."""

from __future__ import annotations

from flask import Blueprint, render_template

bp = Blueprint("reports", __name__, url_prefix="/reports")


@bp.get("/")
def index():
    """Placeholder page; analytics are not computed."""

    return render_template("reports/index.html")


__all__ = ["bp"]
