"""Root URL blueprint."""

from __future__ import annotations

from flask import Blueprint, redirect, url_for

bp = Blueprint("home", __name__)


@bp.get("/")
def index():
    return redirect(url_for("dashboard.index"))


__all__ = ["bp"]
