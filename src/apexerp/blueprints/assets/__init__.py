"""Assets blueprint package."""

from __future__ import annotations

from ..tabbed import build_blueprint
from .forms import MODULE

bp = build_blueprint(MODULE, __name__)

__all__ = ["MODULE", "bp"]
