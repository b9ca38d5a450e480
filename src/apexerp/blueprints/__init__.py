"""Blueprint exports."""

from . import (
    assets,
    contractors,
    dashboard,
    finance,
    home,
    hr,
    inventory,
    logistics,
    maintenance,
    production,
    purchase,
    quality,
    reports,
    sales,
    settings,
    statutory,
)

__all__ = [
    "assets",
    "contractors",
    "dashboard",
    "finance",
    "home",
    "hr",
    "inventory",
    "logistics",
    "maintenance",
    "production",
    "purchase",
    "quality",
    "reports",
    "sales",
    "settings",
    "statutory",
]
