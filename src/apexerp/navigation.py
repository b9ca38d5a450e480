"""Sidebar navigation and the template context shared by every page."""

from __future__ import annotations

from dataclasses import dataclass

from flask import Flask, current_app, request, url_for


@dataclass(frozen=True, slots=True)
class NavItem:
    label: str
    blueprint: str
    icon: str

    @property
    def endpoint(self) -> str:
        return f"{self.blueprint}.index"


NAV_ITEMS: tuple[NavItem, ...] = (
    NavItem("Dashboard", "dashboard", "layout-dashboard"),
    NavItem("Sales", "sales", "shopping-cart"),
    NavItem("Purchase", "purchase", "truck"),
    NavItem("Production", "production", "gantt-chart-square"),
    NavItem("Logistics", "logistics", "ship"),
    NavItem("Inventory", "inventory", "warehouse"),
    NavItem("Finance", "finance", "landmark"),
    NavItem("HR", "hr", "users"),
    NavItem("Contractors", "contractors", "hard-hat"),
    NavItem("Quality", "quality", "shield-check"),
    NavItem("Maintenance", "maintenance", "wrench"),
    NavItem("Assets", "assets", "briefcase"),
    NavItem("Reports", "reports", "bar-chart-3"),
    NavItem("Statutory", "statutory", "scroll-text"),
)

FOOTER_ITEMS: tuple[NavItem, ...] = (NavItem("Settings", "settings", "settings"),)


def _initials(name: str) -> str:
    parts = [part for part in name.split() if part]
    return "".join(part[0] for part in parts[:2]).upper() or "?"


def _nav_entries(items: tuple[NavItem, ...]) -> list[dict]:
    entries = []
    for item in items:
        if item.blueprint not in current_app.blueprints:
            continue
        entries.append(
            {
                "label": item.label,
                "icon": item.icon,
                "url": url_for(item.endpoint),
                "active": request.blueprint == item.blueprint,
            }
        )
    return entries


def shell_context() -> dict:
    """Values every layout template needs: nav, current user, branding."""

    user_name = current_app.config.get("CURRENT_USER_NAME", "")
    return {
        "app_name": current_app.config.get("APP_NAME", "ApexERP"),
        "app_tagline": current_app.config.get("APP_TAGLINE", ""),
        "nav_items": _nav_entries(NAV_ITEMS),
        "footer_items": _nav_entries(FOOTER_ITEMS),
        "current_user": {
            "name": user_name,
            "role": current_app.config.get("CURRENT_USER_ROLE", ""),
            "initials": _initials(user_name),
        },
    }


def init_app(app: Flask) -> None:
    app.context_processor(shell_context)
