"""Dashboard routes."""

from __future__ import annotations

from flask import render_template, url_for

from ...forms import iter_modules
from ...navigation import NAV_ITEMS
from . import bp


@bp.get("/")
def index():
    """List every module with its forms."""

    nav_order = {item.blueprint: position for position, item in enumerate(NAV_ITEMS)}
    modules = sorted(
        (module for module in iter_modules() if module.slug in nav_order),
        key=lambda module: nav_order[module.slug],
    )
    cards = [
        {
            "title": module.title,
            "nav_label": module.nav_label,
            "icon": module.icon,
            "description": module.description,
            "form_count": len(module.forms),
            "url": url_for(f"{module.slug}.index"),
            "forms": [
                {
                    "label": definition.tab_label,
                    "url": url_for(f"{module.slug}.index", tab=definition.slug),
                }
                for definition in module.forms
            ],
        }
        for module in modules
    ]
    return render_template(
        "dashboard/index.html",
        cards=cards,
        total_forms=sum(card["form_count"] for card in cards),
    )
