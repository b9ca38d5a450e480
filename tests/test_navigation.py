"""Shell pages: home redirect, dashboard, reports and the sidebar."""

from __future__ import annotations

from apexerp.navigation import NAV_ITEMS, _initials


def test_root_redirects_to_dashboard(client):
    response = client.get("/")

    assert response.status_code == 302
    assert response.headers["Location"].endswith("/dashboard/")


def test_dashboard_lists_modules_in_sidebar_order(client):
    response = client.get("/dashboard/")

    assert response.status_code == 200
    html = response.get_data(as_text=True)
    positions = [
        html.index(title)
        for title in ("Sales Management", "Purchase Management", "Production Management")
    ]
    assert positions == sorted(positions)
    assert "/production/?tab=routecard" in html


def test_reports_placeholder(client):
    html = client.get("/reports/").get_data(as_text=True)

    assert "Reporting &amp; Analytics" in html
    assert "Reports module content will be displayed here." in html


def test_sidebar_marks_active_module(client):
    html = client.get("/inventory/").get_data(as_text=True)

    assert 'href="/inventory/" class="nav-link active"' in html
    assert 'href="/sales/" class="nav-link"' in html
    for item in NAV_ITEMS:
        assert item.label in html
    assert "Settings" in html


def test_user_card_uses_configured_user(app):
    app.config.update(CURRENT_USER_NAME="Priya Raman", CURRENT_USER_ROLE="Manager")

    with app.test_client() as client:
        html = client.get("/dashboard/").get_data(as_text=True)

    assert "Priya Raman" in html
    assert "Manager" in html
    assert ">PR<" in html


def test_initials():
    assert _initials("John Doe") == "JD"
    assert _initials("cher") == "C"
    assert _initials("Anna Maria Lopez") == "AM"
    assert _initials("   ") == "?"
