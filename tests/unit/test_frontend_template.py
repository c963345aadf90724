"""Tests for the real frontend template shipped with the package.

The FastAPI integration suite uses a minimal temporary template; these checks
read the repository's actual `index.html` so the element ids and API paths the
script depends on stay wired up.
"""

from __future__ import annotations

from pathlib import Path

TEMPLATE_PATH = (
    Path(__file__).resolve().parents[2] / "src" / "mockupstudio" / "templates" / "index.html"
)


def test_index_template_includes_controls() -> None:
    html = TEMPLATE_PATH.read_text(encoding="utf-8")

    assert 'id="mode-mockup"' in html
    assert 'id="mode-image-gen"' in html
    assert 'id="file-input"' in html
    assert 'accept="image/png, image/jpeg, image/webp"' in html
    assert 'id="preset-list"' in html
    assert 'id="ratio-list"' in html
    assert 'id="btn-mockup"' in html
    assert 'id="btn-generate"' in html
    assert 'id="gallery"' in html


def test_index_template_calls_session_api() -> None:
    html = TEMPLATE_PATH.read_text(encoding="utf-8")

    assert '"/api/config"' in html
    assert '"/api/sessions"' in html
    assert "/gallery/${item.id}/download" in html


def test_index_template_has_no_api_key() -> None:
    """The browser page must never reference the credential."""
    html = TEMPLATE_PATH.read_text(encoding="utf-8").lower()

    assert "api_key" not in html
    assert "generativelanguage.googleapis.com" not in html


def test_index_template_deletes_session_on_unload() -> None:
    html = TEMPLATE_PATH.read_text(encoding="utf-8")

    assert 'addEventListener("pagehide"' in html
    assert 'method: "DELETE", keepalive: true' in html


def test_index_template_checks_status_before_parsing_body() -> None:
    """Non-JSON error bodies must not hide the HTTP status."""
    html = TEMPLATE_PATH.read_text(encoding="utf-8")
    api_body = html[html.index("async function api(") : html.index("function render()")]

    assert api_body.index("if (!resp.ok)") < api_body.index("resp.json()")
    assert "resp.statusText" in api_body
