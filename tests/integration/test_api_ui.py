from pathlib import Path

from tests.support.api import make_client


def _build_ui(tmp_path: Path) -> Path:
    ui = tmp_path / "ui"
    (ui / "assets").mkdir(parents=True)
    (ui / "index.html").write_text("<html><body>admin</body></html>", encoding="utf-8")
    (ui / "assets" / "app.js").write_text("console.log('admin')", encoding="utf-8")
    return ui


def test_static_assets_and_spa_fallback(tmp_path: Path) -> None:
    _build_ui(tmp_path)
    client, _ = make_client(tmp_path, login=False)

    root = client.get("/")
    assert root.status_code == 200
    assert "admin" in root.text

    asset = client.get("/assets/app.js")
    assert asset.status_code == 200
    assert asset.text == "console.log('admin')"

    deep_link = client.get("/projects/acme/settings")
    assert deep_link.status_code == 200
    assert deep_link.headers["content-type"].startswith("text/html")
    assert "admin" in deep_link.text


def test_unmatched_api_path_does_not_fall_back_to_ui(tmp_path: Path) -> None:
    _build_ui(tmp_path)
    client, _ = make_client(tmp_path)
    response = client.get("/api/unknown")
    assert response.status_code == 404
    assert response.json() == {"error": "not found"}


def test_without_ui_bundle_unmatched_paths_are_404(tmp_path: Path) -> None:
    client, _ = make_client(tmp_path, login=False)
    response = client.get("/dashboard")
    assert response.status_code == 404
    assert response.json() == {"error": "not found"}
