from __future__ import annotations

from pathlib import Path

import bcrypt
from fastapi.testclient import TestClient

from fleetadmin.api.app import create_app
from fleetadmin.api.deps import get_executor
from fleetadmin.config import Settings
from tests.support.fakes import FakeExecutor

ADMIN_PASSWORD = "correct horse"
ADMIN_HASH = bcrypt.hashpw(ADMIN_PASSWORD.encode("utf-8"), bcrypt.gensalt(rounds=4)).decode()


def make_settings(tmp_path: Path, **overrides: object) -> Settings:
    values: dict[str, object] = {
        "root_dir": tmp_path,
        "admin_bcrypt_hash": ADMIN_HASH,
        "admin_jwt_secret": "test-secret",
        "cookie_secure": False,
        "backup_log_dir": tmp_path / "logs",
        "ui_dir": tmp_path / "ui",
    }
    values.update(overrides)
    return Settings(**values)  # type: ignore[arg-type]


def make_client(
    tmp_path: Path,
    executor: FakeExecutor | None = None,
    *,
    login: bool = True,
    **overrides: object,
) -> tuple[TestClient, FakeExecutor]:
    fake = executor or FakeExecutor()
    app = create_app(make_settings(tmp_path, **overrides))
    app.dependency_overrides[get_executor] = lambda: fake
    client = TestClient(app)
    if login:
        response = client.post("/api/auth/login", json={"password": ADMIN_PASSWORD})
        assert response.status_code == 200
    return client, fake
