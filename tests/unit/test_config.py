from pathlib import Path

import pytest

from fleetadmin.config import load_settings


def test_env_file_is_read_from_root_directory(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    root = tmp_path / "fleet"
    root.mkdir()
    (root / ".env").write_text(
        "ADMIN_PORT=7001\nFLEET_ADMIN_PLATFORM_CLI=podman-compose\n", encoding="utf-8"
    )
    elsewhere = tmp_path / "elsewhere"
    elsewhere.mkdir()
    (elsewhere / ".env").write_text("ADMIN_PORT=9999\n", encoding="utf-8")
    monkeypatch.chdir(elsewhere)
    monkeypatch.setenv("FLEET_ADMIN_ROOT", str(root))
    monkeypatch.delenv("ADMIN_PORT", raising=False)
    monkeypatch.delenv("FLEET_ADMIN_PLATFORM_CLI", raising=False)

    settings = load_settings()

    assert settings.root_dir == root
    assert settings.port == 7001
    assert settings.platform_cli == "podman-compose"
    assert settings.state_path == root / "state" / "projects.json"


def test_process_environment_wins_over_env_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    (tmp_path / ".env").write_text("ADMIN_PORT=7001\n", encoding="utf-8")
    monkeypatch.setenv("ADMIN_PORT", "7002")

    assert load_settings(tmp_path).port == 7002
