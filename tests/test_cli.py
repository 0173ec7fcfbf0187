"""Tests for the typer application."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from rosadguard import __version__
from rosadguard.cli import install as install_cli
from rosadguard.cli.main import app
from rosadguard.config import ConfigManager

from .conftest import FakeRouter

runner = CliRunner()


@pytest.fixture
def config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("ROSADGUARD_CONFIG_DIR", str(tmp_path))
    return tmp_path


def add_profile(name: str = "home") -> None:
    result = runner.invoke(
        app,
        ["config", "add", name, "--host", "192.168.88.1", "--user", "admin", "--password", "secret", "--yes"],
    )
    assert result.exit_code == 0, result.output


def use_router(monkeypatch: pytest.MonkeyPatch, router: FakeRouter) -> None:
    monkeypatch.setattr(install_cli, "RouterOSClient", lambda profile: router)


def test_version_flag() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_config_add_and_list(config_dir: Path) -> None:
    add_profile()

    result = runner.invoke(app, ["config", "list"])

    assert result.exit_code == 0
    assert "home" in result.output
    assert ConfigManager(config_dir).get_profile("home").auth.password == "secret"


def test_config_add_refuses_duplicate(config_dir: Path) -> None:
    add_profile()

    result = runner.invoke(
        app, ["config", "add", "home", "--host", "r2", "--user", "admin", "--password", "x", "--yes"]
    )

    assert result.exit_code == 1
    assert "already exists" in result.output


def test_config_remove(config_dir: Path) -> None:
    add_profile()
    add_profile("lab")

    result = runner.invoke(app, ["config", "remove", "lab", "--yes"])

    assert result.exit_code == 0
    assert ConfigManager(config_dir).list_profiles() == ["home"]


def test_commands_without_config_fail_cleanly(config_dir: Path) -> None:
    result = runner.invoke(app, ["install", "--yes"])
    assert result.exit_code == 1
    assert "Configuration" in result.output


def test_install_fresh_router(config_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    add_profile()
    router = FakeRouter()
    use_router(monkeypatch, router)

    result = runner.invoke(app, ["install", "--yes"])

    assert result.exit_code == 0, result.output
    assert "started successfully" in result.output
    assert router.write_names()[-2:] == ["create", "start"]


def test_install_reports_reboot_required(config_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    add_profile()
    router = FakeRouter(container_mode="no")
    use_router(monkeypatch, router)

    result = runner.invoke(app, ["install", "--yes"])

    assert result.exit_code == 1
    assert "Reboot required" in result.output
    assert router.write_names() == ["enable_container_mode"]


def test_install_rejects_old_routeros(config_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    add_profile()
    router = FakeRouter(version="7.16.2 (stable)")
    use_router(monkeypatch, router)

    result = runner.invoke(app, ["install", "--yes"])

    assert result.exit_code == 1
    assert "7.21" in result.output
    assert router.writes == []


def test_install_declined_does_nothing(config_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    add_profile()
    router = FakeRouter()
    use_router(monkeypatch, router)

    result = runner.invoke(app, ["install"], input="n\n")

    assert result.exit_code == 0
    assert "Cancelled" in result.output
    assert router.writes == []


def test_status_shows_absent_container(config_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    add_profile()
    use_router(monkeypatch, FakeRouter())

    result = runner.invoke(app, ["status"])

    assert result.exit_code == 0, result.output
    assert "absent" in result.output
    assert "rosadguard install" in result.output
