"""Tests for the YAML profile store."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from rosadguard.api.exceptions import ConfigError
from rosadguard.config import AuthConfig, ConfigManager, ProfileConfig
from rosadguard.crypto import AGE_PREFIX


def make_profile(host: str = "192.168.88.1", password: str = "secret") -> ProfileConfig:
    return ProfileConfig(host=host, auth=AuthConfig(user="admin", password=password))


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        ConfigManager(tmp_path).load()


def test_first_profile_becomes_default(tmp_path: Path) -> None:
    manager = ConfigManager(tmp_path)
    manager.add_profile("home", make_profile())
    manager.add_profile("office", make_profile(host="10.0.0.1"))

    reloaded = ConfigManager(tmp_path)
    assert reloaded.list_profiles() == ["home", "office"]
    assert reloaded.get().default_profile == "home"
    assert reloaded.get_profile().host == "192.168.88.1"
    assert reloaded.get_profile("office").host == "10.0.0.1"


def test_password_is_encrypted_on_disk(tmp_path: Path) -> None:
    manager = ConfigManager(tmp_path)
    manager.add_profile("home", make_profile(password="hunter2"))

    raw = yaml.safe_load((tmp_path / "config.yaml").read_text())
    stored = raw["profiles"]["home"]["auth"]["password"]
    assert stored.startswith(AGE_PREFIX)
    assert "hunter2" not in (tmp_path / "config.yaml").read_text()

    assert ConfigManager(tmp_path).get_profile("home").auth.password == "hunter2"


def test_plaintext_password_is_reencrypted_on_load(tmp_path: Path) -> None:
    (tmp_path / "config.yaml").write_text(yaml.safe_dump({
        "default_profile": "home",
        "profiles": {"home": {"host": "r1", "auth": {"user": "admin", "password": "plain"}}},
    }))

    profile = ConfigManager(tmp_path).get_profile()

    assert profile.auth.password == "plain"
    raw = yaml.safe_load((tmp_path / "config.yaml").read_text())
    assert raw["profiles"]["home"]["auth"]["password"].startswith(AGE_PREFIX)


def test_deployment_overrides_are_loaded(tmp_path: Path) -> None:
    (tmp_path / "config.yaml").write_text(yaml.safe_dump({
        "default_profile": "home",
        "profiles": {
            "home": {
                "host": "r1",
                "auth": {"user": "admin"},
                "deployment": {
                    "root_dir": "usb1/adguard/root",
                    "interface": {"name": "veth-dns", "address": "10.9.0.2/24"},
                    "extract_poll": {"interval": 10, "timeout": 600},
                },
            }
        },
    }))

    deployment = ConfigManager(tmp_path).get_profile().deployment

    assert deployment.root_dir == "usb1/adguard/root"
    assert deployment.interface.name == "veth-dns"
    assert deployment.interface.gateway == "172.17.0.1"
    assert deployment.extract_poll.timeout == 600
    assert deployment.container_name == "adguardhome"


def test_invalid_yaml_raises(tmp_path: Path) -> None:
    (tmp_path / "config.yaml").write_text("profiles: [unclosed")
    with pytest.raises(ConfigError, match="Invalid YAML"):
        ConfigManager(tmp_path).load()


def test_invalid_profile_raises(tmp_path: Path) -> None:
    (tmp_path / "config.yaml").write_text(yaml.safe_dump({"profiles": {"home": {"auth": {}}}}))
    with pytest.raises(ConfigError, match="Invalid config"):
        ConfigManager(tmp_path).load()


def test_remove_default_profile_promotes_next(tmp_path: Path) -> None:
    manager = ConfigManager(tmp_path)
    manager.add_profile("home", make_profile())
    manager.add_profile("office", make_profile(host="10.0.0.1"))

    manager.remove_profile("home")

    assert manager.get().default_profile == "office"
    with pytest.raises(ConfigError):
        manager.remove_profile("home")


def test_unknown_profile_lists_available(tmp_path: Path) -> None:
    manager = ConfigManager(tmp_path)
    manager.add_profile("home", make_profile())

    with pytest.raises(ConfigError, match="Available profiles: home"):
        manager.get_profile("lab")


def test_config_dir_from_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ROSADGUARD_CONFIG_DIR", str(tmp_path / "custom"))
    manager = ConfigManager()
    assert manager.config_file == tmp_path / "custom" / "config.yaml"


def test_set_default_profile(tmp_path: Path) -> None:
    manager = ConfigManager(tmp_path)
    manager.add_profile("home", make_profile())
    manager.add_profile("office", make_profile(host="10.0.0.1"))

    manager.set_default_profile("office")

    assert ConfigManager(tmp_path).get_profile().host == "10.0.0.1"
    with pytest.raises(ConfigError, match="'lab' not found"):
        manager.set_default_profile("lab")


def test_config_file_is_owner_only(tmp_path: Path) -> None:
    ConfigManager(tmp_path / "cfg").add_profile("home", make_profile())
    assert (tmp_path / "cfg" / "config.yaml").stat().st_mode & 0o777 == 0o600
