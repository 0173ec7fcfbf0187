"""Shared fixtures: an in-memory RouterOS host driven by virtual time."""

from __future__ import annotations

from typing import Any

import pytest

from rosadguard.models.config import DeploymentConfig, PollConfig


class FakeRouter:
    """Stand-in for ``RouterOSClient`` that keeps router state in memory.

    Time only moves when ``sleep`` is awaited. A stopped container reports
    ``stopped`` once ``stop_after`` seconds have passed since the stop
    command (never if None); a created one finishes extracting after
    ``extract_after`` seconds (never if None).
    """

    def __init__(
        self,
        version: str = "7.21.3 (stable)",
        container_mode: Any = "yes",
        stop_after: float | None = 0,
        extract_after: float | None = 0,
        vanish_on_stop: bool = False,
    ) -> None:
        self.identity = "MikroTik"
        self.now = 0.0
        self.version = version
        self.device_mode: dict[str, Any] = {"mode": "enterprise", "container": container_mode}
        self.container_config: dict[str, Any] = {"registry-url": "", "tmpdir": ""}
        self.mounts: list[dict[str, Any]] = []
        self.envs: list[dict[str, Any]] = []
        self.veths: list[dict[str, Any]] = []
        self.containers: list[dict[str, Any]] = []
        self.stop_after = stop_after
        self.extract_after = extract_after
        self.vanish_on_stop = vanish_on_stop
        self.writes: list[tuple[Any, ...]] = []
        self.log_entries: list[tuple[str, str]] = []
        self.sleeps: list[float] = []
        self._stop_requested: dict[str, float] = {}
        self._created: dict[str, float] = {}
        self._next_id = 1

    async def __aenter__(self) -> "FakeRouter":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        return None

    # Time

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    def _new_id(self) -> str:
        record_id = f"*{self._next_id:X}"
        self._next_id += 1
        return record_id

    def _refresh(self) -> None:
        for record in list(self.containers):
            rid = record[".id"]
            if rid in self._stop_requested:
                if self.stop_after is not None and self.now - self._stop_requested[rid] >= self.stop_after:
                    if self.vanish_on_stop:
                        self.containers.remove(record)
                        continue
                    record.update({"running": "false", "stopped": "true"})
            if rid in self._created:
                if self.extract_after is not None and self.now - self._created[rid] >= self.extract_after:
                    record.update({"extracting": "false", "stopped": "true"})
                    del self._created[rid]

    def add_running_container(self, name: str = "adguardhome") -> dict[str, Any]:
        record = {
            ".id": self._new_id(),
            "name": name,
            "remote-image": "adguard/adguardhome:v0.107.0",
            "running": "true",
            "stopped": "false",
        }
        self.containers.append(record)
        return record

    # System

    async def get_version(self) -> str:
        return self.version

    async def get_device_mode(self) -> dict[str, Any]:
        return dict(self.device_mode)

    async def enable_container_mode(self) -> None:
        self.writes.append(("enable_container_mode",))

    async def log(self, message: str, severity: str = "info") -> None:
        self.log_entries.append((severity, message))

    # Supporting records

    async def get_container_config(self) -> dict[str, Any]:
        return dict(self.container_config)

    async def set_container_config(self, **config_params: Any) -> None:
        self.writes.append(("set_container_config", config_params))
        self.container_config.update(config_params)

    async def get_mounts(self, list_name: str | None = None) -> list[dict[str, Any]]:
        return [m for m in self.mounts if list_name is None or m["list"] == list_name]

    async def add_mount(self, list_name: str, src: str, dst: str) -> dict[str, Any]:
        self.writes.append(("add_mount", list_name, src, dst))
        record = {".id": self._new_id(), "list": list_name, "src": src, "dst": dst}
        self.mounts.append(record)
        return record

    async def get_envs(self, list_name: str | None = None, key: str | None = None) -> list[dict[str, Any]]:
        return [
            e for e in self.envs
            if (list_name is None or e["list"] == list_name) and (key is None or e["key"] == key)
        ]

    async def add_env(self, list_name: str, key: str, value: str) -> dict[str, Any]:
        self.writes.append(("add_env", list_name, key, value))
        record = {".id": self._new_id(), "list": list_name, "key": key, "value": value}
        self.envs.append(record)
        return record

    async def get_veths(self, name: str | None = None) -> list[dict[str, Any]]:
        return [v for v in self.veths if name is None or v["name"] == name]

    async def add_veth(self, name: str, address: str | None = None, gateway: str | None = None) -> dict[str, Any]:
        self.writes.append(("add_veth", name))
        record = {".id": self._new_id(), "name": name, "address": address or "", "gateway": gateway or ""}
        self.veths.append(record)
        return record

    # Containers

    async def get_containers(self, name: str | None = None) -> list[dict[str, Any]]:
        self._refresh()
        return [dict(c) for c in self.containers if name is None or c["name"] == name]

    async def create_container(self, **config_params: Any) -> dict[str, Any]:
        self.writes.append(("create", config_params))
        record = dict(config_params)
        record.update({".id": self._new_id(), "extracting": "true", "stopped": "false", "running": "false"})
        self.containers.append(record)
        self._created[record[".id"]] = self.now
        return record

    async def start_container(self, container_id: str) -> None:
        self.writes.append(("start", container_id))
        for record in self.containers:
            if record[".id"] == container_id:
                record.update({"running": "true", "stopped": "false"})

    async def stop_container(self, container_id: str) -> None:
        self.writes.append(("stop", container_id))
        self._stop_requested[container_id] = self.now

    async def remove_container(self, container_id: str) -> None:
        self.writes.append(("remove", container_id))
        self.containers = [c for c in self.containers if c[".id"] != container_id]

    def write_names(self) -> list[str]:
        return [w[0] for w in self.writes]


@pytest.fixture
def router() -> FakeRouter:
    return FakeRouter()


@pytest.fixture
def deployment() -> DeploymentConfig:
    return DeploymentConfig()


@pytest.fixture
def fast_deployment() -> DeploymentConfig:
    """Deployment with short ceilings for timeout tests."""
    return DeploymentConfig(
        stop_poll=PollConfig(interval=1, timeout=3),
        extract_poll=PollConfig(interval=1, timeout=4),
        settle_delay=0,
        host_log=False,
    )
