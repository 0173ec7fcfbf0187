"""Install or upgrade the AdGuard Home container on a RouterOS device.

The workflow is a straight sequence of check-then-apply steps. Each step is
safe to repeat, so an interrupted or failed run is fixed by running it again:

1. refuse RouterOS releases older than the configured minimum
2. enable container device mode (needs a router restart, then a re-run)
3. point the container subsystem at the registry
4. create the mount, env and veth records if they are missing
5. stop and remove the old container, create a new one from the remote
   image, wait for the extraction and start it
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable

from .api.client import RouterOSClient
from .api.exceptions import (
    DeployError,
    ExtractTimeoutError,
    RebootRequiredError,
    RosAdguardError,
    StopTimeoutError,
    VersionTooOldError,
)
from .models.config import DeploymentConfig
from .models.container import ContainerState, ContainerStatus, RouterOSVersion
from .utils.helpers import ros_bool, ros_flag
from .utils.output import print_info, print_success, print_warning

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class Installer:
    """Reconcile one RouterOS device with a ``DeploymentConfig``."""

    def __init__(
        self,
        client: RouterOSClient,
        deployment: DeploymentConfig,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """Initialize installer.

        Args:
            client: Connected RouterOS client
            deployment: Desired state
            sleep: Awaitable used between status polls
        """
        self.client = client
        self.deployment = deployment
        self.sleep = sleep

    async def run(self) -> ContainerStatus | None:
        """Run every step in order.

        Returns:
            Container status read after the start command

        Raises:
            DeployError: On a precondition failure or a wait timeout
        """
        name = self.deployment.container_name
        await self._host_log("info", f"rosadguard: installing {name} ({self.deployment.image})")

        try:
            await self.check_version()
            await self.ensure_container_mode()
            await self.configure_registry()
            await self.ensure_mount()
            await self.ensure_env()
            await self.ensure_interface()
            status = await self.reconcile_container()
        except DeployError as e:
            logger.error("Install of %s failed: %s", name, e)
            await self._host_log("error", f"rosadguard: {e}")
            raise

        await self._host_log("info", f"rosadguard: container {name} started successfully")
        return status

    # Preconditions

    async def check_version(self) -> RouterOSVersion:
        """Refuse to run on RouterOS releases older than ``min_version``.

        Returns:
            Detected version

        Raises:
            VersionParseError: If the router reports an unreadable version
            VersionTooOldError: If the router is too old
        """
        raw = await self.client.get_version()
        version = RouterOSVersion.parse(raw)
        minimum = RouterOSVersion.parse(self.deployment.min_version)
        logger.info("RouterOS version %s (minimum %s)", raw, minimum)

        if version < minimum:
            raise VersionTooOldError(str(minimum), raw)

        print_success(f"RouterOS {raw} is supported")
        return version

    async def ensure_container_mode(self) -> None:
        """Make sure container device mode is active.

        Enabling it only takes effect after a restart, so a run that has to
        enable it always ends with ``RebootRequiredError``.
        """
        device_mode = await self.client.get_device_mode()
        if ros_bool(device_mode.get("container")):
            print_success("Container mode is enabled")
            return

        print_warning("Container mode is disabled, enabling it")
        await self.client.enable_container_mode()
        raise RebootRequiredError()

    # Supporting records

    async def configure_registry(self) -> bool:
        """Set registry URL and tmpdir if the URL is not the desired one.

        Returns:
            True if the settings were written
        """
        d = self.deployment
        current = await self.client.get_container_config()
        if current.get("registry-url") == d.registry_url:
            logger.info("Registry already set to %s", d.registry_url)
            return False

        await self.client.set_container_config(**{"registry-url": d.registry_url, "tmpdir": d.tmpdir})
        print_info(f"Registry set to {d.registry_url} (tmpdir {d.tmpdir})")
        return True

    async def ensure_mount(self) -> bool:
        """Create the mount list entry if the list is empty.

        Returns:
            True if the entry was created
        """
        d = self.deployment
        if await self.client.get_mounts(d.mount_list):
            logger.info("Mount list %s already exists", d.mount_list)
            return False

        await self.client.add_mount(d.mount_list, d.mount_src, d.mount_dst)
        print_info(f"Created mount {d.mount_list}: {d.mount_src} -> {d.mount_dst}")
        return True

    async def ensure_env(self) -> bool:
        """Create the env list entry if it is missing.

        Returns:
            True if the entry was created
        """
        d = self.deployment
        if await self.client.get_envs(d.env_list, d.env_key):
            logger.info("Env %s in list %s already exists", d.env_key, d.env_list)
            return False

        await self.client.add_env(d.env_list, d.env_key, d.env_value)
        print_info(f"Created env list {d.env_list}: {d.env_key}={d.env_value}")
        return True

    async def ensure_interface(self) -> bool:
        """Create the veth interface if it is missing.

        Returns:
            True if the interface was created
        """
        veth = self.deployment.interface
        if await self.client.get_veths(veth.name):
            logger.info("Interface %s already exists", veth.name)
            return False

        await self.client.add_veth(veth.name, veth.address, veth.gateway)
        print_info(f"Created interface {veth.name}")
        return True

    # Container

    async def read_status(self) -> ContainerStatus | None:
        """Read the managed container's status.

        Returns:
            Status of the first record with the container name, or None
        """
        records = await self.client.get_containers(self.deployment.container_name)
        if not records:
            return None
        return ContainerStatus.from_record(records[0])

    async def reconcile_container(self) -> ContainerStatus | None:
        """Replace any existing container with a fresh one and start it.

        Returns:
            Status read after the start command
        """
        existing = await self.read_status()
        if existing is not None:
            await self.remove_existing(existing)

        await self.create()
        ready = await self.wait_for_extraction()

        await self.client.start_container(ready.id)
        print_success(f"Container {self.deployment.container_name} started successfully")
        return await self.read_status()

    async def remove_existing(self, existing: ContainerStatus) -> None:
        """Stop the existing container, wait for it, then remove it.

        Raises:
            StopTimeoutError: If it does not stop within ``stop_poll.timeout``
        """
        name = self.deployment.container_name
        poll = self.deployment.stop_poll

        if existing.stopped:
            current: ContainerStatus | None = existing
        else:
            print_info(f"Stopping container {name}...")
            await self.client.stop_container(existing.id)

            elapsed = 0.0
            while True:
                current = await self.read_status()
                if current is None or current.stopped:
                    break
                if elapsed >= poll.timeout:
                    raise StopTimeoutError(name, poll.timeout)
                await self.sleep(poll.interval)
                elapsed += poll.interval
            logger.info("Container %s stopped after %gs", name, elapsed)

        if current is None:
            logger.info("Container %s disappeared while stopping", name)
            return

        await self.client.remove_container(existing.id)
        print_info(f"Removed container {name}")
        await self.sleep(self.deployment.settle_delay)

    async def create(self) -> None:
        """Create the container from the remote image.

        The router pulls and extracts the image in the background.
        """
        d = self.deployment
        params: dict[str, Any] = {
            "name": d.container_name,
            "remote-image": d.image,
            "interface": d.interface.name,
            "logging": ros_flag(d.logging),
            "mountlists": d.mount_list,
            "envlists": d.env_list,
            "start-on-boot": ros_flag(d.start_on_boot),
            "root-dir": d.root_dir,
            "workdir": d.workdir,
            "cmd": d.cmd,
            "entrypoint": d.entrypoint,
        }
        await self.client.create_container(**params)
        print_info(f"Pulling {d.image}...")

    async def wait_for_extraction(self) -> ContainerStatus:
        """Poll until the image is extracted and the container is stopped.

        Returns:
            Status of the ready container

        Raises:
            ExtractTimeoutError: If it is not ready within ``extract_poll.timeout``
        """
        name = self.deployment.container_name
        poll = self.deployment.extract_poll

        elapsed = 0.0
        current = await self.read_status()
        while _not_ready(current) and elapsed < poll.timeout:
            await self.sleep(poll.interval)
            elapsed += poll.interval
            current = await self.read_status()
            logger.debug(
                "Waiting for %s: %s after %gs",
                name,
                current.state.value if current else ContainerState.ABSENT.value,
                elapsed,
            )

        if current is None or not current.stopped:
            raise ExtractTimeoutError(
                name,
                poll.timeout,
                current.extracting if current else None,
                current.stopped if current else None,
            )

        logger.info("Container %s %s after %gs", name, ContainerState.READY.value, elapsed)
        return current

    async def inspect(self) -> dict[str, Any]:
        """Collect read-only facts about the router and the managed container.

        Returns:
            Dict with version, container_mode, registry_url and status
        """
        version = await self.client.get_version()
        device_mode = await self.client.get_device_mode()
        config = await self.client.get_container_config()
        status = await self.read_status()
        return {
            "version": version,
            "container_mode": ros_bool(device_mode.get("container")),
            "registry_url": config.get("registry-url", ""),
            "status": status,
            "state": status.state if status else ContainerState.ABSENT,
        }

    async def _host_log(self, severity: str, message: str) -> None:
        """Mirror a message into the router log if enabled."""
        if not self.deployment.host_log:
            return
        try:
            await self.client.log(message, severity)
        except RosAdguardError as e:
            logger.warning("Could not write to router log: %s", e)


def _not_ready(status: ContainerStatus | None) -> bool:
    return status is None or status.extracting or not status.stopped
