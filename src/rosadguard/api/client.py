"""RouterOS REST API client."""

import asyncio
import logging
from typing import Any

import httpx

from .auth import AuthHandler
from .exceptions import (
    APIError,
    AuthenticationError,
    NetworkError,
    PermissionError,
    ResourceNotFoundError,
    TimeoutError,
)
from ..models.config import ProfileConfig

logger = logging.getLogger(__name__)

LOG_SEVERITIES = ("debug", "info", "warning", "error")


class RouterOSClient:
    """Async client for the RouterOS v7 REST API."""

    def __init__(
        self,
        profile: ProfileConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize RouterOS client.

        Args:
            profile: Profile configuration
            transport: Optional httpx transport, used by tests
        """
        self.profile = profile
        self.base_url = profile.base_url
        self.transport = transport
        self.auth_handler = AuthHandler(
            base_url=self.base_url,
            user=profile.auth.user,
            verify_ssl=profile.verify_ssl,
            timeout=profile.timeout,
            transport=transport,
        )
        self.identity: str | None = None
        self._auth: httpx.Auth | None = None
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "RouterOSClient":
        """Async context manager entry.

        Returns:
            Self
        """
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit.

        Args:
            exc_type: Exception type
            exc_val: Exception value
            exc_tb: Exception traceback
        """
        await self.close()

    async def connect(self) -> None:
        """Establish connection and verify credentials."""
        if not self.profile.auth.password:
            logger.debug("Connecting to %s with an empty password", self.base_url)

        self._auth = self.auth_handler.get_basic_auth(self.profile.auth.password)
        self.identity = await self.auth_handler.verify_authentication(self._auth)

        self._client = httpx.AsyncClient(
            verify=self.profile.verify_ssl,
            timeout=self.profile.timeout,
            auth=self._auth,
            transport=self.transport,
        )
        logger.debug("Connected to %s (%s)", self.identity, self.base_url)

    async def close(self) -> None:
        """Close the client connection."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def _ensure_connected(self) -> httpx.AsyncClient:
        """Ensure client is connected.

        Returns:
            HTTP client

        Raises:
            RuntimeError: If not connected
        """
        if not self._client:
            raise RuntimeError("Client not connected. Use async with or call connect().")
        return self._client

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
        retry_count: int | None = None,
    ) -> Any:
        """Make an API request with retry logic.

        Only reads are retried. A write whose reply was lost may already have
        been applied by the router, so it fails on the first transport error.

        Args:
            method: HTTP method
            endpoint: API endpoint (without /rest prefix)
            params: Query parameters (property filters)
            json: Request body
            retry_count: Attempts for transient failures (3 for GET, 1 otherwise)

        Returns:
            Decoded response body, or None if empty

        Raises:
            APIError: On API errors
            NetworkError: On network errors
            TimeoutError: On timeout
        """
        client = self._ensure_connected()
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        if retry_count is None:
            retry_count = 3 if method == "GET" else 1

        for attempt in range(retry_count):
            try:
                logger.debug("%s %s params=%s body=%s", method, endpoint, params, json)
                response = await client.request(method, url, params=params, json=json)

                if response.status_code == 401:
                    raise AuthenticationError("Authentication failed")
                elif response.status_code == 403:
                    raise PermissionError("Permission denied for this operation")
                elif response.status_code == 404:
                    raise ResourceNotFoundError("resource", endpoint)
                elif response.status_code >= 400:
                    error_msg = self._extract_error_message(response)
                    raise APIError(error_msg, status_code=response.status_code)

                if not response.content:
                    return None
                return response.json()

            except httpx.TimeoutException:
                if attempt < retry_count - 1:
                    await asyncio.sleep(2**attempt)
                    continue
                raise TimeoutError(f"Request to {endpoint} timed out")

            except httpx.NetworkError as e:
                if attempt < retry_count - 1:
                    await asyncio.sleep(2**attempt)
                    continue
                raise NetworkError(f"Network error: {e}")

            except ValueError as e:
                raise APIError(f"Invalid response from {endpoint}: {e}")

    def _extract_error_message(self, response: httpx.Response) -> str:
        """Extract error message from response.

        RouterOS answers errors with ``{"error": 400, "message": ..., "detail": ...}``.

        Args:
            response: HTTP response

        Returns:
            Error message
        """
        try:
            data = response.json()
            if data.get("detail"):
                return f"{data.get('message', 'Error')}: {data['detail']}"
            return data.get("message", response.text)
        except (ValueError, AttributeError):
            return response.text or f"HTTP {response.status_code}"

    async def get(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        """Read records or a singleton menu.

        Args:
            endpoint: API endpoint
            params: Property filters

        Returns:
            Response data
        """
        return await self._request("GET", endpoint, params=params)

    async def put(self, endpoint: str, data: dict[str, Any]) -> Any:
        """Add a record to a menu.

        Args:
            endpoint: API endpoint
            data: Record properties

        Returns:
            The created record
        """
        return await self._request("PUT", endpoint, json=data)

    async def post(self, endpoint: str, data: dict[str, Any] | None = None) -> Any:
        """Run a console command (``set``, ``start``, ``stop``...).

        Args:
            endpoint: API endpoint, ending in the command name
            data: Command arguments

        Returns:
            Response data
        """
        return await self._request("POST", endpoint, json=data or {})

    async def _list(self, endpoint: str, **filters: Any) -> list[dict[str, Any]]:
        """GET a menu and always return a list of records."""
        params = {k: v for k, v in filters.items() if v is not None} or None
        result = await self.get(endpoint, params=params)
        if result is None:
            return []
        if isinstance(result, dict):
            return [result]
        return list(result)

    # System methods

    async def get_system_resource(self) -> dict[str, Any]:
        """Get system resource info.

        Returns:
            Resource record (``version``, ``board-name``, ``uptime``, ...)
        """
        return await self.get("/system/resource")

    async def get_version(self) -> str:
        """Get the raw RouterOS version string.

        Returns:
            Version string, e.g. ``"7.21.3 (stable)"``
        """
        resource = await self.get_system_resource()
        return str(resource.get("version", ""))

    async def get_device_mode(self) -> dict[str, Any]:
        """Get device-mode settings.

        Returns:
            Device-mode record (``mode``, ``container``, ...)
        """
        return await self.get("/system/device-mode")

    async def enable_container_mode(self) -> None:
        """Request container device mode.

        Takes effect only after the router is restarted.
        """
        await self.post("/system/device-mode/update", {"container": "yes"})

    async def log(self, message: str, severity: str = "info") -> None:
        """Write an entry to the router log.

        Args:
            message: Log message
            severity: One of debug, info, warning, error
        """
        if severity not in LOG_SEVERITIES:
            raise ValueError(f"Unsupported log severity: {severity}")
        escaped = message.replace("\\", "\\\\").replace('"', '\\"').replace("$", "\\$")
        await self.post("/execute", {"script": f':log {severity} "{escaped}"'})

    # Container subsystem methods

    async def get_container_config(self) -> dict[str, Any]:
        """Get container subsystem settings.

        Returns:
            Config record (``registry-url``, ``tmpdir``, ...)
        """
        return await self.get("/container/config")

    async def set_container_config(self, **config_params: Any) -> None:
        """Update container subsystem settings.

        Args:
            **config_params: Settings keyed by RouterOS property name
        """
        data = {k: v for k, v in config_params.items() if v is not None}
        if data:
            await self.post("/container/config/set", data)

    async def get_mounts(self, list_name: str | None = None) -> list[dict[str, Any]]:
        """Get container mount entries.

        Args:
            list_name: Optional mount list to filter by

        Returns:
            List of mounts
        """
        return await self._list("/container/mounts", list=list_name)

    async def add_mount(self, list_name: str, src: str, dst: str) -> dict[str, Any]:
        """Add a mount entry.

        Args:
            list_name: Mount list name
            src: Path on the router
            dst: Path inside the container

        Returns:
            The created record
        """
        return await self.put("/container/mounts", {"list": list_name, "src": src, "dst": dst})

    async def get_envs(
        self, list_name: str | None = None, key: str | None = None
    ) -> list[dict[str, Any]]:
        """Get container environment entries.

        Args:
            list_name: Optional env list to filter by
            key: Optional variable name to filter by

        Returns:
            List of env entries
        """
        return await self._list("/container/envs", list=list_name, key=key)

    async def add_env(self, list_name: str, key: str, value: str) -> dict[str, Any]:
        """Add an environment variable to an env list.

        Args:
            list_name: Env list name
            key: Variable name
            value: Variable value

        Returns:
            The created record
        """
        return await self.put("/container/envs", {"list": list_name, "key": key, "value": value})

    async def get_veths(self, name: str | None = None) -> list[dict[str, Any]]:
        """Get veth interfaces.

        Args:
            name: Optional interface name to filter by

        Returns:
            List of veth interfaces
        """
        return await self._list("/interface/veth", name=name)

    async def add_veth(
        self, name: str, address: str | None = None, gateway: str | None = None
    ) -> dict[str, Any]:
        """Create a veth interface.

        Args:
            name: Interface name
            address: Container-side address in CIDR notation
            gateway: Gateway seen from the container

        Returns:
            The created record
        """
        data: dict[str, Any] = {"name": name}
        if address:
            data["address"] = address
        if gateway:
            data["gateway"] = gateway
        return await self.put("/interface/veth", data)

    async def get_containers(self, name: str | None = None) -> list[dict[str, Any]]:
        """Get containers.

        Args:
            name: Optional container name to filter by

        Returns:
            List of container records
        """
        return await self._list("/container", name=name)

    async def create_container(self, **config_params: Any) -> dict[str, Any]:
        """Create a container.

        Returns as soon as the router accepts the request; the image is
        pulled and extracted in the background.

        Args:
            **config_params: Container properties (``remote-image``, ``interface``, ...)

        Returns:
            The created record
        """
        data = {k: v for k, v in config_params.items() if v is not None}
        return await self.put("/container", data)

    async def start_container(self, container_id: str) -> None:
        """Start a container.

        Args:
            container_id: RouterOS record id (``*1``)
        """
        await self.post("/container/start", {".id": container_id})

    async def stop_container(self, container_id: str) -> None:
        """Stop a container.

        Args:
            container_id: RouterOS record id
        """
        await self.post("/container/stop", {".id": container_id})

    async def remove_container(self, container_id: str) -> None:
        """Remove a container.

        Args:
            container_id: RouterOS record id
        """
        await self.post("/container/remove", {".id": container_id})
