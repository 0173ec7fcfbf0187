"""Authentication handling for the RouterOS REST API."""

import httpx

from .exceptions import AuthenticationError


class AuthHandler:
    """Handle authentication for the RouterOS REST API."""

    def __init__(
        self,
        base_url: str,
        user: str,
        verify_ssl: bool = True,
        timeout: int = 30,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize auth handler.

        Args:
            base_url: REST API root (``https://host:port/rest``)
            user: RouterOS user name
            verify_ssl: Whether to verify SSL certificates
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests)
        """
        self.base_url = base_url
        self.user = user
        self.verify_ssl = verify_ssl
        self.timeout = timeout
        self.transport = transport

    def get_basic_auth(self, password: str) -> httpx.BasicAuth:
        """Get HTTP basic credentials.

        RouterOS has no token scheme for REST; every request carries the
        user name and password.

        Args:
            password: User password

        Returns:
            httpx auth object
        """
        return httpx.BasicAuth(self.user, password)

    async def verify_authentication(self, auth: httpx.Auth) -> str:
        """Verify credentials by reading the router identity.

        Args:
            auth: Credentials to check

        Returns:
            Router identity name

        Raises:
            AuthenticationError: If authentication verification fails
        """
        async with httpx.AsyncClient(
            verify=self.verify_ssl, timeout=self.timeout, transport=self.transport
        ) as client:
            try:
                response = await client.get(f"{self.base_url}/system/identity", auth=auth)

                if response.status_code == 401:
                    raise AuthenticationError("Invalid username or password")

                response.raise_for_status()
                return response.json().get("name", "")

            except httpx.HTTPStatusError as e:
                raise AuthenticationError(f"Verification failed: {e}")
            except httpx.RequestError as e:
                raise AuthenticationError(f"Connection failed: {e}")
            except (ValueError, AttributeError):
                raise AuthenticationError("Invalid response from router")
