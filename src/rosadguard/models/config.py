"""Configuration models."""

from pydantic import BaseModel, Field, field_validator


class AuthConfig(BaseModel):
    """Authentication configuration (RouterOS REST uses HTTP basic auth)."""

    user: str
    password: str = ""

    @field_validator("user")
    @classmethod
    def validate_user(cls, v: str) -> str:
        """Reject blank user names.

        Args:
            v: Field value

        Returns:
            Stripped user name

        Raises:
            ValueError: If user is empty
        """
        v = v.strip()
        if not v:
            raise ValueError("user must not be empty")
        return v


class PollConfig(BaseModel):
    """Interval and ceiling of a status polling loop, in seconds."""

    interval: float = Field(default=1.0, gt=0)
    timeout: float = Field(default=60.0, ge=0)


class VethConfig(BaseModel):
    """Virtual ethernet interface attached to the container."""

    name: str = "veth-adguard"
    address: str | None = "172.17.0.2/24"
    gateway: str | None = "172.17.0.1"


class DeploymentConfig(BaseModel):
    """Desired state of the managed container and its supporting records."""

    container_name: str = "adguardhome"
    image: str = "adguard/adguardhome:latest"
    registry_url: str = "https://registry-1.docker.io"
    tmpdir: str = "containers/tmp"
    root_dir: str = "containers/adguardhome/root"
    workdir: str = "/opt/adguardhome/work"
    cmd: str = "-c /opt/adguardhome/conf/AdGuardHome.yaml -w /opt/adguardhome/work"
    entrypoint: str = "/opt/adguardhome/AdGuardHome"
    start_on_boot: bool = True
    logging: bool = True

    mount_list: str = "adguard_conf"
    mount_src: str = "containers/adguardhome/conf"
    mount_dst: str = "/opt/adguardhome/conf"

    env_list: str = "adguard_env"
    env_key: str = "TZ"
    env_value: str = "UTC"

    interface: VethConfig = Field(default_factory=VethConfig)

    min_version: str = Field(default="7.21", pattern=r"^\d+\.\d+$")
    stop_poll: PollConfig = Field(default_factory=lambda: PollConfig(interval=1, timeout=60))
    extract_poll: PollConfig = Field(default_factory=lambda: PollConfig(interval=5, timeout=300))
    settle_delay: float = Field(default=5.0, ge=0)
    host_log: bool = True


class ProfileConfig(BaseModel):
    """Profile configuration for a RouterOS device."""

    host: str
    port: int | None = None
    use_https: bool = True
    verify_ssl: bool = True
    auth: AuthConfig
    timeout: int = 30
    deployment: DeploymentConfig = Field(default_factory=DeploymentConfig)

    @property
    def base_url(self) -> str:
        """REST API root for this profile."""
        scheme = "https" if self.use_https else "http"
        port = self.port or (443 if self.use_https else 80)
        return f"{scheme}://{self.host}:{port}/rest"


class OutputConfig(BaseModel):
    """Output preferences."""

    confirm_destructive: bool = True
