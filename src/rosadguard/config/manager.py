"""Router profile store for rosadguard.

Profiles live in ``config.yaml`` under the config directory. Router passwords
are age-encrypted on disk; a plaintext password found on load (for example
one typed into the file by hand) is decrypted as-is and sealed on the next
write, which happens immediately.
"""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from ..api.exceptions import ConfigError
from ..crypto import decrypt, encrypt, is_encrypted
from ..models.config import OutputConfig, ProfileConfig

CONFIG_DIR_ENV = "ROSADGUARD_CONFIG_DIR"


def default_config_dir() -> Path:
    """``$ROSADGUARD_CONFIG_DIR`` when set, else ``~/.config/rosadguard``."""
    env_dir = os.environ.get(CONFIG_DIR_ENV)
    return Path(env_dir) if env_dir else Path.home() / ".config" / "rosadguard"


class Config(BaseModel):
    """Contents of ``config.yaml``."""

    default_profile: str | None = None
    profiles: dict[str, ProfileConfig] = Field(default_factory=dict)
    output: OutputConfig = Field(default_factory=OutputConfig)


class ConfigManager:
    """Load, edit and persist router profiles."""

    def __init__(self, config_dir: Path | None = None) -> None:
        self.config_dir = config_dir or default_config_dir()
        self.config_file = self.config_dir / "config.yaml"
        self.identity_file = self.config_dir / ".age-identity"
        self._config: Config | None = None

    def exists(self) -> bool:
        return self.config_file.exists()

    def load(self) -> Config:
        """Read and validate ``config.yaml``, decrypting router passwords.

        Raises:
            ConfigError: If the file is missing, unreadable or invalid
        """
        if not self.exists():
            raise ConfigError(
                f"Configuration file not found at {self.config_file}. "
                "Run 'rosadguard config add' to create one."
            )

        try:
            data = yaml.safe_load(self.config_file.read_text()) or {}
            config = Config(**data)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in config file: {e}")
        except ValidationError as e:
            raise ConfigError(f"Invalid config file: {e}")
        except OSError as e:
            raise ConfigError(f"Failed to load config: {e}")

        found_plaintext = self._reveal_passwords(config)
        self._config = config
        if found_plaintext:
            self.save(config)
        return config

    def save(self, config: Config) -> None:
        """Write ``config`` with passwords sealed and owner-only permissions.

        Raises:
            ConfigError: If the file cannot be written
        """
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            os.chmod(self.config_dir, 0o700)
            data = config.model_dump(mode="json", exclude_none=True)
            self._seal_passwords(data)
            self.config_file.write_text(yaml.safe_dump(data, default_flow_style=False, sort_keys=False))
            os.chmod(self.config_file, 0o600)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to save config: {e}")
        self._config = config

    def get(self) -> Config:
        if self._config is None:
            self._config = self.load()
        return self._config

    def get_profile(self, name: str | None = None) -> ProfileConfig:
        """Return the named router profile, or the default one.

        Raises:
            ConfigError: If no default is set or the profile is unknown
        """
        config = self.get()
        if name is None:
            if config.default_profile is None:
                raise ConfigError("No default profile set. Use --profile to specify one.")
            name = config.default_profile

        if name not in config.profiles:
            raise ConfigError(
                f"Profile '{name}' not found. Available profiles: "
                f"{', '.join(config.profiles)}"
            )
        return config.profiles[name]

    def add_profile(self, name: str, profile: ProfileConfig) -> None:
        """Store a profile; the first router added becomes the default."""
        config = self.get() if self.exists() else Config()
        config.profiles[name] = profile
        if config.default_profile is None:
            config.default_profile = name
        self.save(config)

    def remove_profile(self, name: str) -> None:
        """Delete a profile, handing the default over to the next one left."""
        config = self._config_with(name)
        del config.profiles[name]
        if config.default_profile == name:
            config.default_profile = next(iter(config.profiles), None)
        self.save(config)

    def set_default_profile(self, name: str) -> None:
        config = self._config_with(name)
        config.default_profile = name
        self.save(config)

    def list_profiles(self) -> list[str]:
        return list(self.get().profiles)

    def _config_with(self, name: str) -> Config:
        config = self.get()
        if name not in config.profiles:
            raise ConfigError(f"Profile '{name}' not found")
        return config

    def _reveal_passwords(self, config: Config) -> bool:
        """Decrypt router passwords in place. Returns True if any was plaintext."""
        found_plaintext = False
        for profile in config.profiles.values():
            auth = profile.auth
            if not auth.password:
                continue
            if is_encrypted(auth.password):
                auth.password = decrypt(auth.password, self.identity_file)
            else:
                found_plaintext = True
        return found_plaintext

    def _seal_passwords(self, data: dict) -> None:
        for profile in data.get("profiles", {}).values():
            auth = profile.get("auth", {})
            if auth.get("password"):
                auth["password"] = encrypt(auth["password"], self.identity_file)
