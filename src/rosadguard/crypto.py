"""Age encryption for router passwords stored in the config file."""

import base64
from pathlib import Path

import pyrage

AGE_PREFIX = "AGE:"
DEFAULT_IDENTITY_FILE = Path.home() / ".config" / "rosadguard" / ".age-identity"


def _load_identity(identity_file: Path) -> pyrage.x25519.Identity:
    """Load the age identity, generating it on first use."""
    if identity_file.exists():
        return pyrage.x25519.Identity.from_str(identity_file.read_text().strip())

    identity_file.parent.mkdir(parents=True, exist_ok=True)
    identity = pyrage.x25519.Identity.generate()
    identity_file.write_text(str(identity))
    identity_file.chmod(0o600)
    return identity


def encrypt(value: str, identity_file: Path = DEFAULT_IDENTITY_FILE) -> str:
    """Encrypt a plaintext value. Returns AGE:base64... string."""
    if value.startswith(AGE_PREFIX):
        return value
    recipient = _load_identity(identity_file).to_public()
    encrypted = pyrage.encrypt(value.encode(), [recipient])
    return AGE_PREFIX + base64.b64encode(encrypted).decode()


def decrypt(value: str, identity_file: Path = DEFAULT_IDENTITY_FILE) -> str:
    """Decrypt an AGE:-prefixed value. Returns plaintext."""
    if not value.startswith(AGE_PREFIX):
        return value
    identity = _load_identity(identity_file)
    raw = base64.b64decode(value[len(AGE_PREFIX):])
    return pyrage.decrypt(raw, [identity]).decode()


def is_encrypted(value: str) -> bool:
    """Check if a value is age-encrypted."""
    return value.startswith(AGE_PREFIX)
