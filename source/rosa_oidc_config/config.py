# ABOUTME: Configuration management for rosa-oidc-config
# ABOUTME: Handles profiles, settings persistence and OCM token lookup

"""Configuration management for rosa-oidc-config."""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import keyring
from keyring.errors import KeyringError

from rosa_oidc_config.ocm import DEFAULT_CLIENT_ID, DEFAULT_OCM_URL, DEFAULT_TOKEN_URL

logger = logging.getLogger(__name__)

KEYRING_SERVICE = "rosa-oidc-config"
OCM_TOKEN_ENV_VAR = "OCM_TOKEN"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class Profile:
    """Configuration profile for an AWS account and OCM environment."""

    name: str
    aws_region: str | None = None  # Falls back to the AWS SDK default region
    aws_profile: str | None = None  # Named profile in ~/.aws/config
    ocm_url: str = DEFAULT_OCM_URL
    token_url: str = DEFAULT_TOKEN_URL
    client_id: str = DEFAULT_CLIENT_ID
    credential_storage: str = "keyring"  # "keyring" (OS keyring) or "env" (OCM_TOKEN only)
    created_at: str = field(default_factory=_now)
    updated_at: str = field(default_factory=_now)

    def to_dict(self) -> dict[str, Any]:
        """Convert profile to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Profile":
        """Create profile from dictionary, ignoring unknown keys."""
        known = {name for name in cls.__dataclass_fields__}
        return cls(**{key: value for key, value in data.items() if key in known})

    def get_ocm_token(self) -> str | None:
        """Get the OCM offline token from the environment or the OS keyring."""
        token = os.environ.get(OCM_TOKEN_ENV_VAR)
        if token:
            return token
        if self.credential_storage != "keyring":
            return None
        try:
            return keyring.get_password(KEYRING_SERVICE, f"{self.name}-ocm-token")
        except KeyringError as e:
            logger.warning("Could not read OCM token from keyring: %s", e)
            return None

    def set_ocm_token(self, token: str) -> None:
        """Store the OCM offline token in the OS keyring."""
        keyring.set_password(KEYRING_SERVICE, f"{self.name}-ocm-token", token)


class Config:
    """Configuration manager for rosa-oidc-config."""

    CONFIG_DIR = Path.home() / ".rosa-oidc-config"
    CONFIG_FILE = CONFIG_DIR / "config.json"

    def __init__(self):
        """Initialize configuration."""
        self.profiles: dict[str, Profile] = {}
        self.default_profile: str | None = None

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from file."""
        config = cls()

        if cls.CONFIG_FILE.exists():
            try:
                with open(cls.CONFIG_FILE) as f:
                    data = json.load(f)

                for profile_name, profile_data in data.get("profiles", {}).items():
                    config.profiles[profile_name] = Profile.from_dict(profile_data)

                config.default_profile = data.get("default_profile")

            except (OSError, ValueError, TypeError) as e:
                # If config is corrupted, start fresh
                logger.warning("Could not load config %s: %s", cls.CONFIG_FILE, e)

        return config

    def save(self) -> None:
        """Save configuration to file."""
        self.CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        data = {
            "version": "1.0",
            "default_profile": self.default_profile,
            "profiles": {name: profile.to_dict() for name, profile in self.profiles.items()},
        }

        with open(self.CONFIG_FILE, "w") as f:
            json.dump(data, f, indent=2)

    def add_profile(self, profile: Profile) -> None:
        """Add or update a profile."""
        profile.updated_at = _now()
        self.profiles[profile.name] = profile

        # Set as default if it's the first profile
        if len(self.profiles) == 1:
            self.default_profile = profile.name

    def get_profile(self, name: str | None = None) -> Profile | None:
        """Get a profile by name or the default profile."""
        if name:
            return self.profiles.get(name)
        elif self.default_profile:
            return self.profiles.get(self.default_profile)
        return None
