"""Settings loaded from ``TASKBOARD_*`` environment variables.

Command line options override these; see ``taskboard.cli.build_parser``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from taskboard.model.task import Actor, Role

ENV_PREFIX = "TASKBOARD"
DEFAULT_API_URL = "http://localhost:5000/api"


def _env(suffix: str, default: str | None = None) -> str | None:
    value = os.getenv(f"{ENV_PREFIX}_{suffix}")
    if value is None or not value.strip():
        return default
    return value.strip()


def _env_float(suffix: str, default: float) -> float:
    raw = _env(suffix)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass
class Settings:
    api_url: str = DEFAULT_API_URL
    token: str | None = None
    user_id: str | None = None
    user_name: str | None = None
    role: str = Role.SUBMITTER.value
    timeout: float = 10.0
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            api_url=_env("API_URL", DEFAULT_API_URL),
            token=_env("TOKEN"),
            user_id=_env("USER_ID"),
            user_name=_env("USER_NAME"),
            role=_env("ROLE", Role.SUBMITTER.value),
            timeout=_env_float("TIMEOUT", 10.0),
            log_level=_env("LOG_LEVEL", "WARNING"),
        )

    def override(self, args) -> Settings:
        """Apply any command line options that were given."""
        for name in ("api_url", "token", "user_id", "user_name", "role"):
            value = getattr(args, name, None)
            if value:
                setattr(self, name, value)
        return self

    def actor(self) -> Actor:
        """The session actor. Raises ValueError if identity settings are missing."""
        if not self.user_id:
            raise ValueError(f"no user id configured (set {ENV_PREFIX}_USER_ID or --user-id)")
        try:
            role = Role(self.role)
        except ValueError:
            raise ValueError(f"unknown role {self.role!r} (expected submitter or approver)") from None
        return Actor(id=self.user_id, name=self.user_name or self.user_id, role=role)

    @property
    def level(self) -> int:
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.WARNING
