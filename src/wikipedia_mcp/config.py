"""Configuration loading and validation."""

from __future__ import annotations

import logging
import os
import re
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "Wikipedia-MCP/1.0 (https://github.com/user/wikipedia-mcp; contact@example.com)"
DEFAULT_LANGUAGE = "en"
DEFAULT_REQUEST_DELAY_MS = 1000.0
DEFAULT_TIMEOUT_MS = 30000.0

USER_AGENT_ENV_VAR = "WIKIPEDIA_USER_AGENT"
LANGUAGE_ENV_VAR = "WIKIPEDIA_LANGUAGE"
REQUEST_DELAY_ENV_VAR = "WIKIPEDIA_REQUEST_DELAY"
TIMEOUT_ENV_VAR = "WIKIPEDIA_TIMEOUT"

SERVER_NAME = "wikipedia-server"
SERVER_VERSION = "1.0.0"

_LANGUAGE_RE = re.compile(r"^[a-z][a-z0-9-]*$")


def _number_from_env(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}, using {default:g}")
        return default


class WikipediaConfig(BaseModel):
    """Settings shared by every request: identity header, edition, pacing, timeout."""

    model_config = ConfigDict(frozen=True)

    user_agent: str = DEFAULT_USER_AGENT
    language: str = DEFAULT_LANGUAGE
    request_delay_ms: float = Field(default=DEFAULT_REQUEST_DELAY_MS, ge=0, allow_inf_nan=False)
    timeout_ms: float = Field(default=DEFAULT_TIMEOUT_MS, gt=0, allow_inf_nan=False)

    @field_validator("user_agent")
    @classmethod
    def check_user_agent(cls, v: str) -> str:
        # Header values go out as ASCII
        if not v.isascii() or not v.isprintable():
            raise ValueError("user agent must be printable ASCII")
        return v

    @field_validator("language")
    @classmethod
    def normalize_language(cls, v: str) -> str:
        v = v.strip().lower()
        if not v:
            raise ValueError("language code must not be empty")
        if not _LANGUAGE_RE.match(v):
            raise ValueError(f"invalid language code: {v!r}")
        return v

    @property
    def api_url(self) -> str:
        return f"https://{self.language}.wikipedia.org/w/api.php"

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> WikipediaConfig:
        """Build the configuration from WIKIPEDIA_* environment variables.

        Unset variables take their defaults. Numeric values that do not parse
        are logged and replaced by the default.
        """
        if env is None:
            env = os.environ
        return cls(
            user_agent=env.get(USER_AGENT_ENV_VAR) or DEFAULT_USER_AGENT,
            language=env.get(LANGUAGE_ENV_VAR) or DEFAULT_LANGUAGE,
            request_delay_ms=_number_from_env(env, REQUEST_DELAY_ENV_VAR, DEFAULT_REQUEST_DELAY_MS),
            timeout_ms=_number_from_env(env, TIMEOUT_ENV_VAR, DEFAULT_TIMEOUT_MS),
        )
