"""
Configuration module for the Office server.

Settings come from environment variables. The runtime config served to the
browser is resolved once at startup from command line overrides, the
environment and the local OpenClaw CLI config, in that order.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Sequence, Union

from pydantic import Field
from pydantic_settings import BaseSettings

from office_server.credentials import CandidateFile, default_candidates
from office_server.fallback import first_present

logger = logging.getLogger(__name__)


DEFAULT_GATEWAY_URL = "ws://localhost:18789"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 5180


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Gateway connection
    gateway_token: str = Field(default="", alias="OPENCLAW_GATEWAY_TOKEN")
    gateway_url: str = Field(default="", alias="OPENCLAW_GATEWAY_URL")

    # Bind address (port stays a string until parse_port validates it)
    port: str = Field(default="", alias="PORT")
    host: str = Field(default="", alias="HOST")

    # Assets
    dist_dir: Optional[str] = Field(default=None, alias="OPENCLAW_OFFICE_DIST")

    # Logging
    log_level: str = Field(default="info", alias="OPENCLAW_OFFICE_LOG_LEVEL")

    class Config:
        env_file = ".env"
        case_sensitive = False
        env_ignore_empty = True
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


@dataclass(frozen=True)
class ConfigOverrides:
    """Explicit values from the command line. Empty means not given."""
    token: str = ""
    gateway_url: str = ""
    port: Optional[int] = None
    host: str = ""


@dataclass(frozen=True)
class ResolvedConfig:
    """Runtime config, fixed before the server starts accepting connections."""
    gateway_url: str
    token: str
    token_source: str
    host: str
    port: int


def parse_port(value: Union[str, int, None]) -> Optional[int]:
    """
    Parse a bind port.

    Returns None for an empty value and raises ValueError for anything that
    is not an integer in 1..65535.
    """
    if value is None or value == "":
        return None

    if isinstance(value, bool):
        raise ValueError(f"Invalid port: {value!r}")

    text = str(value).strip()
    # Plain ASCII digits only: no sign, underscores or other scripts
    if not (text.isascii() and text.isdigit()):
        raise ValueError(f"Invalid port: {value!r}")

    port = int(text)
    if not 0 < port < 65536:
        raise ValueError(f"Port out of range: {port}")
    return port


def _env_port(settings: Settings) -> Optional[int]:
    """PORT from the environment. Garbage falls back to the default."""
    try:
        return parse_port(settings.port)
    except ValueError:
        logger.warning(f"Ignoring invalid PORT value {settings.port!r}, using {DEFAULT_PORT}")
        return None


def resolve_config(
    overrides: Optional[ConfigOverrides] = None,
    settings: Optional[Settings] = None,
    candidates: Optional[Sequence[CandidateFile]] = None,
) -> ResolvedConfig:
    """
    Resolve the runtime config.

    Each field has its own chain (explicit value, then environment, then a
    fallback), so for example a token from the command line can be combined
    with a gateway URL from the environment. Only the token has a file-based
    tier; the other fields end in hardcoded defaults.
    """
    overrides = overrides or ConfigOverrides()
    if settings is None:
        settings = get_settings()

    if candidates is None:
        candidates = default_candidates()

    token_chain = [
        ("command line --token", lambda: overrides.token),
        ("OPENCLAW_GATEWAY_TOKEN env", lambda: settings.gateway_token),
    ]
    # Each credential file is its own tier, labelled with its path
    token_chain += [(str(c.path), c.probe) for c in candidates]

    token, token_source = first_present(token_chain) or ("", "")

    gateway_url, _ = first_present([
        ("command line --gateway", lambda: overrides.gateway_url),
        ("OPENCLAW_GATEWAY_URL env", lambda: settings.gateway_url),
        ("default", lambda: DEFAULT_GATEWAY_URL),
    ])

    host, _ = first_present([
        ("command line --host", lambda: overrides.host),
        ("HOST env", lambda: settings.host),
        ("default", lambda: DEFAULT_HOST),
    ])

    port, _ = first_present([
        ("command line --port", lambda: overrides.port),
        ("PORT env", lambda: _env_port(settings)),
        ("default", lambda: DEFAULT_PORT),
    ])

    return ResolvedConfig(
        gateway_url=gateway_url,
        token=token,
        token_source=token_source,
        host=host,
        port=port,
    )
