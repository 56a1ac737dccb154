"""Default server configuration, with environment overrides."""

import os
import uuid
from pathlib import Path

from daytona_server.errors import ConfigError
from daytona_server.models import FRPSConfig, ServerConfig

DEFAULT_API_PORT = 3000
DEFAULT_HEADSCALE_PORT = 3001
DEFAULT_REGISTRY_URL = "https://download.daytona.io/daytona"
DEFAULT_SERVER_DOWNLOAD_URL = "https://download.daytona.io/daytona/install.sh"

DEFAULT_FRPS_DOMAIN = "try-eu.daytona.io"
DEFAULT_FRPS_PORT = 7000
DEFAULT_FRPS_PROTOCOL = "https"


def _env(name: str, default: str) -> str:
    return os.getenv(name) or default


def get_default_frps_config() -> FRPSConfig:
    port = _env("DEFAULT_FRPS_PORT", str(DEFAULT_FRPS_PORT))
    try:
        port_num = int(port)
    except ValueError:
        raise ConfigError(f"DEFAULT_FRPS_PORT must be an integer, got {port!r}")
    return FRPSConfig(
        domain=_env("DEFAULT_FRPS_DOMAIN", DEFAULT_FRPS_DOMAIN),
        port=port_num,
        protocol=_env("DEFAULT_FRPS_PROTOCOL", DEFAULT_FRPS_PROTOCOL),
    )


def get_default_config(config_dir: Path) -> ServerConfig:
    """Build a fresh config whose directories live under *config_dir*."""
    return ServerConfig(
        id=str(uuid.uuid4()),
        api_port=DEFAULT_API_PORT,
        headscale_port=DEFAULT_HEADSCALE_PORT,
        providers_dir=str(config_dir / "providers"),
        binaries_path=str(config_dir / "binaries"),
        registry_url=_env("DEFAULT_REGISTRY_URL", DEFAULT_REGISTRY_URL),
        server_download_url=_env("DEFAULT_SERVER_DOWNLOAD_URL", DEFAULT_SERVER_DOWNLOAD_URL),
        frps=get_default_frps_config(),
    )
