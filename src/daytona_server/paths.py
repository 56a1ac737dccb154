"""Per-user config directory resolution and directory creation."""

import logging
import os
from pathlib import Path

from platformdirs import user_config_dir

from daytona_server.errors import ConfigDirUnavailableError, ConfigIOError

logger = logging.getLogger(__name__)

APP_NAME = "daytona"
SERVER_SUBDIR = "server"

CONFIG_DIR_MODE = 0o700
CONFIG_FILE_MODE = 0o600
LOG_DIR_MODE = 0o755


def get_config_dir() -> Path:
    """Return ``<user-config-dir>/daytona/server`` without touching the disk."""
    try:
        base = user_config_dir(APP_NAME, appauthor=False, roaming=True)
    except (KeyError, RuntimeError, OSError) as e:
        raise ConfigDirUnavailableError(
            f"cannot resolve user config directory: {e}"
        ) from e
    # expanduser leaves "~" in place when no home directory can be found
    if not base or not os.path.isabs(base):
        raise ConfigDirUnavailableError(
            f"cannot resolve user config directory (got {base!r}); "
            "set HOME or XDG_CONFIG_HOME"
        )
    return Path(base) / SERVER_SUBDIR


def ensure_dir(path: Path, mode: int) -> Path:
    """Create *path* and every missing parent with *mode*."""
    missing = []
    current = path
    try:
        while not current.exists():
            missing.append(current)
            if current.parent == current:
                break
            current = current.parent
        for d in reversed(missing):
            d.mkdir(mode=mode, exist_ok=True)
            logger.debug("Created directory %s (mode %o)", d, mode)
    except OSError as e:
        raise ConfigIOError(f"failed to create directory {path}: {e}") from e
    if not path.is_dir():
        raise ConfigIOError(f"{path} exists and is not a directory")
    return path


def ensure_parent_dir(path: Path, mode: int) -> Path:
    """Create the parent directories of *path*, then return *path* unchanged."""
    ensure_dir(path.parent, mode)
    return path
