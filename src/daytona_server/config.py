"""Configuration loading and saving, plus workspace log paths."""

import json
import logging
import os
import shutil
import stat
from pathlib import Path

from daytona_server import paths
from daytona_server.defaults import get_default_config
from daytona_server.errors import (
    ConfigDecodeError,
    ConfigDirUnavailableError,
    ConfigError,
    ConfigIOError,
    ConfigNotFoundError,
)
from daytona_server.models import ServerConfig

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"
LOGS_DIR_NAME = "logs"
LOG_FILE_NAME = "log"


def _check_id(kind: str, value: str) -> str:
    if not value or value in (".", "..") or "/" in value or os.sep in value:
        raise ValueError(f"invalid {kind} id: {value!r}")
    if os.altsep and os.altsep in value:
        raise ValueError(f"invalid {kind} id: {value!r}")
    return value


class ConfigStore:
    """Reads and writes ``config.json`` and lays out the workspace log tree.

    With no *config_dir* the per-user directory is resolved on first use, so
    a host without a config directory fails at the call that needs it.
    """

    def __init__(self, config_dir: Path | None = None):
        self._config_dir = Path(config_dir) if config_dir is not None else None

    def get_config_dir(self) -> Path:
        if self._config_dir is None:
            self._config_dir = paths.get_config_dir()
        return self._config_dir

    @property
    def config_file(self) -> Path:
        return self.get_config_dir() / CONFIG_FILE_NAME

    # ── config.json ──────────────────────────────────────────────────────

    def get_config(self) -> ServerConfig:
        """Load the config file. Raises ConfigNotFoundError if there is none yet."""
        config_file = self.config_file
        try:
            content = config_file.read_bytes()
        except FileNotFoundError:
            raise ConfigNotFoundError(f"config file does not exist: {config_file}")
        except OSError as e:
            raise ConfigIOError(f"failed to read {config_file}: {e}") from e

        try:
            return ServerConfig.from_dict(json.loads(content))
        except (ValueError, RecursionError) as e:
            raise ConfigDecodeError(f"invalid config file {config_file}: {e}") from e

    def save(self, config: ServerConfig) -> None:
        config_file = self.config_file
        content = json.dumps(config.to_dict(), indent=2) + "\n"
        paths.ensure_dir(config_file.parent, paths.CONFIG_DIR_MODE)
        try:
            fd = os.open(
                config_file,
                os.O_WRONLY | os.O_CREAT | os.O_TRUNC,
                paths.CONFIG_FILE_MODE,
            )
            with os.fdopen(fd, "w") as f:
                f.write(content)
        except OSError as e:
            raise ConfigIOError(f"failed to write {config_file}: {e}") from e
        logger.debug("Saved config to %s", config_file)

    # ── Workspace logs ───────────────────────────────────────────────────

    def get_workspace_logs_dir(self) -> Path:
        return self.get_config_dir() / LOGS_DIR_NAME

    def workspace_log_file_path(self, workspace_id: str) -> Path:
        """Path of a workspace's log file. Does not touch the disk."""
        _check_id("workspace", workspace_id)
        return self.get_workspace_logs_dir() / workspace_id / LOG_FILE_NAME

    def project_log_file_path(self, workspace_id: str, project_id: str) -> Path:
        """Path of a project's log file. Does not touch the disk."""
        _check_id("workspace", workspace_id)
        _check_id("project", project_id)
        return self.get_workspace_logs_dir() / workspace_id / project_id / LOG_FILE_NAME

    def get_workspace_log_file_path(self, workspace_id: str) -> Path:
        """Like workspace_log_file_path, but also creates the parent directories."""
        return paths.ensure_parent_dir(
            self.workspace_log_file_path(workspace_id), paths.LOG_DIR_MODE
        )

    def get_project_log_file_path(self, workspace_id: str, project_id: str) -> Path:
        """Like project_log_file_path, but also creates the parent directories."""
        return paths.ensure_parent_dir(
            self.project_log_file_path(workspace_id, project_id), paths.LOG_DIR_MODE
        )

    def delete_workspace_logs(self, workspace_id: str) -> None:
        """Remove a workspace's whole log tree. Missing logs are not an error."""
        _check_id("workspace", workspace_id)
        target = self.get_workspace_logs_dir() / workspace_id
        try:
            st = os.lstat(target)
        except FileNotFoundError:
            return
        except OSError as e:
            raise ConfigIOError(f"failed to stat {target}: {e}") from e

        try:
            if stat.S_ISDIR(st.st_mode):
                shutil.rmtree(target)
            else:
                target.unlink()
        except FileNotFoundError:
            return
        except OSError as e:
            raise ConfigIOError(f"failed to remove {target}: {e}") from e
        logger.debug("Deleted workspace logs %s", target)


def initialize(config_dir: Path | None = None) -> ServerConfig:
    """Load the config, writing the defaults first if it cannot be loaded.

    Call once from the process entry point. Raises ConfigError if the
    defaults cannot be built or saved.
    """
    store = ConfigStore(config_dir)
    try:
        return store.get_config()
    except ConfigDirUnavailableError:
        raise
    except ConfigNotFoundError:
        logger.info("No config file at %s, creating defaults", store.config_file)
    except ConfigError as e:
        logger.warning("Replacing unreadable config: %s", e)

    config = get_default_config(store.get_config_dir())
    store.save(config)
    return config
