"""Root conftest — keeps every test away from the real user config directory."""

from pathlib import Path

import pytest

from daytona_server import paths


@pytest.fixture(autouse=True)
def user_config_base(tmp_path: Path, monkeypatch) -> Path:
    """Point the host config dir lookup at a temp directory."""
    base = tmp_path / "user-config" / "daytona"
    monkeypatch.setattr(paths, "user_config_dir", lambda *a, **kw: str(base))
    for name in (
        "DEFAULT_REGISTRY_URL",
        "DEFAULT_SERVER_DOWNLOAD_URL",
        "DEFAULT_FRPS_DOMAIN",
        "DEFAULT_FRPS_PORT",
        "DEFAULT_FRPS_PROTOCOL",
    ):
        monkeypatch.delenv(name, raising=False)
    return base
