"""Server configuration records and their JSON form."""

from dataclasses import dataclass, field, fields
from typing import Any


def _typed(data: dict[str, Any], key: str, kind: type, default: Any) -> Any:
    """Return ``data[key]`` if it has JSON type *kind*, *default* if absent or null."""
    value = data.get(key)
    if value is None:
        return default
    # bool is an int subclass, but true/false is never a valid port
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ValueError(
            f"'{key}' must be of type {kind.__name__}, got {type(value).__name__}"
        )
    return value


@dataclass
class FRPSConfig:
    """Reverse tunnel (frps) endpoint the server registers with."""

    domain: str = ""
    port: int = 0
    protocol: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "domain": self.domain,
            "port": self.port,
            "protocol": self.protocol,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "FRPSConfig":
        if not isinstance(data, dict):
            raise ValueError("'frps' must be a JSON object")
        return cls(
            domain=_typed(data, "domain", str, ""),
            port=_typed(data, "port", int, 0),
            protocol=_typed(data, "protocol", str, ""),
        )


@dataclass
class ServerConfig:
    """Process-wide server configuration, persisted as ``config.json``.

    Attribute names are snake_case; the JSON document uses the camelCase keys
    listed in ``JSON_KEYS``.
    """

    id: str = ""
    api_port: int = 0
    headscale_port: int = 0
    providers_dir: str = ""
    binaries_path: str = ""
    registry_url: str = ""
    server_download_url: str = ""
    frps: FRPSConfig | None = field(default=None)

    JSON_KEYS = {
        "id": "id",
        "api_port": "apiPort",
        "headscale_port": "headscalePort",
        "providers_dir": "providersDir",
        "binaries_path": "binariesPath",
        "registry_url": "registryUrl",
        "server_download_url": "serverDownloadUrl",
        "frps": "frps",
    }

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, FRPSConfig):
                value = value.to_dict()
            d[self.JSON_KEYS[f.name]] = value
        return d

    @classmethod
    def from_dict(cls, data: Any) -> "ServerConfig":
        """Build a config from a decoded JSON document.

        Unknown keys are ignored and missing keys keep their zero value.
        Raises ValueError when *data* is not an object or a value has the
        wrong type.
        """
        if not isinstance(data, dict):
            raise ValueError("config must be a JSON object")
        frps = data.get("frps")
        return cls(
            id=_typed(data, "id", str, ""),
            api_port=_typed(data, "apiPort", int, 0),
            headscale_port=_typed(data, "headscalePort", int, 0),
            providers_dir=_typed(data, "providersDir", str, ""),
            binaries_path=_typed(data, "binariesPath", str, ""),
            registry_url=_typed(data, "registryUrl", str, ""),
            server_download_url=_typed(data, "serverDownloadUrl", str, ""),
            frps=FRPSConfig.from_dict(frps) if frps is not None else None,
        )

    @classmethod
    def scalar_keys(cls) -> dict[str, str]:
        """Map JSON key -> attribute name for every top-level scalar field."""
        return {v: k for k, v in cls.JSON_KEYS.items() if k != "frps"}
