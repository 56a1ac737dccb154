"""Exceptions raised by the configuration store."""


class ConfigError(Exception):
    """Base class for every configuration failure."""


class ConfigDirUnavailableError(ConfigError):
    """The host could not resolve a per-user configuration directory."""


class ConfigNotFoundError(ConfigError):
    """The config file does not exist yet."""


class ConfigIOError(ConfigError):
    """A filesystem read, write, mkdir or remove failed."""


class ConfigDecodeError(ConfigError):
    """The config file is not valid JSON or does not have the expected shape."""
