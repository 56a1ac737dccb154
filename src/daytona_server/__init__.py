"""Daytona server configuration and log-directory management."""

__version__ = "0.1.0"
