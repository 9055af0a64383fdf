"""Configuration management for docgate."""

from docgate.config.profile import (
    DEFAULT_API_URL,
    ClientConfig,
    ClientProfile,
    GateConfig,
)

__all__ = [
    "DEFAULT_API_URL",
    "ClientConfig",
    "ClientProfile",
    "GateConfig",
]
