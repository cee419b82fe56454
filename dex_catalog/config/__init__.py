"""Configuration package exports."""

from .loader import ConfigLocator, ConfigRepository
from .models import ApiConfig, GlobalConfig, LoaderConfig

__all__ = [
    "ApiConfig",
    "ConfigLocator",
    "ConfigRepository",
    "GlobalConfig",
    "LoaderConfig",
]
