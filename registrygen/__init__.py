"""Build installable registry items, an index and a bundle from a source tree."""

from .builder import BuildResult, RegistryAssembler, build_registry
from .config import ConfigError, RegistryConfig, load_config

__all__ = [
    "BuildResult",
    "ConfigError",
    "RegistryAssembler",
    "RegistryConfig",
    "build_registry",
    "load_config",
]

__version__ = "0.1.0"
