"""Infrastructure configuration module."""

from .application_config import Config
from .compiler_config import DEFAULT_CONFIG, get_config, get_constant_seed

__all__ = ["Config", "DEFAULT_CONFIG", "get_config", "get_constant_seed"]
