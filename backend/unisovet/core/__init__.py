# Core package initialization
# Configuration, logging, exceptions and HTTP helpers shared by all layers

from . import config, exceptions

__all__ = [
    "config",
    "exceptions",
]
