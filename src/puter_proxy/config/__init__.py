"""
Configuration de Puter Proxy.
"""

from .loader import load_config, reload_config, load_settings
from .settings import Settings

__all__ = [
    "load_config",
    "reload_config",
    "load_settings",
    "Settings",
]
