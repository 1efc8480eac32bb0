"""
Configuration loading for structcache.
"""

from .manager import ConfigManager, mergeConfigs, substituteEnvVars

__all__ = [
    "ConfigManager",
    "mergeConfigs",
    "substituteEnvVars",
]
