"""
Configuration management for structcache.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import tomli

from structcache import utils
from structcache.cache.exceptions import CacheConfigError
from structcache.cache.types import MemcachedConfig, RedisConfig

logger = logging.getLogger(__name__)

ENV_PLACEHOLDER_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_-]*)\}")


def replaceMatchToEnv(match: re.Match[str]) -> str:
    """Replace environment variable placeholder with its value, keep placeholder if unset."""
    key = match.group(1)
    return os.getenv(key, match.group(0))


def substituteEnvVars(value: Any) -> Any:
    """Recursively substitute ${VAR_NAME} placeholders in strings, dicts and lists.

    Args:
        value: The configuration value to process

    Returns:
        The processed value, other types are returned unchanged
    """
    if isinstance(value, str):
        return ENV_PLACEHOLDER_PATTERN.sub(replaceMatchToEnv, value)
    elif isinstance(value, dict):
        return {k: substituteEnvVars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [substituteEnvVars(item) for item in value]
    return value


def mergeConfigs(baseConfig: Dict[str, Any], newConfig: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge two configuration dictionaries, values from newConfig win."""
    merged = baseConfig.copy()

    for key, value in newConfig.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = mergeConfigs(merged[key], value)
        else:
            merged[key] = value

    return merged


class ConfigManager:
    """Manages configuration loading for structcache, dood!

    Main TOML file is loaded first, then every *.toml file found recursively
    in configDirs is merged on top of it in sorted order. ${VAR} placeholders
    are substituted from environment (after loading dotEnvFile if present).

    Raises:
        CacheConfigError: If there is neither config file nor config directories,
            or the main config file can't be parsed
    """

    def __init__(
        self, configPath: str = "config.toml", configDirs: Optional[List[str]] = None, dotEnvFile: str = ".env"
    ):
        self.configPath = configPath
        self.configDirs = configDirs or []
        utils.loadDotEnv(path=dotEnvFile)
        self.config: Dict[str, Any] = substituteEnvVars(self._loadConfig())

    def _findTomlFilesRecursive(self, directory: str) -> List[Path]:
        """Recursively find all .toml files in a directory."""
        dirPath = Path(directory)

        if not dirPath.is_dir():
            logger.warning(f"Config directory {directory} does not exist or is not a directory, skipping, dood!")
            return []

        return sorted(path for path in dirPath.rglob("*.toml") if path.is_file())

    def _loadConfig(self) -> Dict[str, Any]:
        """Load configuration from TOML file and optional config directories."""
        configFile = Path(self.configPath)
        hasConfigFile = configFile.is_file()
        if not hasConfigFile and not self.configDirs:
            raise CacheConfigError(f"Configuration file {self.configPath} not found")

        config: Dict[str, Any] = {}
        if hasConfigFile:
            try:
                with open(configFile, "rb") as f:
                    config = tomli.load(f)
            except tomli.TOMLDecodeError as e:
                raise CacheConfigError(f"Failed to parse configuration file {self.configPath}: {e}") from e
            logger.info(f"Loaded main config from {self.configPath}")

        for configDir in self.configDirs:
            tomlFiles = self._findTomlFilesRecursive(configDir)
            logger.info(f"Found {len(tomlFiles)} .toml files in {configDir}")

            for tomlFile in tomlFiles:
                try:
                    with open(tomlFile, "rb") as f:
                        config = mergeConfigs(config, tomli.load(f))
                    logger.info(f"Merged config from {tomlFile}")
                except (OSError, tomli.TOMLDecodeError) as e:
                    # Broken override file shouldn't prevent startup
                    logger.error(f"Failed to load config file {tomlFile}: {e}")

        return config

    def get(self, key: str, default=None) -> Any:
        """Get configuration value by key."""
        return self.config.get(key, default)

    def getMemcachedConfig(self) -> MemcachedConfig:
        """
        Get memcached configuration.

        Returns:
            Dict with servers, timeouts, retry settings and max-key-length
        """
        return self.get("memcached", {})

    def getRedisConfig(self) -> RedisConfig:
        """
        Get redis configuration.

        Returns:
            Dict with url and optional driver options
        """
        return self.get("redis", {})

    def getLoggingConfig(self) -> Dict[str, Any]:
        """Get logging-specific configuration."""
        return self.get("logging", {})
