"""Configuration loader for YAML config files.

Loads configuration from config/tablesight.yaml. Files are loaded once and
cached; a missing file means every setting keeps its default.
"""

import logging
import yaml
from pathlib import Path
from functools import lru_cache
from typing import Any, Dict, Optional

from tablesight.core.analytics.config import AnalyticsConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "tablesight.yaml"


def get_config_path() -> Path:
    """Get path to config directory.

    Searches in order:
    1. Relative to this file's project root
    2. Current working directory
    """
    # Go up: config_loader.py -> config -> core -> tablesight -> project_root
    project_root = Path(__file__).parent.parent.parent.parent
    config_path = project_root / "config"

    if config_path.exists():
        return config_path

    cwd_config = Path.cwd() / "config"
    if cwd_config.exists():
        return cwd_config

    # Return project path even if doesn't exist (for error messages)
    return config_path


def _load_yaml_file(config_file: Path) -> Dict[str, Any]:
    """Load a YAML config file.

    Args:
        config_file: Path to the YAML file

    Returns:
        Parsed YAML as dictionary, empty dict if file not found or unreadable
    """
    if not config_file.exists():
        logger.debug(f"Config file not found: {config_file}")
        return {}

    try:
        with open(config_file, 'r') as f:
            data = yaml.safe_load(f)
            logger.debug(f"Loaded config from {config_file}")
    except yaml.YAMLError as e:
        logger.error(f"Error parsing {config_file}: {e}")
        return {}
    except OSError as e:
        logger.error(f"Error loading {config_file}: {e}")
        return {}

    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.error(f"Ignoring {config_file}: top level must be a mapping")
        return {}
    return data


@lru_cache(maxsize=1)
def load_unified_config() -> Dict[str, Any]:
    """Load configuration from config/tablesight.yaml.

    Returns:
        Dictionary with all configuration sections
    """
    config = _load_yaml_file(get_config_path() / CONFIG_FILENAME)
    if config:
        logger.info(f"Loaded unified config from {CONFIG_FILENAME}")
    return config


def get_analytics_section() -> Dict[str, Any]:
    """Get the raw ``analytics`` section of the unified config."""
    section = load_unified_config().get("analytics", {})
    return section if isinstance(section, dict) else {}


def load_analytics_config(config_file: Optional[Path] = None) -> AnalyticsConfig:
    """Build the analytics configuration.

    Args:
        config_file: Optional explicit YAML file. Uses config/tablesight.yaml
            when omitted.

    Returns:
        AnalyticsConfig with file values merged over the defaults

    Raises:
        ConfigurationError: If a configured value is out of range.
    """
    if config_file is None:
        section = get_analytics_section()
    else:
        section = _load_yaml_file(Path(config_file)).get("analytics", {})

    return AnalyticsConfig.from_dict(section)


def get_config_value(*keys: str, default: Any = None) -> Any:
    """Get a nested value from the unified config with fallback default.

    Examples:
        get_config_value('analytics', 'suggestion', 'max_suggestions', default=6)
    """
    config: Any = load_unified_config()
    for key in keys:
        if isinstance(config, dict) and key in config:
            config = config[key]
        else:
            return default
    return config


def reload_configs() -> None:
    """Clear config caches to reload from files.

    Call this if config files are modified at runtime.
    """
    load_unified_config.cache_clear()
    logger.info("Config caches cleared - will reload on next access")
