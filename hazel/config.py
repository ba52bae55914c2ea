"""Configuration management."""

import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from hazel.core.errors import InvalidArgument

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to the file. When omitted, common locations are tried.

    Returns:
        The parsed configuration (an empty dict for an empty file)

    Raises:
        FileNotFoundError: If no configuration file can be found
        InvalidArgument: If the document is not a mapping
    """
    if config_path is None:
        possible_paths = [
            Path("config/hazel.yaml"),
            Path("hazel.yaml"),
            Path.home() / ".config" / "hazel" / "hazel.yaml",
        ]
        for path in possible_paths:
            if path.exists():
                config_path = str(path)
                break
        else:
            raise FileNotFoundError(
                "No hazel.yaml found. Copy config.example.yaml to hazel.yaml "
                "and fill in your values."
            )

    with open(config_path) as f:
        config = yaml.safe_load(f)

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise InvalidArgument(
            f"Configuration must be a mapping, {config_path} holds {type(config).__name__}"
        )
    return config


def get(config: Mapping[str, Any], key: str, default: Any = None) -> Any:
    """Get a config value by dot-notation key (e.g., 'logging.level')."""
    value = config
    for k in key.split("."):
        if isinstance(value, Mapping) and k in value:
            value = value[k]
        else:
            return default
    return value


def setup_logging(config: Mapping[str, Any]):
    """Configure root logging from the 'logging' section of a config."""
    log_level = str(get(config, "logging.level", "INFO")).upper()
    log_file = get(config, "logging.file")

    handlers = [logging.StreamHandler()]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handlers.append(file_handler)

    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
    )
