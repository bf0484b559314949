"""Configuration management for refsync."""

import os
import yaml
import logging
from pathlib import Path
from typing import Dict, Any, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from refsync.constants import (
    DEFAULT_CONFIG_PATH, DEFAULT_BIB_PATH, DEFAULT_OUTPUT_PATH, DEFAULT_LOG_LEVEL
)

logger = logging.getLogger(__name__)

class LoggingConfig(BaseModel):
    """Logging configuration model."""
    level: str = Field(default=DEFAULT_LOG_LEVEL, description="Logging level")
    file: Optional[str] = Field(default=None, description="Log file path")

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate logging level."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            logger.warning(f"Invalid logging level: {v}. Using default: {DEFAULT_LOG_LEVEL}")
            return DEFAULT_LOG_LEVEL
        return v.upper()

class RefSyncConfig(BaseModel):
    """Main configuration model."""
    repo_path: Optional[str] = Field(default=None, description="Root of the site repository")
    bib_path: str = Field(default=DEFAULT_BIB_PATH, description="Bibliography file, relative to repo_path")
    output_path: str = Field(default=DEFAULT_OUTPUT_PATH, description="Generated module, relative to repo_path")
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging configuration")

    @field_validator('bib_path', 'output_path')
    @classmethod
    def validate_relative_file(cls, v: str, info) -> str:
        """Reject empty file paths."""
        if not v or not v.strip():
            default = DEFAULT_BIB_PATH if info.field_name == 'bib_path' else DEFAULT_OUTPUT_PATH
            logger.warning(f"Empty {info.field_name}. Using default: {default}")
            return default
        return v

    @field_validator('repo_path')
    @classmethod
    def resolve_repo_path(cls, v: Optional[str]) -> Optional[str]:
        """Resolve repository path."""
        return resolve_path(v) if v else None

def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from the YAML config file.

    Args:
        config_path: Path to the config file. If None, default is used.

    Returns:
        Dict with configuration values.
    """
    path = config_path or DEFAULT_CONFIG_PATH
    config: Dict[str, Any] = RefSyncConfig().model_dump()

    try:
        resolved_path = resolve_path(path)
        config_file = Path(resolved_path)
        if config_file.exists():
            with open(config_file, 'r', encoding='utf-8') as f:
                raw_config = yaml.safe_load(f) or {}

            try:
                config = RefSyncConfig(**raw_config).model_dump()
                logger.debug(f"Loaded and validated configuration from {resolved_path}")
            except ValidationError as validation_error:
                logger.error(f"Configuration validation error: {validation_error}")
                logger.warning("Using default configuration")
        else:
            logger.warning(f"Config file '{resolved_path}' not found. Using defaults.")
    except (OSError, yaml.YAMLError, TypeError) as e:
        logger.error(f"Error loading config file '{path}': {e}")

    return config

def resolve_path(path: Optional[str]) -> Optional[str]:
    """Resolve path with environment variables and user home."""
    if path is None:
        return None
    return os.path.expanduser(os.path.expandvars(path))

def get_config_value(config: Dict[str, Any], key_path: str, default: Any = None) -> Any:
    """
    Get configuration value using a dot-separated path.

    Args:
        config: Configuration dictionary
        key_path: Dot-separated path (e.g., "section.key")
        default: Default value if path not found

    Returns:
        Configuration value or default if not found
    """
    keys = key_path.split('.')
    current = config

    for key in keys:
        if isinstance(current, dict) and key in current:
            current = current[key]
        else:
            return default

    return current
