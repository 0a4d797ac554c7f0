"""Configuration module for sensitive-filter."""

from sensitive_filter.config.settings import (
    SensitiveConfig,
    load_config_from_yaml,
    parse_disturbs,
    validate_replace_code,
)

__all__ = [
    "SensitiveConfig",
    "load_config_from_yaml",
    "parse_disturbs",
    "validate_replace_code",
]
