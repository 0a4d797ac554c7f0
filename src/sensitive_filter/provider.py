"""Process-wide engine instance.

Builds one :class:`Sensitive` from the environment (or a YAML file named by
SENSITIVE_CONFIG_PATH) the first time it is requested.
"""

import os
import threading
from typing import Optional

from sensitive_filter.config.settings import SensitiveConfig, load_config_from_yaml
from sensitive_filter.core.engine import Sensitive
from sensitive_filter.logging.setup import get_logger

logger = get_logger(__name__)

_sensitive: Optional[Sensitive] = None
_lock = threading.Lock()


def load_default_config() -> SensitiveConfig:
    """Configuration from SENSITIVE_CONFIG_PATH if set, else the environment."""
    config_path = os.getenv("SENSITIVE_CONFIG_PATH")
    if config_path:
        logger.info(
            "Loading configuration file",
            extra={"event": "config_loading", "path": config_path},
        )
        return load_config_from_yaml(config_path)
    return SensitiveConfig.from_env()


def get_sensitive(config: Optional[SensitiveConfig] = None) -> Sensitive:
    """Return the shared engine, building it on first use.

    Args:
        config: Configuration for the first build. Ignored once the engine
            exists.
    """
    global _sensitive

    with _lock:
        if _sensitive is None:
            _sensitive = Sensitive(config or load_default_config(), name="shared")
        return _sensitive


def reset_sensitive() -> None:
    """Drop the shared engine so the next call rebuilds it."""
    global _sensitive

    with _lock:
        _sensitive = None
