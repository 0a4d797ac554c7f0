"""Logging configuration module for sensitive-filter."""

from sensitive_filter.logging.setup import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
