"""Infrastructure services and cross-cutting utilities."""

from packit.infrastructure.config import get_env, is_enabled
from packit.infrastructure.logging import StructuredLogger, get_logger, make_null_logger

__all__ = ["StructuredLogger", "get_env", "get_logger", "is_enabled", "make_null_logger"]
