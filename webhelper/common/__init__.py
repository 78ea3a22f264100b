"""Common utilities: settings and logging."""

from webhelper.common.global_config import get_config, get_logger, init_logger

__all__ = ["get_config", "get_logger", "init_logger"]
