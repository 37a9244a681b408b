"""
Logging helpers
All modules log through get_logger(__name__) so output shares one format.
"""
import logging
import sys

from config import settings

ROOT_LOGGER_NAME = "chat_planner"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_configured = False


def _configure_root() -> logging.Logger:
    global _configured
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not _configured:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(settings.LOG_LEVEL.upper())
        root.propagate = False
        _configured = True
    return root


def get_logger(name: str) -> logging.Logger:
    """Get a logger namespaced under the application root logger"""
    root = _configure_root()
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return root.getChild(name)
