import functools
import logging
import time
from typing import Optional

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"

# Top-level packages whose loggers share the console handler
LOGGED_PACKAGES = ("core", "modules", "interface", "server", "tools", "config")

_CONFIGURED = False


def configure_logging(level: str | int = "INFO") -> None:
    """Attach a single console handler to the project loggers.

    Repeated calls only adjust the level; handlers are never duplicated.
    """

    global _CONFIGURED
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    for name in LOGGED_PACKAGES:
        package_logger = logging.getLogger(name)
        package_logger.setLevel(level)
        if not _CONFIGURED:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            package_logger.addHandler(handler)
    _CONFIGURED = True


def log_calls(func):
    """Décorateur qui trace les appels et leur durée au niveau DEBUG."""

    call_logger = logging.getLogger(func.__module__)

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        if not call_logger.isEnabledFor(logging.DEBUG):
            return func(*args, **kwargs)

        call_logger.debug("Appel %s args=%s kwargs=%s", func.__qualname__, args[1:], kwargs)
        start_time = time.perf_counter()
        result = func(*args, **kwargs)
        elapsed = time.perf_counter() - start_time
        call_logger.debug("Retour %s: %r (%.6f s)", func.__qualname__, result, elapsed)
        return result

    return wrapper


_MIGRATION_LOGGER_NAME = "modules.bindings.migration"
_MIGRATION_LOGGER: Optional[logging.Logger] = None


def get_migration_logger() -> logging.Logger:
    """Return a shared logger dedicated to legacy binding file migration."""

    global _MIGRATION_LOGGER
    if _MIGRATION_LOGGER is not None:
        return _MIGRATION_LOGGER

    logger = logging.getLogger(_MIGRATION_LOGGER_NAME)
    logger.setLevel(logging.INFO)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(logging.WARNING)
        handler.setFormatter(logging.Formatter("[migration] %(message)s"))
        logger.addHandler(handler)

    logger.propagate = True
    _MIGRATION_LOGGER = logger
    return logger
