"""Logging setup for directivecheck commands."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "directivecheck"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the directivecheck hierarchy."""
    return logging.getLogger(f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME)


class ProjectPathFilter(logging.Filter):
    """Shortens ``Path`` log arguments that live under the scanned project root."""

    def __init__(self, root: Path) -> None:
        super().__init__()
        self.root = root

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.args, tuple):
            record.args = tuple(self._shorten(arg) for arg in record.args)
        return True

    def _shorten(self, value: object) -> object:
        if not isinstance(value, Path) or not value.is_absolute():
            return value
        try:
            return value.relative_to(self.root).as_posix()
        except ValueError:
            return value


def configure_logging(
    *,
    verbose: bool = False,
    log_file: Path | None = None,
    project_root: Path | None = None,
) -> logging.Logger:
    """Route directivecheck logs to stderr, and optionally to ``log_file``.

    Warnings (unreadable files, skipped directories) are shown by default;
    ``verbose`` adds per-file classification details. When ``project_root``
    is given, paths under it are logged relative to it.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Repeated CLI invocations in one process must not stack handlers.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    handlers[0].setFormatter(logging.Formatter("[directivecheck] %(levelname)s %(message)s"))
    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        handlers.append(file_handler)

    path_filter = ProjectPathFilter(project_root) if project_root is not None else None
    for handler in handlers:
        handler.setLevel(level)
        if path_filter is not None:
            handler.addFilter(path_filter)
        logger.addHandler(handler)

    return logger


__all__ = ["ProjectPathFilter", "configure_logging", "get_logger"]
