from __future__ import annotations

import logging

from rich.logging import RichHandler

PACKAGE_LOGGER = "randomuser_offline"


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def configure_logging(level: int = logging.INFO) -> None:
    root = logging.getLogger(PACKAGE_LOGGER)
    root.setLevel(level)
    if any(isinstance(handler, RichHandler) for handler in root.handlers):
        return
    handler = RichHandler(show_path=False, rich_tracebacks=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)
