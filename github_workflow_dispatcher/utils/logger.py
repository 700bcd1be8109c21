"""Logging helpers."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict


class ActionsFormatter(logging.Formatter):
    """Renders debug records as runner ``::debug::`` commands.

    The runner hides those lines unless step debugging is enabled.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if record.levelno <= logging.DEBUG:
            return "\n".join(f"::debug::{line}" for line in message.splitlines())
        return message


def configure_logging(config: Dict[str, Any]) -> None:
    """Configure application logging based on the supplied configuration."""
    level_name = str(config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)
    log_format = config.get("format", "%(message)s")
    console_enabled = bool(config.get("console", True))
    file_path = config.get("file")

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if console_enabled:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        if config.get("annotations", False):
            console_handler.setFormatter(ActionsFormatter(log_format))
        else:
            console_handler.setFormatter(logging.Formatter(log_format))
        root_logger.addHandler(console_handler)

    if file_path:
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
        root_logger.addHandler(file_handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
    logging.captureWarnings(True)
