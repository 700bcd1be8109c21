"""Step outputs and workflow command annotations for the Actions runner."""

from __future__ import annotations

import logging
import os
import sys
import uuid
from pathlib import Path
from typing import Any, Dict, Optional, TextIO

LOGGER = logging.getLogger(__name__)


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _to_command_value(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


class ActionOutputs:
    """Records step outputs and writes them where the runner picks them up."""

    def __init__(self, output_path: Optional[str] = None, stream: Optional[TextIO] = None) -> None:
        if output_path is None:
            output_path = os.environ.get("GITHUB_OUTPUT") or None
        self.output_path = Path(output_path) if output_path else None
        self.stream = stream
        self.outputs: Dict[str, str] = {}
        self.failed = False
        self.failure_message: Optional[str] = None

    def set_output(self, name: str, value: Any) -> None:
        text = _to_command_value(value)
        self.outputs[name] = text
        if self.output_path is not None:
            delimiter = f"ghadelimiter_{uuid.uuid4()}"
            with self.output_path.open("a", encoding="utf-8") as fh:
                fh.write(f"{name}<<{delimiter}\n{text}\n{delimiter}\n")
        else:
            self._issue(f"::set-output name={name}::{_escape_data(text)}")
        LOGGER.debug("Set output %s=%s", name, text)

    def warning(self, message: str) -> None:
        self._issue(f"::warning::{_escape_data(message)}")

    def error(self, message: str) -> None:
        self._issue(f"::error::{_escape_data(message)}")

    def set_failed(self, message: str) -> None:
        self.failed = True
        self.failure_message = message
        self.error(message)

    def _issue(self, command: str) -> None:
        stream = self.stream or sys.stdout
        stream.write(command + "\n")
        stream.flush()
