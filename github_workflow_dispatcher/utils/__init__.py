"""Utility helpers for the GitHub Workflow Dispatcher."""

from .logger import ActionsFormatter, configure_logging
from .outputs import ActionOutputs

__all__ = ["ActionsFormatter", "ActionOutputs", "configure_logging"]
