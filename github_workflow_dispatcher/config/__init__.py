"""Configuration utilities for the GitHub Workflow Dispatcher."""

from .config_manager import ConfigManager
from .inputs import AmbientContext, InvocationContext, parse_inputs, resolve_invocation, split_repo

__all__ = [
    "AmbientContext",
    "ConfigManager",
    "InvocationContext",
    "parse_inputs",
    "resolve_invocation",
    "split_repo",
]
