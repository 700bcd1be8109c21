"""Configuration management utilities."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from ..exceptions import ConfigurationError, ValidationError

DEFAULT_API_URL = "https://api.github.com"


class ConfigManager:
    """Handles loading and validation of the optional YAML settings file."""

    def __init__(self, config_path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None):
        self.config_path = Path(config_path) if config_path else None
        self.environ = os.environ if environ is None else environ
        self.config: Dict[str, Any] = {}

    def load(self) -> Dict[str, Any]:
        """Load and validate the configuration file, if one was given."""
        if self.config_path is None:
            self.config = {}
            return self.config

        if not self.config_path.exists():
            raise ConfigurationError(f"Configuration file not found: {self.config_path}")

        try:
            with self.config_path.open("r", encoding="utf-8") as fh:
                data = yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Failed to parse configuration: {exc}") from exc

        self.config = data
        self.validate()
        return self.config

    def validate(self) -> bool:
        """Validate the loaded configuration contents."""
        if not isinstance(self.config, dict):
            raise ValidationError("Configuration must be a mapping.")

        for section in ("polling", "github", "logging"):
            value = self.config.get(section, {})
            if not isinstance(value, dict):
                raise ValidationError(f"Section '{section}' must be a mapping.")

        polling_cfg = self.config.get("polling", {})
        attempts = polling_cfg.get("discovery_attempts", 1)
        if isinstance(attempts, bool) or not isinstance(attempts, int) or attempts < 1:
            raise ValidationError("polling.discovery_attempts must be a positive integer.")

        for key in ("discovery_interval", "recency_window", "completion_interval"):
            value = polling_cfg.get(key, 1)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                raise ValidationError(f"polling.{key} must be a positive number of seconds.")

        github_cfg = self.config.get("github", {})
        api_url = github_cfg.get("api_url")
        if api_url is not None and (not isinstance(api_url, str) or not api_url.startswith("http")):
            raise ValidationError("github.api_url must be an http(s) URL.")

        return True

    def get_polling_config(self) -> Dict[str, Any]:
        """Return run discovery and completion polling values with defaults."""
        defaults = {
            "discovery_attempts": 30,
            "discovery_interval": 2,
            "recency_window": 60,
            "completion_interval": 5,
        }
        polling_cfg = self.config.get("polling", {})
        merged = {**defaults, **polling_cfg}
        return merged

    def get_github_config(self) -> Dict[str, Any]:
        """Return GitHub API connection values with defaults."""
        defaults = {
            "api_url": self.environ.get("GITHUB_API_URL") or DEFAULT_API_URL,
            "timeout": 30,
        }
        github_cfg = self.config.get("github", {})
        merged = {**defaults, **github_cfg}
        return merged

    def get_logging_config(self) -> Dict[str, Any]:
        """Return logging configuration values with defaults."""
        defaults = {
            "level": "INFO",
            "file": None,
            "console": True,
            "format": "%(message)s",
            "annotations": self.environ.get("GITHUB_ACTIONS") == "true",
        }
        logging_cfg = self.config.get("logging", {})
        merged = {**defaults, **logging_cfg}
        if self.environ.get("RUNNER_DEBUG") == "1" or self.environ.get("ACTIONS_STEP_DEBUG") == "true":
            merged["level"] = "DEBUG"
        return merged
