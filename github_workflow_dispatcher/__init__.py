"""Dispatch a GitHub Actions workflow and wait for the run it starts."""

__version__ = "1.0.0"

from .exceptions import WorkflowDispatcherError, is_disabled_workflow_error  # noqa: E402
from .main import WorkflowDispatchRunner  # noqa: E402

__all__ = ["__version__", "WorkflowDispatchRunner", "WorkflowDispatcherError", "is_disabled_workflow_error"]
