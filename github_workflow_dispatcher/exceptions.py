"""Custom exception definitions for the GitHub Workflow Dispatcher."""

from __future__ import annotations

from typing import Optional

DISABLED_WORKFLOW_SUFFIX = "a disabled workflow"


class WorkflowDispatcherError(Exception):
    """Base exception for the package."""


class ConfigurationError(WorkflowDispatcherError):
    """Raised when configuration or action inputs cannot be loaded."""


class ValidationError(WorkflowDispatcherError):
    """Raised when configuration values are structurally invalid."""


class GitHubAPIError(WorkflowDispatcherError):
    """Raised when a GitHub REST call fails.

    The message is the API's own error text so callers can match on it.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class WorkflowNotFoundError(WorkflowDispatcherError):
    """Raised when no workflow in the repository matches the identifier."""


class WorkflowRunTimeoutError(WorkflowDispatcherError):
    """Raised when the dispatched run does not show up in time."""


def is_disabled_workflow_error(exc: BaseException) -> bool:
    """Return True if the error reports a dispatch against a disabled workflow.

    GitHub exposes no structured code for this case, only the message text.
    """
    return str(exc).endswith(DISABLED_WORKFLOW_SUFFIX)
