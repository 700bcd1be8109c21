"""GitHub REST API integration helpers."""

from .client import GitHubClient
from .models import Workflow, WorkflowRun

__all__ = ["GitHubClient", "Workflow", "WorkflowRun"]
