"""Workflow utilities."""

from .workflow_executor import WorkflowExecutor, WorkflowRunResult
from .workflow_locator import WorkflowLocator, matches_workflow

__all__ = ["WorkflowLocator", "WorkflowExecutor", "WorkflowRunResult", "matches_workflow"]
