"""Core application entry point."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from .config import InvocationContext
from .exceptions import is_disabled_workflow_error
from .utils import ActionOutputs
from .workflow import WorkflowExecutor, WorkflowLocator, WorkflowRunResult

LOGGER = logging.getLogger(__name__)

DISABLED_WORKFLOW_WARNING = "Workflow is disabled, no action was taken"


def report_failure(outputs: ActionOutputs, exc: BaseException) -> int:
    """Report an error from any phase and return the process exit code.

    A dispatch against a disabled workflow is only a warning.
    """
    if is_disabled_workflow_error(exc):
        outputs.warning(DISABLED_WORKFLOW_WARNING)
        return 0
    LOGGER.debug("Invocation failed", exc_info=exc)
    outputs.set_failed(str(exc))
    return 1


class WorkflowDispatchRunner:
    """Coordinates workflow lookup, dispatch, run discovery and completion."""

    def __init__(
        self,
        github_client,
        outputs: Optional[ActionOutputs] = None,
        polling_config: Optional[Mapping[str, Any]] = None,
    ):
        self.github_client = github_client
        self.outputs = outputs or ActionOutputs()
        self.workflow_locator = WorkflowLocator(github_client)
        self.workflow_executor = WorkflowExecutor(github_client, polling_config)

    def run(self, context: InvocationContext) -> int:
        """Run one invocation and return the process exit code."""
        try:
            self.execute(context)
        except Exception as exc:
            return report_failure(self.outputs, exc)
        return 0

    def execute(self, context: InvocationContext) -> WorkflowRunResult:
        """Dispatch the workflow and block until its run completes."""
        owner, repo = context.owner, context.repo
        workflow = self.workflow_locator.find_workflow(context.workflow, owner, repo)

        self.workflow_executor.dispatch(owner, repo, workflow, context.ref, context.inputs)
        self.outputs.set_output("workflowId", workflow.id)

        run = self.workflow_executor.find_run(owner, repo, workflow.id, context.ref)
        run = self.workflow_executor.wait_for_completion(owner, repo, run)

        self.outputs.set_output("workflow_run_id", run.id)
        self.outputs.set_output("workflow_run_status", run.status)
        self.outputs.set_output("workflow_run_conclusion", run.conclusion)

        return WorkflowRunResult(
            workflow_id=workflow.id,
            run_id=run.id,
            status=run.status,
            conclusion=run.conclusion,
            html_url=run.html_url,
        )
