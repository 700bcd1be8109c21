"""Workflow dispatch, run discovery and completion polling."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Optional

from ..exceptions import WorkflowRunTimeoutError
from ..github.models import Workflow, WorkflowRun

LOGGER = logging.getLogger(__name__)

BRANCH_PREFIX = "refs/heads/"


def _now() -> datetime:
    return datetime.now(timezone.utc)


def branch_from_ref(ref: str) -> str:
    """Strip a leading ``refs/heads/`` from a git ref."""
    if ref.startswith(BRANCH_PREFIX):
        return ref[len(BRANCH_PREFIX):]
    return ref


@dataclass
class WorkflowRunResult:
    """Container for the final state of a dispatched run."""

    workflow_id: int
    run_id: int
    status: str
    conclusion: Optional[str]
    html_url: Optional[str] = None

    def is_successful(self) -> bool:
        return self.status == "completed" and self.conclusion == "success"


class WorkflowExecutor:
    """Triggers a workflow and follows the run it produces."""

    def __init__(self, github_client, polling_config: Optional[Mapping[str, Any]] = None):
        polling = dict(polling_config or {})
        self.github_client = github_client
        self.discovery_attempts = int(polling.get("discovery_attempts", 30))
        self.discovery_interval = float(polling.get("discovery_interval", 2))
        self.recency_window = float(polling.get("recency_window", 60))
        self.completion_interval = float(polling.get("completion_interval", 5))

    def dispatch(
        self,
        owner: str,
        repo: str,
        workflow: Workflow,
        ref: str,
        inputs: Any,
    ) -> int:
        """Issue the workflow_dispatch call and return the response status."""
        LOGGER.info("Calling GitHub API to dispatch workflow...")
        status = self.github_client.dispatch_workflow(owner, repo, workflow.id, ref, inputs)
        LOGGER.info("API response status: %s", status)
        return status

    def find_run(self, owner: str, repo: str, workflow_id: int, ref: str) -> WorkflowRun:
        """Wait for the dispatched run to appear and return it.

        The dispatch call returns no run id, so the newest run on the branch
        is taken if it was created inside the recency window.
        """
        LOGGER.info("Waiting for workflow run to start...")
        branch = branch_from_ref(ref)
        for attempt in range(1, self.discovery_attempts + 1):
            runs = self.github_client.list_workflow_runs(owner, repo, workflow_id, branch, per_page=1)
            latest = runs[0] if runs else None
            if latest is not None and self._is_recent(latest):
                LOGGER.info("Workflow run started with ID: %s", latest.id)
                return latest
            LOGGER.debug(
                "No new run for workflow %s on '%s' (attempt %s/%s)",
                workflow_id,
                branch,
                attempt,
                self.discovery_attempts,
            )
            time.sleep(self.discovery_interval)

        raise WorkflowRunTimeoutError("Timed out waiting for workflow run to start")

    def wait_for_completion(self, owner: str, repo: str, run: WorkflowRun) -> WorkflowRun:
        """Poll the run by id until its status is ``completed``. There is no cap."""
        LOGGER.info("Waiting for workflow run to complete...")
        while not run.is_completed:
            run = self.github_client.get_workflow_run(owner, repo, run.id)
            LOGGER.debug("Workflow run %s status: %s", run.id, run.status)
            if not run.is_completed:
                time.sleep(self.completion_interval)
        LOGGER.info("Workflow run completed with conclusion: %s", run.conclusion)
        return run

    def _is_recent(self, run: WorkflowRun) -> bool:
        if run.created_at is None:
            return False
        return run.created_at > _now() - timedelta(seconds=self.recency_window)
