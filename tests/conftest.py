from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import List

import pytest

from github_workflow_dispatcher.exceptions import GitHubAPIError
from github_workflow_dispatcher.github.models import Workflow, WorkflowRun
from github_workflow_dispatcher.utils import ActionOutputs
from github_workflow_dispatcher.workflow import workflow_executor

NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_run(run_id=100, status="queued", conclusion=None, age_seconds=5):
    return WorkflowRun(
        id=run_id,
        status=status,
        conclusion=conclusion,
        created_at=NOW - timedelta(seconds=age_seconds),
        html_url=f"https://github.com/octo/repo/actions/runs/{run_id}",
    )


class FakeGitHubClient:
    """In-memory stand-in for GitHubClient."""

    def __init__(self, workflows=None, run_listings=None, run_snapshots=None, dispatch_error=None):
        self.workflows: List[Workflow] = list(workflows or [])
        self.run_listings = list(run_listings or [])
        self.run_snapshots = list(run_snapshots or [])
        self.dispatch_error = dispatch_error
        self.calls: List[tuple] = []

    def list_workflows(self, owner, repo):
        self.calls.append(("list_workflows", owner, repo))
        return list(self.workflows)

    def dispatch_workflow(self, owner, repo, workflow_id, ref, inputs):
        self.calls.append(("dispatch_workflow", owner, repo, workflow_id, ref, inputs))
        if self.dispatch_error is not None:
            raise self.dispatch_error
        return 204

    def list_workflow_runs(self, owner, repo, workflow_id, branch, per_page=1):
        self.calls.append(("list_workflow_runs", owner, repo, workflow_id, branch, per_page))
        if len(self.run_listings) > 1:
            return self.run_listings.pop(0)
        return self.run_listings[0] if self.run_listings else []

    def get_workflow_run(self, owner, repo, run_id):
        self.calls.append(("get_workflow_run", owner, repo, run_id))
        if not self.run_snapshots:
            raise GitHubAPIError("Not Found", status_code=404)
        if len(self.run_snapshots) > 1:
            return self.run_snapshots.pop(0)
        return self.run_snapshots[0]

    def call_names(self):
        return [call[0] for call in self.calls]


@pytest.fixture
def frozen_clock(monkeypatch):
    sleeps: List[float] = []
    monkeypatch.setattr(workflow_executor, "_now", lambda: NOW)
    monkeypatch.setattr(workflow_executor.time, "sleep", lambda seconds: sleeps.append(seconds))
    return sleeps


@pytest.fixture
def outputs(tmp_path):
    return ActionOutputs(output_path=str(tmp_path / "github_output"))
