"""Workflow lookup helpers."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from typing import Iterable, Optional

from ..exceptions import WorkflowNotFoundError
from ..github.models import Workflow

LOGGER = logging.getLogger(__name__)


def matches_workflow(workflow: Workflow, identifier: str) -> bool:
    """Return True if the identifier names the workflow by name, id or file path."""
    return (
        workflow.name == identifier
        or str(workflow.id) == identifier
        or workflow.path.endswith(f"/{identifier}")
        or workflow.path == identifier
    )


def first_match(workflows: Iterable[Workflow], identifier: str) -> Optional[Workflow]:
    for workflow in workflows:
        if matches_workflow(workflow, identifier):
            return workflow
    return None


class WorkflowLocator:
    """Finds the workflow a dispatch should target."""

    def __init__(self, github_client):
        self.github_client = github_client

    def find_workflow(self, identifier: str, owner: str, repo: str) -> Workflow:
        """Return the first listed workflow matching the identifier; raise otherwise."""
        workflows = self.github_client.list_workflows(owner, repo)

        if LOGGER.isEnabledFor(logging.DEBUG):
            LOGGER.debug("### START List Workflows response data")
            LOGGER.debug(json.dumps([asdict(workflow) for workflow in workflows], indent=3))
            LOGGER.debug("### END:  List Workflows response data")

        workflow = first_match(workflows, identifier)
        if workflow is None:
            raise WorkflowNotFoundError(f"Unable to find workflow '{identifier}' in {owner}/{repo}")

        LOGGER.info(
            "Found workflow, id: %s, name: %s, path: %s", workflow.id, workflow.name, workflow.path
        )
        return workflow
