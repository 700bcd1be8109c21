"""Lightweight GitHub REST client for the Actions workflow endpoints."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Optional

import httpx

from ..exceptions import ConfigurationError, GitHubAPIError
from .models import Workflow, WorkflowRun

LOGGER = logging.getLogger(__name__)

API_HEADERS = {
    "Accept": "application/vnd.github+json",
    "X-GitHub-Api-Version": "2022-11-28",
}


class GitHubClient:
    """Wraps the handful of REST calls needed to dispatch and follow a run."""

    def __init__(
        self,
        token: str,
        api_url: str = "https://api.github.com",
        timeout: float = 30,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        if not token:
            raise ConfigurationError("GitHub token is required to call the API")
        self._token = token
        self._api_url = api_url.rstrip("/")
        self._rest = httpx.Client(base_url=self._api_url, timeout=timeout, transport=transport)

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._rest.close()

    def _headers(self) -> Dict[str, str]:
        headers = {"Authorization": f"Bearer {self._token}"}
        headers.update(API_HEADERS)
        return headers

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = self._rest.request(method, url, headers=self._headers(), **kwargs)
        except httpx.HTTPError as exc:
            raise GitHubAPIError(f"Request to {url} failed: {exc}") from exc
        self._handle_response(response)
        return response

    @staticmethod
    def _handle_response(response: httpx.Response) -> None:
        if response.is_success:
            return
        message = None
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            message = body.get("message")
        if not message:
            message = f"{response.status_code} {response.reason_phrase}"
        LOGGER.debug("GitHub API error %s: %s", response.status_code, response.text)
        raise GitHubAPIError(message, status_code=response.status_code)

    def _paginate(self, path: str, key: str, params: Optional[Dict[str, Any]] = None) -> Iterator[Dict[str, Any]]:
        url: Optional[str] = path
        query = params
        while url:
            response = self._request("GET", url, params=query)
            data = response.json()
            yield from data.get(key, [])
            next_link = response.links.get("next")
            url = next_link.get("url") if next_link else None
            query = None

    def list_workflows(self, owner: str, repo: str) -> List[Workflow]:
        """Return every workflow defined in the repository, across all pages."""
        pages = self._paginate(f"/repos/{owner}/{repo}/actions/workflows", "workflows", params={"per_page": 100})
        return [Workflow.from_api(item) for item in pages]

    def dispatch_workflow(
        self,
        owner: str,
        repo: str,
        workflow_id: int,
        ref: str,
        inputs: Any,
    ) -> int:
        """Create a workflow_dispatch event and return the HTTP status code."""
        response = self._request(
            "POST",
            f"/repos/{owner}/{repo}/actions/workflows/{workflow_id}/dispatches",
            json={"ref": ref, "inputs": inputs},
        )
        return response.status_code

    def list_workflow_runs(
        self,
        owner: str,
        repo: str,
        workflow_id: int,
        branch: str,
        per_page: int = 1,
    ) -> List[WorkflowRun]:
        """Return the most recent runs of a workflow on a branch, newest first."""
        params: Dict[str, Any] = {"per_page": per_page}
        if branch:
            params["branch"] = branch
        response = self._request(
            "GET", f"/repos/{owner}/{repo}/actions/workflows/{workflow_id}/runs", params=params
        )
        return [WorkflowRun.from_api(item) for item in response.json().get("workflow_runs", [])]

    def get_workflow_run(self, owner: str, repo: str, run_id: int) -> WorkflowRun:
        response = self._request("GET", f"/repos/{owner}/{repo}/actions/runs/{run_id}")
        return WorkflowRun.from_api(response.json())
