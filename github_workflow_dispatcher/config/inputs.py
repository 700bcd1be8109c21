"""Resolution of action inputs into an invocation context."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple

from ..exceptions import ConfigurationError


@dataclass(frozen=True)
class AmbientContext:
    """Defaults supplied by the host that started this process."""

    ref: str = ""
    owner: str = ""
    repo: str = ""

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None) -> "AmbientContext":
        env = os.environ if environ is None else environ
        owner, _, repo = env.get("GITHUB_REPOSITORY", "").partition("/")
        return cls(ref=env.get("GITHUB_REF", ""), owner=owner, repo=repo)


@dataclass(frozen=True)
class InvocationContext:
    """Everything one dispatch needs, resolved once up front."""

    workflow: str
    token: str
    ref: str
    owner: str
    repo: str
    inputs: Any = field(default_factory=dict)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


def parse_inputs(raw: Optional[str]) -> Any:
    """Decode the raw inputs string. The decoded value is passed on as is."""
    if not raw:
        return {}
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Invalid JSON in inputs: {exc}") from exc


def split_repo(value: str) -> Tuple[str, str]:
    """Split an ``owner/repo`` string."""
    parts = value.split("/")
    if len(parts) != 2 or not all(parts):
        raise ConfigurationError(f"Repo must be of the form 'owner/repo', got '{value}'")
    return parts[0], parts[1]


def resolve_invocation(
    *,
    workflow: Optional[str],
    token: Optional[str],
    ref: Optional[str] = None,
    repo: Optional[str] = None,
    inputs: Optional[str] = None,
    ambient: Optional[AmbientContext] = None,
) -> InvocationContext:
    """Build the invocation context, falling back to ambient values."""
    ambient = ambient or AmbientContext()
    if not workflow:
        raise ConfigurationError("Input required and not supplied: workflow")
    if not token:
        raise ConfigurationError("Input required and not supplied: token")

    if repo:
        owner, name = split_repo(repo)
    else:
        owner, name = ambient.owner, ambient.repo
    if not owner or not name:
        raise ConfigurationError("Repository is unknown; pass repo as 'owner/repo'")

    return InvocationContext(
        workflow=workflow,
        token=token,
        ref=ref or ambient.ref,
        owner=owner,
        repo=name,
        inputs=parse_inputs(inputs),
    )
