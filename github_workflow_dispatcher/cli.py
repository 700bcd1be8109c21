"""Command line entry point for the GitHub Workflow Dispatcher."""

from __future__ import annotations

import logging
import os
from typing import Optional

import click

from . import __version__
from .config import AmbientContext, ConfigManager, resolve_invocation
from .github import GitHubClient
from .main import WorkflowDispatchRunner, report_failure
from .utils import ActionOutputs, configure_logging

LOGGER = logging.getLogger(__name__)


@click.command()
@click.option("--workflow", envvar="INPUT_WORKFLOW", help="Workflow name, numeric id or file name to dispatch.")
@click.option("--token", envvar=["INPUT_TOKEN", "GITHUB_TOKEN"], help="Token used for GitHub API calls.")
@click.option("--ref", envvar="INPUT_REF", help="Branch, tag or SHA to run the workflow on (default: GITHUB_REF).")
@click.option("--repo", envvar="INPUT_REPO", help="Target repository as owner/repo (default: GITHUB_REPOSITORY).")
@click.option("--inputs", envvar="INPUT_INPUTS", help="JSON object passed as the workflow inputs.")
@click.option("--config", "-c", "config_path", type=click.Path(exists=True), help="Path to an optional YAML settings file.")
@click.option("--log-level", type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False), help="Override logging level.")
@click.option("--discovery-interval", type=float, help="Seconds between checks for the new run.")
@click.option("--completion-interval", type=float, help="Seconds between run status checks.")
@click.version_option(version=__version__)
def main(
    workflow: Optional[str],
    token: Optional[str],
    ref: Optional[str],
    repo: Optional[str],
    inputs: Optional[str],
    config_path: Optional[str],
    log_level: Optional[str],
    discovery_interval: Optional[float],
    completion_interval: Optional[float],
) -> None:
    """Dispatch a workflow and wait for its run to complete."""
    outputs = ActionOutputs()
    config = ConfigManager(config_path)

    # Environment defaults until the settings file is read.
    logging_config = config.get_logging_config()
    if log_level is not None:
        logging_config["level"] = log_level.upper()
    configure_logging(logging_config)
    LOGGER.info("Workflow Dispatch v%s", __version__)

    try:
        if config_path:
            config.load()
            logging_config = config.get_logging_config()
            if log_level is not None:
                logging_config["level"] = log_level.upper()
            configure_logging(logging_config)

        polling_config = config.get_polling_config()
        if discovery_interval is not None:
            polling_config["discovery_interval"] = discovery_interval
        if completion_interval is not None:
            polling_config["completion_interval"] = completion_interval

        context = resolve_invocation(
            workflow=workflow,
            token=token,
            ref=ref,
            repo=repo,
            inputs=inputs,
            ambient=AmbientContext.from_environ(os.environ),
        )
        LOGGER.debug("Dispatching '%s' in %s at '%s'", context.workflow, context.full_name, context.ref)

        github_config = config.get_github_config()
        with GitHubClient(context.token, api_url=github_config["api_url"], timeout=github_config["timeout"]) as client:
            exit_code = WorkflowDispatchRunner(client, outputs, polling_config).run(context)
    except Exception as exc:
        exit_code = report_failure(outputs, exc)

    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
