"""Tests for the command line entry point."""

import logging

import pytest
from click.testing import CliRunner

from github_workflow_dispatcher import cli
from github_workflow_dispatcher.github.models import Workflow

from .conftest import FakeGitHubClient, make_run

CI = Workflow(id=11, name="CI", path=".github/workflows/ci.yml")


class ClientFactory:
    def __init__(self, fake):
        self.fake = fake
        self.created = []

    def __call__(self, token, api_url, timeout):
        self.created.append((token, api_url, timeout))
        return self

    def __enter__(self):
        return self.fake

    def __exit__(self, *exc_info):
        return None


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def env(tmp_path, monkeypatch):
    names = ["GITHUB_OUTPUT", "GITHUB_TOKEN", "GITHUB_API_URL", "RUNNER_DEBUG", "ACTIONS_STEP_DEBUG"]
    names += ["INPUT_WORKFLOW", "INPUT_TOKEN", "INPUT_REF", "INPUT_REPO", "INPUT_INPUTS", "GITHUB_ACTIONS"]
    for name in names:
        monkeypatch.delenv(name, raising=False)
    output = tmp_path / "github_output"
    return {
        "GITHUB_REPOSITORY": "octo/home",
        "GITHUB_REF": "refs/heads/main",
        "GITHUB_OUTPUT": str(output),
    }


def test_bad_json_fails_before_any_api_call(env, monkeypatch):
    factory = ClientFactory(FakeGitHubClient(workflows=[CI]))
    monkeypatch.setattr(cli, "GitHubClient", factory)

    result = CliRunner().invoke(
        cli.main, ["--workflow", "CI", "--token", "t", "--inputs", "{bad json"], env=env
    )

    assert result.exit_code == 1
    assert "::error::Invalid JSON in inputs" in result.output
    assert factory.created == []


def test_dispatch_and_wait_from_environment_inputs(env, monkeypatch, frozen_clock):
    fake = FakeGitHubClient(
        workflows=[CI],
        run_listings=[[make_run(run_id=7)]],
        run_snapshots=[make_run(run_id=7, status="completed", conclusion="success")],
    )
    factory = ClientFactory(fake)
    monkeypatch.setattr(cli, "GitHubClient", factory)
    env.update({"INPUT_WORKFLOW": "ci.yml", "INPUT_TOKEN": "secret", "INPUT_INPUTS": '{"x":1}'})

    result = CliRunner().invoke(cli.main, [], env=env)

    assert result.exit_code == 0, result.output
    assert factory.created == [("secret", "https://api.github.com", 30)]
    assert fake.calls[1] == ("dispatch_workflow", "octo", "home", 11, "refs/heads/main", {"x": 1})
    written = open(env["GITHUB_OUTPUT"], encoding="utf-8").read()
    assert "workflow_run_conclusion<<" in written
    assert "\nsuccess\n" in written


def test_missing_workflow_input(env):
    result = CliRunner().invoke(cli.main, ["--token", "t"], env=env)
    assert result.exit_code == 1
    assert "Input required and not supplied: workflow" in result.output


def test_version_option():
    result = CliRunner().invoke(cli.main, ["--version"])
    assert result.exit_code == 0
    assert "1.0.0" in result.output


def test_version_banner_logged_before_input_errors(env):
    result = CliRunner().invoke(cli.main, ["--workflow", "CI", "--token", "t", "--inputs", "{bad json"], env=env)
    assert result.exit_code == 1
    assert "Workflow Dispatch v1.0.0" in result.output


def test_json_null_inputs_forwarded(env, monkeypatch, frozen_clock):
    fake = FakeGitHubClient(
        workflows=[CI],
        run_listings=[[make_run(run_id=7)]],
        run_snapshots=[make_run(run_id=7, status="completed", conclusion="success")],
    )
    monkeypatch.setattr(cli, "GitHubClient", ClientFactory(fake))

    result = CliRunner().invoke(cli.main, ["--workflow", "CI", "--token", "t", "--inputs", "null"], env=env)

    assert result.exit_code == 0, result.output
    assert fake.calls[1] == ("dispatch_workflow", "octo", "home", 11, "refs/heads/main", None)


def test_logging_setup_error_reported_as_failure(env, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    settings = tmp_path / "settings.yaml"
    settings.write_text(f"logging:\n  file: {blocker / 'sub' / 'run.log'}\n", encoding="utf-8")

    result = CliRunner().invoke(
        cli.main, ["--workflow", "CI", "--token", "t", "--config", str(settings)], env=env
    )

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "::error::" in result.output
    assert "Not a directory" in result.output


def test_client_construction_error_reported_as_failure(env, monkeypatch):
    def broken_client(token, api_url, timeout):
        raise RuntimeError("proxy misconfigured")

    monkeypatch.setattr(cli, "GitHubClient", broken_client)
    result = CliRunner().invoke(cli.main, ["--workflow", "CI", "--token", "t"], env=env)

    assert result.exit_code == 1
    assert "::error::proxy misconfigured" in result.output


@pytest.mark.parametrize("debug_env", [{"RUNNER_DEBUG": "1"}, {"ACTIONS_STEP_DEBUG": "true"}])
def test_debug_flag_dumps_workflow_listing(env, monkeypatch, frozen_clock, debug_env):
    fake = FakeGitHubClient(
        workflows=[CI],
        run_listings=[[make_run(run_id=7)]],
        run_snapshots=[make_run(run_id=7, status="completed", conclusion="success")],
    )
    monkeypatch.setattr(cli, "GitHubClient", ClientFactory(fake))
    env.update(debug_env)

    result = CliRunner().invoke(cli.main, ["--workflow", "CI", "--token", "t"], env=env)

    assert result.exit_code == 0, result.output
    start = result.output.index("### START List Workflows response data")
    end = result.output.index("### END:  List Workflows response data")
    assert start < result.output.index('"path": ".github/workflows/ci.yml"') < end
