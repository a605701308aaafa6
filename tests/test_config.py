"""
Configuration Tests
===================
GateConfig.from_env with explicit environment mappings (no .env loading).
"""
import json
from unittest.mock import patch

import pytest

from await_workflows.core.config import GateConfig, parse_multiline
from await_workflows.core.exceptions import ConfigurationError


@pytest.fixture
def env():
    return {
        "INPUT_ACCESS_TOKEN": "secret-token",
        "GITHUB_REPOSITORY": "octo/widgets",
        "GITHUB_SHA": "sha-push",
        "GITHUB_RUN_ID": "4242",
    }


def test_defaults(env):
    config = GateConfig.from_env(env)

    assert config.owner == "octo"
    assert config.repo == "widgets"
    assert config.repository == "octo/widgets"
    assert config.api_url == "https://api.github.com"
    assert config.current_commit == "sha-push"
    assert config.self_id == 4242
    assert config.poll.timeout == 600
    assert config.poll.interval == 10
    assert config.poll.initial_delay == 0
    assert config.poll.require_success is False
    assert config.include_names == ()
    assert config.exclude_names == ()
    assert config.log_level == "INFO"


def test_inputs_are_read(env):
    env.update({
        "INPUT_TIMEOUT": "120",
        "INPUT_INTERVAL": " 15 ",
        "INPUT_INITIAL_DELAY": "3",
        "INPUT_REQUIRE_SUCCESS": "TRUE",
        "INPUT_WORKFLOWS": "Build\n  Lint  \n\n",
        "INPUT_EXCLUDEDWORKFLOWS": "Deploy",
        "GITHUB_API_URL": "https://ghe.example.com/api/v3/",
        "AWAIT_WORKFLOWS_LOG_LEVEL": "debug",
    })

    config = GateConfig.from_env(env)

    assert config.poll.timeout == 120
    assert config.poll.interval == 15
    assert config.poll.initial_delay == 3
    assert config.poll.require_success is True
    assert config.include_names == ("Build", "Lint")
    assert config.exclude_names == ("Deploy",)
    assert config.api_url == "https://ghe.example.com/api/v3"
    assert config.log_level == "DEBUG"


@pytest.mark.parametrize("raw", ["false", "", "yes", "1"])
def test_require_success_only_true_enables(env, raw):
    env["INPUT_REQUIRE_SUCCESS"] = raw
    assert GateConfig.from_env(env).poll.require_success is False


def test_overrides_win_over_environment(env):
    env["INPUT_TIMEOUT"] = "120"
    env["INPUT_WORKFLOWS"] = "Build"

    config = GateConfig.from_env(env, overrides={
        "timeout": 30,
        "interval": None,
        "include_names": ["Tests"],
        "require_success": True,
    })

    assert config.poll.timeout == 30
    assert config.poll.interval == 10
    assert config.include_names == ("Tests",)
    assert config.poll.require_success is True


def test_negative_durations_are_clamped(env):
    env["INPUT_TIMEOUT"] = "-5"
    env["INPUT_INITIAL_DELAY"] = "-1"

    config = GateConfig.from_env(env)

    assert config.poll.timeout == 0
    assert config.poll.initial_delay == 0


def test_github_token_fallback(env):
    del env["INPUT_ACCESS_TOKEN"]
    env["GITHUB_TOKEN"] = "fallback-token"
    assert GateConfig.from_env(env).access_token == "fallback-token"


def test_missing_token_raises(env):
    del env["INPUT_ACCESS_TOKEN"]
    with pytest.raises(ConfigurationError, match="access token"):
        GateConfig.from_env(env)


def test_non_integer_input_raises(env):
    env["INPUT_TIMEOUT"] = "ten"
    with pytest.raises(ConfigurationError, match="INPUT_TIMEOUT"):
        GateConfig.from_env(env)


def test_unknown_log_level_raises(env):
    env["AWAIT_WORKFLOWS_LOG_LEVEL"] = "verbose"
    with pytest.raises(ConfigurationError, match="AWAIT_WORKFLOWS_LOG_LEVEL"):
        GateConfig.from_env(env)


def test_log_level_is_normalised(env):
    env["AWAIT_WORKFLOWS_LOG_LEVEL"] = "debug"
    assert GateConfig.from_env(env).log_level == "DEBUG"


def test_commit_comes_from_pull_request_payload(env, tmp_path):
    event = tmp_path / "event.json"
    event.write_text(json.dumps({"pull_request": {"head": {"sha": "sha-pr-head"}}}))
    env["GITHUB_EVENT_PATH"] = str(event)

    assert GateConfig.from_env(env).current_commit == "sha-pr-head"


def test_token_is_not_exposed(env):
    config = GateConfig.from_env(env)
    assert "secret-token" not in repr(config)
    assert "secret-token" not in config.describe()


def test_describe_summarises_settings(env):
    env["INPUT_WORKFLOWS"] = "Build\nLint"
    summary = GateConfig.from_env(env).describe()

    assert summary.startswith("Action configuration: 0s initial delay, 10s interval, 600s timeout,")
    assert "require success: false" in summary
    assert "workflows: Build, Lint" in summary


def test_criteria_mirror_config(env):
    env["INPUT_EXCLUDEDWORKFLOWS"] = "Deploy"
    criteria = GateConfig.from_env(env).criteria

    assert criteria.current_commit == "sha-push"
    assert criteria.self_id == 4242
    assert criteria.exclude_names == ("Deploy",)


def test_dotenv_loaded_only_for_process_environment(env):
    with patch("await_workflows.core.config.load_dotenv") as mock_load:
        GateConfig.from_env(env)
        mock_load.assert_not_called()

    with patch("await_workflows.core.config.load_dotenv") as mock_load, \
         patch.dict("os.environ", env, clear=True):
        GateConfig.from_env()
        mock_load.assert_called_once()


def test_parse_multiline():
    assert parse_multiline(None) == []
    assert parse_multiline("") == []
    assert parse_multiline(" A \r\nB\n\n  \nC") == ["A", "B", "C"]
