"""
Configuration
=============
Builds the gate configuration from the GitHub Actions environment, with a
.env file (python-dotenv) as a fallback for local runs.

Environment Variables:
    INPUT_TIMEOUT            — seconds to wait for in-flight runs (default: 600)
    INPUT_INTERVAL           — seconds between two checks (default: 10)
    INPUT_INITIAL_DELAY      — seconds to sleep before the first check (default: 0)
    INPUT_REQUIRE_SUCCESS    — "true" to fail on failed/cancelled/timed out runs
    INPUT_WORKFLOWS          — workflow names to wait for, one per line
    INPUT_EXCLUDEDWORKFLOWS  — workflow names to ignore, one per line
    INPUT_ACCESS_TOKEN       — API token (falls back to GITHUB_TOKEN)
    GITHUB_REPOSITORY        — "owner/repo"
    GITHUB_API_URL           — API base URL (GitHub Enterprise Server)
    AWAIT_WORKFLOWS_LOG_LEVEL — logging level name (default: INFO)

The runner's identity variables (GITHUB_SHA, GITHUB_EVENT_PATH,
GITHUB_RUN_ID) are resolved through services.github_context.

Precedence:
    CLI overrides → process environment → .env file.
    The configuration is built once and passed explicitly to the
    orchestrator; nothing in the core reads the environment afterwards.
"""
import logging
import os
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from await_workflows.core.constants import (
    DEFAULT_INITIAL_DELAY,
    DEFAULT_INTERVAL,
    DEFAULT_TIMEOUT,
    GITHUB_API_URL,
)
from await_workflows.core.exceptions import ConfigurationError
from await_workflows.models.filter_criteria import FilterCriteria
from await_workflows.models.poll_config import PollConfig
from await_workflows.services.github_context import (
    load_event_payload,
    resolve_current_sha,
    resolve_self_run_id,
    split_repository,
)

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"true"}


def _get_input(env: Mapping[str, str], key: str) -> str:
    return (env.get(key) or "").strip()


def _get_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = _get_input(env, key)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be an integer, got '{raw}'") from exc


def _get_bool(env: Mapping[str, str], key: str) -> bool:
    return _get_input(env, key).lower() in _TRUE_VALUES


def parse_multiline(raw: Optional[str]) -> List[str]:
    """Split a multiline input into trimmed, non-empty entries."""
    if not raw:
        return []
    return [line.strip() for line in raw.splitlines() if line.strip()]


class GateConfig(BaseModel):
    """Everything one gate invocation needs, resolved up front."""

    model_config = ConfigDict(frozen=True)

    access_token: str = Field(repr=False)
    owner: str
    repo: str
    api_url: str = GITHUB_API_URL
    current_commit: str
    self_id: Optional[Union[int, str]] = None
    include_names: Tuple[str, ...] = ()
    exclude_names: Tuple[str, ...] = ()
    poll: PollConfig = PollConfig()
    log_level: str = "INFO"

    @property
    def repository(self) -> str:
        return f"{self.owner}/{self.repo}"

    @property
    def criteria(self) -> FilterCriteria:
        return FilterCriteria(
            current_commit=self.current_commit,
            self_id=self.self_id,
            include_names=self.include_names,
            exclude_names=self.exclude_names,
        )

    def describe(self) -> str:
        """One-line configuration summary; never includes the token."""
        poll = self.poll
        parts = [
            "Action configuration:",
            f"{poll.initial_delay}s initial delay,",
            f"{poll.interval}s interval,",
            f"{poll.timeout}s timeout,",
            f"require success: {str(poll.require_success).lower()}",
        ]
        if self.include_names:
            parts.append(f"| workflows: {', '.join(self.include_names)}")
        if self.exclude_names:
            parts.append(f"| excluded: {', '.join(self.exclude_names)}")
        return " ".join(parts)

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> "GateConfig":
        """
        Load configuration from environment variables.

        Parameters
        ----------
        environ : Mapping[str, str], optional
            Variables to read. Defaults to os.environ after loading .env.
        overrides : dict, optional
            Values from the command line; None entries are ignored.
        """
        if environ is None:
            load_dotenv()
            environ = os.environ
        overrides = {k: v for k, v in (overrides or {}).items() if v is not None}

        token = _get_input(environ, "INPUT_ACCESS_TOKEN") or _get_input(environ, "GITHUB_TOKEN")
        if not token:
            raise ConfigurationError("An access token is required (INPUT_ACCESS_TOKEN or GITHUB_TOKEN)")

        owner, repo = split_repository(environ.get("GITHUB_REPOSITORY"))
        payload = load_event_payload(environ.get("GITHUB_EVENT_PATH"))
        current_commit = resolve_current_sha(payload, environ.get("GITHUB_SHA"))

        poll = PollConfig(
            timeout=overrides.get("timeout", _get_int(environ, "INPUT_TIMEOUT", DEFAULT_TIMEOUT)),
            interval=overrides.get("interval", _get_int(environ, "INPUT_INTERVAL", DEFAULT_INTERVAL)),
            initial_delay=overrides.get(
                "initial_delay", _get_int(environ, "INPUT_INITIAL_DELAY", DEFAULT_INITIAL_DELAY)
            ),
            require_success=overrides.get(
                "require_success", _get_bool(environ, "INPUT_REQUIRE_SUCCESS")
            ),
        )

        include = overrides.get("include_names") or parse_multiline(environ.get("INPUT_WORKFLOWS"))
        exclude = overrides.get("exclude_names") or parse_multiline(
            environ.get("INPUT_EXCLUDEDWORKFLOWS")
        )

        log_level = overrides.get(
            "log_level", _get_input(environ, "AWAIT_WORKFLOWS_LOG_LEVEL") or "INFO"
        ).upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ConfigurationError(
                f"AWAIT_WORKFLOWS_LOG_LEVEL must be a logging level name, got '{log_level}'"
            )

        return cls(
            access_token=token,
            owner=owner,
            repo=repo,
            api_url=(_get_input(environ, "GITHUB_API_URL") or GITHUB_API_URL).rstrip("/"),
            current_commit=current_commit,
            self_id=resolve_self_run_id(environ.get("GITHUB_RUN_ID")),
            include_names=tuple(include),
            exclude_names=tuple(exclude),
            poll=poll,
            log_level=log_level,
        )
