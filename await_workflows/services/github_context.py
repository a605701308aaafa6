"""
GitHub Context
==============
Resolves who and where the gate is running from the GitHub Actions runner
environment.

    GITHUB_REPOSITORY  — "owner/repo" the runs are listed for
    GITHUB_SHA         — commit that triggered the workflow
    GITHUB_EVENT_PATH  — JSON payload of the triggering event
    GITHUB_RUN_ID      — id of the run executing the gate (excluded from waits)

Commit resolution:
    pull_request events  → payload.pull_request.head.sha
    workflow_run events  → payload.workflow_run.head_sha
    anything else        → GITHUB_SHA
"""
import json
import logging
import os
from typing import Any, Dict, Optional, Tuple, Union

from await_workflows.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def load_event_payload(event_path: Optional[str]) -> Dict[str, Any]:
    """Read the triggering event payload; empty when the file is absent."""
    if not event_path or not os.path.exists(event_path):
        return {}

    try:
        with open(event_path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Could not read event payload {event_path}: {exc}") from exc

    if not isinstance(payload, dict):
        raise ConfigurationError(f"Event payload {event_path} must be a JSON object")
    return payload


def resolve_current_sha(payload: Dict[str, Any], default_sha: Optional[str]) -> str:
    """Pick the commit the gate evaluates, preferring the PR head."""
    pull_request = payload.get("pull_request")
    if pull_request:
        sha = (pull_request.get("head") or {}).get("sha")
        if sha:
            logger.debug("Using pull request head commit %s", sha)
            return sha

    workflow_run = payload.get("workflow_run")
    if workflow_run and workflow_run.get("head_sha"):
        logger.debug("Using workflow_run head commit %s", workflow_run["head_sha"])
        return workflow_run["head_sha"]

    if not default_sha:
        raise ConfigurationError("Unable to resolve the current commit (GITHUB_SHA is not set)")
    return default_sha


def resolve_self_run_id(raw: Optional[str]) -> Optional[Union[int, str]]:
    """Normalise GITHUB_RUN_ID to an int when numeric."""
    if not raw:
        return None
    raw = raw.strip()
    return int(raw) if raw.isdigit() else raw


def split_repository(repository: Optional[str]) -> Tuple[str, str]:
    """Split "owner/repo" into its two parts."""
    if not repository:
        raise ConfigurationError("GITHUB_REPOSITORY is not set")

    owner, sep, name = repository.strip().partition("/")
    if not sep or not owner or not name or "/" in name:
        raise ConfigurationError(f"GITHUB_REPOSITORY must look like 'owner/repo', got '{repository}'")
    return owner, name
