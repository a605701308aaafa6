"""
Gate Exceptions
===============
Error taxonomy for the gate. Every error the core raises derives from
GateError so the orchestrator can turn it into a failing GateResult.

    MissingNameError       — a run has no name (data integrity)
    RunPayloadError        — the API returned a run we cannot parse
    TransientQueryError    — retries against the API were exhausted
    TimeoutExceededError   — in-flight runs did not clear in time
    GateFailure            — matching runs concluded in a failure status
    ConfigurationError     — required settings missing or malformed
"""
from typing import List, Optional

from await_workflows.models.workflow_run import WorkflowRun


class GateError(Exception):
    """Base class for every gate error."""


class ConfigurationError(GateError):
    pass


class MissingNameError(GateError):
    def __init__(self, runs: List[WorkflowRun]) -> None:
        self.runs = runs
        detail = ", ".join(
            f"id={run.id} sha={run.head_commit} status={run.status_label}" for run in runs
        )
        super().__init__(f"Workflow name not found for run(s): {detail}")


class RunPayloadError(GateError):
    pass


class TransientQueryError(GateError):
    def __init__(self, status: str, attempts: int, last_error: Optional[BaseException]) -> None:
        self.status = status
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"GitHub API query for status '{status}' failed after {attempts} attempts: {last_error}"
        )


class TimeoutExceededError(GateError):
    def __init__(self, timeout: int, retries: int) -> None:
        self.timeout = timeout
        self.retries = retries
        super().__init__(
            f"Timeout of {timeout}s exceeded after {retries} retries "
            "while waiting for workflows to complete."
        )


class GateFailure(GateError):
    def __init__(self, runs: List[WorkflowRun]) -> None:
        self.runs = runs
        self.count = len(runs)
        super().__init__(
            f"{self.count} failed workflow run(s) exist for commit, failing step."
        )
