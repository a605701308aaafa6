"""
Gate Result Model
=================
Terminal outcome of one gate invocation, as reported to the step outputs.

Fields:
    status   — workflows_awaited_ok | action_timeout_exceeded | workflows_failed
    message  — human-readable summary (error text on failure)
    retries  — poll retries performed before the terminal state
    failed_runs — runs that concluded in a failure status (verify phase only)
"""
from enum import Enum
from typing import List

from pydantic import BaseModel

from await_workflows.models.workflow_run import WorkflowRun


class GateStatus(str, Enum):
    WORKFLOWS_AWAITED_OK = "workflows_awaited_ok"
    TIMEOUT_EXCEEDED = "action_timeout_exceeded"
    WORKFLOWS_FAILED = "workflows_failed"


class GateResult(BaseModel):
    status: GateStatus
    message: str = ""
    retries: int = 0
    failed_runs: List[WorkflowRun] = []

    @property
    def success(self) -> bool:
        return self.status == GateStatus.WORKFLOWS_AWAITED_OK
