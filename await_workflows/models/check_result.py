"""
Check Result Model
Outcome of one observation made by the poller's check.
"""
from typing import List

from pydantic import BaseModel

from await_workflows.models.workflow_run import WorkflowRun


class CheckResult(BaseModel):
    pending: List[WorkflowRun] = []

    @property
    def cleared(self) -> bool:
        return not self.pending
