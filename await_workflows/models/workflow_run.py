"""
Workflow Run Model
==================
Pydantic model for a single GitHub Actions workflow run, plus the shared
status enumeration.

Raw API payloads are parsed into these types exactly once, inside the
query client. Field aliases map the GitHub names onto ours:

    head_sha  -> head_commit
    html_url  -> detail_url

`name` is allowed to be missing at parse time so that the run filter can
report it as a data-integrity error instead of the run disappearing.
"""
from datetime import datetime
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class WorkflowStatus(str, Enum):
    # In-flight
    QUEUED = "queued"
    IN_PROGRESS = "in_progress"
    WAITING = "waiting"
    REQUESTED = "requested"
    ACTION_REQUIRED = "action_required"
    PENDING = "pending"
    # Terminal
    COMPLETED = "completed"
    SUCCESS = "success"
    FAILURE = "failure"
    CANCELLED = "cancelled"
    TIMED_OUT = "timed_out"
    NEUTRAL = "neutral"
    SKIPPED = "skipped"
    STALE = "stale"

    @property
    def is_in_flight(self) -> bool:
        return self in _IN_FLIGHT


_IN_FLIGHT = frozenset({
    WorkflowStatus.QUEUED,
    WorkflowStatus.IN_PROGRESS,
    WorkflowStatus.WAITING,
    WorkflowStatus.REQUESTED,
    WorkflowStatus.ACTION_REQUIRED,
    WorkflowStatus.PENDING,
})


class WorkflowRun(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Union[int, str]
    name: Optional[str] = None
    status: Optional[WorkflowStatus] = None
    head_commit: str = Field(alias="head_sha")
    conclusion: Optional[str] = None
    created_at: Optional[datetime] = None
    detail_url: str = Field(default="", alias="html_url")

    # Informational, only rendered in the job summary
    run_number: Optional[int] = None
    event: Optional[str] = None
    head_branch: Optional[str] = None

    @property
    def status_label(self) -> str:
        return self.status.value if self.status else "unknown"
