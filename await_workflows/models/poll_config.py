"""
Poll Config Model
=================
Timing settings for one gate invocation, all in whole seconds.

Fields:
    timeout          — wall-clock budget for the waiting phase
    interval         — pause between two checks
    initial_delay    — pause before the first check
    require_success  — run the failure verification after waiting

Negative durations are clamped to zero: zero initial_delay means no wait,
zero timeout means a single check.
"""
from pydantic import BaseModel, ConfigDict, field_validator

from await_workflows.core.constants import (
    DEFAULT_INITIAL_DELAY,
    DEFAULT_INTERVAL,
    DEFAULT_TIMEOUT,
)


class PollConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    timeout: int = DEFAULT_TIMEOUT
    interval: int = DEFAULT_INTERVAL
    initial_delay: int = DEFAULT_INITIAL_DELAY
    require_success: bool = False

    @field_validator("timeout", "interval", "initial_delay")
    @classmethod
    def _clamp_non_negative(cls, value: int) -> int:
        return max(0, value)
