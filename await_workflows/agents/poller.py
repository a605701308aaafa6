"""
Poller
======
Repeats a check on a fixed interval until it clears or the time budget runs
out.

States:
    WAITING — check reported in-flight runs; sleep `interval` and retry
    CLEAR   — check reported nothing in flight (terminal)

Running out of time is not a state: poll() leaves WAITING by raising
TimeoutExceededError, so a returned PollOutcome is always CLEAR.

The timeout is compared against time.time() after every check, never by
counting iterations, so a zero timeout means exactly one check and at most
one check happens past the boundary.
"""
import asyncio
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, List

from await_workflows.core.exceptions import TimeoutExceededError
from await_workflows.models.check_result import CheckResult
from await_workflows.models.poll_config import PollConfig
from await_workflows.models.workflow_run import WorkflowRun

logger = logging.getLogger(__name__)

CheckFn = Callable[[int], Awaitable[CheckResult]]


class PollState(str, Enum):
    WAITING = "waiting"
    CLEAR = "clear"


@dataclass
class PollOutcome:
    state: PollState
    retries: int
    elapsed: float


def log_pending_runs(retries: int, runs: List[WorkflowRun]) -> None:
    """Progress lines for one non-clear check."""
    noun = "workflows" if len(runs) > 1 else "workflow"
    logger.info(
        "Retry #%d - %d %s in progress found. Please, wait until completion "
        "or consider cancelling these workflows manually:",
        retries, len(runs), noun,
    )
    for run in runs:
        logger.info("* %s: %s", run.name, run.status_label)
    logger.info("")


async def poll(config: PollConfig, check: CheckFn) -> PollOutcome:
    """
    Run `check` until it clears.

    Parameters
    ----------
    config : PollConfig
        Only `timeout` and `interval` are used here.
    check : Callable[[int], Awaitable[CheckResult]]
        One observation; receives the current retry number.

    Returns
    -------
    PollOutcome
        Always in the CLEAR state.

    Raises
    ------
    TimeoutExceededError
        If the runs did not clear within `timeout` seconds.
    """
    start_time = time.time()
    retries = 0
    state = PollState.WAITING

    while state == PollState.WAITING:
        result = await check(retries)
        elapsed = time.time() - start_time

        if result.cleared:
            state = PollState.CLEAR
            logger.debug("Poll cleared after %d retries (%.2fs)", retries, elapsed)
            break

        retries += 1
        log_pending_runs(retries, result.pending)

        if elapsed >= config.timeout:
            logger.warning("Timeout of %ds reached after %d retries", config.timeout, retries)
            raise TimeoutExceededError(config.timeout, retries)

        await asyncio.sleep(config.interval)

    return PollOutcome(state=state, retries=retries, elapsed=round(time.time() - start_time, 2))
