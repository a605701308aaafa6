"""
Gate Orchestrator
=================
Sequences one gate invocation:

    initial delay → poll until no matching run is in flight → verify (optional)

and turns the terminal state into a GateResult:

    all clear                → workflows_awaited_ok
    TimeoutExceededError     → action_timeout_exceeded
    any other GateError      → workflows_failed (message of the original error)

The message of the originating error is carried into the result and logged
by the caller. Exceptions outside GateError propagate.
"""
import asyncio
import logging
from typing import Optional

from await_workflows.agents.poller import poll
from await_workflows.agents.verifier import FailureVerifier
from await_workflows.core.config import GateConfig
from await_workflows.core.constants import IN_FLIGHT_STATUSES
from await_workflows.core.exceptions import GateError, GateFailure, TimeoutExceededError
from await_workflows.models.check_result import CheckResult
from await_workflows.models.filter_criteria import FilterCriteria
from await_workflows.models.gate_result import GateResult, GateStatus
from await_workflows.parser.run_filter import filter_runs
from await_workflows.services.github_client import RunQueryClient

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Previous GitHub workflows completed. Resuming..."


class GateOrchestrator:
    """
    Drives the wait-then-verify gate for the commit described by `config`.
    """

    def __init__(self, config: GateConfig, client: Optional[RunQueryClient] = None) -> None:
        self.config = config
        self._client = client

    def _build_client(self) -> RunQueryClient:
        return RunQueryClient(
            token=self.config.access_token,
            owner=self.config.owner,
            repo=self.config.repo,
            api_url=self.config.api_url,
            head_sha=self.config.current_commit,
        )

    @staticmethod
    async def check_in_flight(client: RunQueryClient, criteria: FilterCriteria) -> CheckResult:
        """Matching runs that are still queued or in progress."""
        runs = await client.fetch_runs(IN_FLIGHT_STATUSES)
        matched = filter_runs(runs, criteria)
        # A run can finish between the status query and now
        pending = [run for run in matched if run.status is None or run.status.is_in_flight]
        logger.debug("%d fetched, %d matching in-flight run(s)", len(runs), len(pending))
        return CheckResult(pending=pending)

    async def run(self) -> GateResult:
        """Execute the gate and report its outcome."""
        poll_config = self.config.poll
        criteria = self.config.criteria
        client = self._client or self._build_client()
        retries = 0

        logger.info(
            "Awaiting workflows on %s for commit %s", self.config.repository, criteria.current_commit
        )

        try:
            if poll_config.initial_delay > 0:
                logger.info("Initial delay: sleeping %ds", poll_config.initial_delay)
                await asyncio.sleep(poll_config.initial_delay)

            async def check(_retries: int) -> CheckResult:
                return await self.check_in_flight(client, criteria)

            outcome = await poll(poll_config, check)
            retries = outcome.retries

            if poll_config.require_success:
                await FailureVerifier(client).verify(criteria)

        except TimeoutExceededError as exc:
            return GateResult(status=GateStatus.TIMEOUT_EXCEEDED, message=str(exc), retries=exc.retries)
        except GateFailure as exc:
            return GateResult(
                status=GateStatus.WORKFLOWS_FAILED,
                message=str(exc),
                retries=retries,
                failed_runs=exc.runs,
            )
        except GateError as exc:
            return GateResult(status=GateStatus.WORKFLOWS_FAILED, message=str(exc), retries=retries)
        finally:
            if self._client is None:
                await client.aclose()

        return GateResult(status=GateStatus.WORKFLOWS_AWAITED_OK, message=SUCCESS_MESSAGE, retries=retries)
