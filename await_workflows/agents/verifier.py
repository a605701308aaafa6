"""
Failure Verifier
================
Runs after the waiting phase when require_success is set: any matching run
that ended cancelled, timed out or failed fails the gate.
"""
import logging

from await_workflows.core.constants import FAILURE_STATUSES
from await_workflows.core.exceptions import GateFailure
from await_workflows.models.filter_criteria import FilterCriteria
from await_workflows.parser.run_filter import filter_runs
from await_workflows.services.github_client import RunQueryClient

logger = logging.getLogger(__name__)


class FailureVerifier:
    """Checks that no matching run concluded in a failure-class status."""

    def __init__(self, client: RunQueryClient) -> None:
        self.client = client

    async def verify(self, criteria: FilterCriteria) -> None:
        """Raise GateFailure if failed runs exist for the current commit."""
        runs = await self.client.fetch_runs(FAILURE_STATUSES)
        failed = filter_runs(runs, criteria)

        if not failed:
            logger.info("No failed workflows found for commit %s", criteria.current_commit)
            return

        for run in failed:
            created = run.created_at.isoformat() if run.created_at else "unknown time"
            logger.error(
                "Workflow %s, run id: %s (%s) failed with conclusion: %s and status of %s, See: %s",
                run.name, run.id, created, run.conclusion, run.status_label, run.detail_url,
            )
        raise GateFailure(failed)
