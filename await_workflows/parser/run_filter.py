"""
Run Filter
==========
Narrows a fetched run list down to the runs this gate cares about.

Steps (in order):
    1. Reject the whole list if any run has no name (MissingNameError)
    2. Drop the run executing the gate itself
    3. Keep runs built from the current commit
    4. Keep runs named in include_names (skipped when the list is empty)
    5. Drop runs named in exclude_names

Pure: the input list is never modified and the same input always yields
the same output.
"""
from typing import List, Sequence

from await_workflows.core.exceptions import MissingNameError
from await_workflows.models.filter_criteria import FilterCriteria
from await_workflows.models.workflow_run import WorkflowRun


def _is_self(run: WorkflowRun, criteria: FilterCriteria) -> bool:
    if criteria.self_id is None:
        return False
    return str(run.id) == str(criteria.self_id)


def filter_runs(runs: Sequence[WorkflowRun], criteria: FilterCriteria) -> List[WorkflowRun]:
    """
    Apply identity and name rules to a run list.

    Parameters
    ----------
    runs : Sequence[WorkflowRun]
        Runs as returned by the query client.
    criteria : FilterCriteria
        Commit, own run id and name allow/deny lists.

    Returns
    -------
    List[WorkflowRun]
        Matching runs, in their original order.

    Raises
    ------
    MissingNameError
        If any run lacks a name, regardless of the other criteria.
    """
    unnamed = [run for run in runs if run.name is None]
    if unnamed:
        raise MissingNameError(unnamed)

    include = set(criteria.include_names)
    exclude = set(criteria.exclude_names)

    matched = [run for run in runs if not _is_self(run, criteria)]
    matched = [run for run in matched if run.head_commit == criteria.current_commit]
    if include:
        matched = [run for run in matched if run.name in include]
    if exclude:
        matched = [run for run in matched if run.name not in exclude]
    return matched
