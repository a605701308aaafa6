"""
Results Writer Tests
====================
Step outputs and job summary written for the GitHub Actions runner.
"""
from await_workflows.models.gate_result import GateResult, GateStatus
from await_workflows.models.workflow_run import WorkflowRun
from await_workflows.services.results_writer import ResultsWriter


def _failed_result():
    run = WorkflowRun(
        id=8, name="Tests", status="failure", head_sha="sha", conclusion="failure",
        html_url="https://github.com/o/r/actions/runs/8", run_number=41,
        event="push", head_branch="main",
    )
    return GateResult(
        status=GateStatus.WORKFLOWS_FAILED,
        message="1 failed workflow run(s) exist for commit, failing step.",
        retries=2,
        failed_runs=[run],
    )


def test_outputs_written_to_github_output(tmp_path):
    output = tmp_path / "output.txt"
    output.write_text("existing=1\n")
    result = GateResult(status=GateStatus.WORKFLOWS_AWAITED_OK, message="done", retries=4)

    assert ResultsWriter.write_results(result, {"GITHUB_OUTPUT": str(output)}) is True

    lines = output.read_text().splitlines()
    assert lines[0] == "existing=1"
    assert "status=workflows_awaited_ok" in lines
    assert "retries=4" in lines
    message_start = next(i for i, line in enumerate(lines) if line.startswith("message<<"))
    delimiter = lines[message_start].split("<<", 1)[1]
    assert lines[message_start + 1] == "done"
    assert lines[message_start + 2] == delimiter


def test_timeout_status_output(tmp_path):
    output = tmp_path / "output.txt"
    result = GateResult(status=GateStatus.TIMEOUT_EXCEEDED, message="Timeout of 10s exceeded")

    ResultsWriter.write_results(result, {"GITHUB_OUTPUT": str(output)})

    assert "status=action_timeout_exceeded" in output.read_text().splitlines()


def test_summary_lists_failed_runs(tmp_path):
    summary = tmp_path / "summary.md"

    ResultsWriter.write_results(_failed_result(), {"GITHUB_STEP_SUMMARY": str(summary)})

    content = summary.read_text()
    assert "`workflows_failed`" in content
    assert "**Retries:** 2" in content
    assert "| Tests | [#41](https://github.com/o/r/actions/runs/8) | push on main | failure | failure |" in content


def test_nothing_written_without_runner_files(tmp_path):
    result = GateResult(status=GateStatus.WORKFLOWS_AWAITED_OK)
    assert ResultsWriter.write_results(result, {}) is True
    assert list(tmp_path.iterdir()) == []


def test_write_failure_is_reported_not_raised(tmp_path):
    missing_dir = tmp_path / "missing" / "output.txt"
    result = GateResult(status=GateStatus.WORKFLOWS_AWAITED_OK)

    assert ResultsWriter.write_results(result, {"GITHUB_OUTPUT": str(missing_dir)}) is False
