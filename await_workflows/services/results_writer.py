"""
Results Writer
==============
Publishes the GateResult to the GitHub Actions runner:

    GITHUB_OUTPUT        — step outputs `status`, `retries` and `message`
    GITHUB_STEP_SUMMARY  — markdown summary shown on the run page

Both files are appended to, as the runner expects. A failed write is logged
and reported as False; it never changes the gate outcome.
"""
import logging
import os
import uuid
from typing import List, Mapping, Optional

from await_workflows.models.gate_result import GateResult

logger = logging.getLogger(__name__)


class ResultsWriter:
    """
    Writes step outputs and the job summary for one gate result.
    """

    @staticmethod
    def format_outputs(result: GateResult) -> str:
        # Multiline values use the runner's heredoc syntax
        delimiter = f"ghadelimiter_{uuid.uuid4().hex}"
        lines = [
            f"status={result.status.value}",
            f"retries={result.retries}",
            f"message<<{delimiter}",
            result.message,
            delimiter,
        ]
        return "\n".join(lines) + "\n"

    @staticmethod
    def format_summary(result: GateResult) -> str:
        icon = "✅" if result.success else "❌"
        lines: List[str] = [
            f"### {icon} Await workflows",
            "",
            f"**Outcome:** `{result.status.value}` | **Retries:** {result.retries}",
            "",
            result.message,
            "",
        ]

        if result.failed_runs:
            lines.append("| Workflow | Run | Trigger | Conclusion | Status |")
            lines.append("|---|---|---|---|---|")
            for run in result.failed_runs:
                label = f"#{run.run_number}" if run.run_number else str(run.id)
                run_link = f"[{label}]({run.detail_url})" if run.detail_url else label
                trigger = " on ".join(part for part in (run.event, run.head_branch) if part) or "-"
                lines.append(
                    f"| {run.name} | {run_link} | {trigger} | {run.conclusion or '-'} | {run.status_label} |"
                )
            lines.append("")

        return "\n".join(lines)

    @staticmethod
    def _append(path: str, content: str) -> bool:
        try:
            with open(path, "a", encoding="utf-8") as f:
                f.write(content)
            return True
        except OSError as e:
            logger.error("Failed to write %s: %s", path, e)
            return False

    @classmethod
    def write_results(cls, result: GateResult, environ: Optional[Mapping[str, str]] = None) -> bool:
        """
        Append outputs and summary to the files the runner provides.

        Returns False if any configured file could not be written.
        """
        if environ is None:
            environ = os.environ

        ok = True
        output_path = environ.get("GITHUB_OUTPUT")
        if output_path:
            logger.debug("Writing step outputs to %s", output_path)
            ok = cls._append(output_path, cls.format_outputs(result)) and ok

        summary_path = environ.get("GITHUB_STEP_SUMMARY")
        if summary_path:
            logger.debug("Writing job summary to %s", summary_path)
            ok = cls._append(summary_path, cls.format_summary(result)) and ok

        return ok
