"""
Logging Config Tests
"""
import logging

import pytest

from await_workflows.utils.logging_config import ActionsFormatter, ColoredFormatter, setup_logging


def _record(level, msg):
    return logging.LogRecord("await_workflows.test", level, __file__, 1, msg, (), None)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_actions_formatter_emits_workflow_commands():
    formatter = ActionsFormatter()

    assert formatter.format(_record(logging.ERROR, "boom")) == "::error::boom"
    assert formatter.format(_record(logging.WARNING, "careful")) == "::warning::careful"
    assert formatter.format(_record(logging.DEBUG, "detail")) == "::debug::detail"
    assert formatter.format(_record(logging.INFO, "* Build: queued")) == "* Build: queued"


def test_actions_formatter_escapes_multiline_messages():
    formatted = ActionsFormatter().format(_record(logging.ERROR, "50% done\nnext"))
    assert formatted == "::error::50%25 done%0Anext"


def test_setup_logging_inside_actions(restore_root_logger):
    setup_logging(level="DEBUG", github_actions=True)

    root = restore_root_logger
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, ActionsFormatter)
    assert logging.getLogger("await_workflows").level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING


def test_setup_logging_locally_with_file(restore_root_logger, tmp_path):
    setup_logging(level=logging.INFO, github_actions=False, log_dir=str(tmp_path / "logs"))

    root = restore_root_logger
    assert isinstance(root.handlers[0].formatter, ColoredFormatter)
    assert isinstance(root.handlers[1], logging.FileHandler)
    assert any(p.name.startswith("await_workflows_") for p in (tmp_path / "logs").iterdir())
    root.handlers[1].close()
