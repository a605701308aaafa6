"""
Constants
Centralised storage for GitHub API settings, status groups and gate defaults.
"""
from await_workflows.models.workflow_run import WorkflowStatus

GITHUB_API_URL = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"
USER_AGENT = "await-workflows-gate"
RUNS_PER_PAGE = 100
MAX_RUN_PAGES = 50
HTTP_TIMEOUT_SECONDS = 20.0

# Attempts per page request inside one fetch
MAX_QUERY_ATTEMPTS = 3

# Statuses queried while waiting, and during the verify phase
IN_FLIGHT_STATUSES = (WorkflowStatus.QUEUED, WorkflowStatus.IN_PROGRESS)
FAILURE_STATUSES = (
    WorkflowStatus.CANCELLED,
    WorkflowStatus.TIMED_OUT,
    WorkflowStatus.FAILURE,
)

DEFAULT_TIMEOUT = 600
DEFAULT_INTERVAL = 10
DEFAULT_INITIAL_DELAY = 0
