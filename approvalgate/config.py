import os
from dotenv import load_dotenv

# Load params from .env file
load_dotenv()

GITHUB_TOKEN = os.getenv("GITHUB_TOKEN", "")
GITHUB_API_URL = os.getenv("GITHUB_API_URL", "https://api.github.com").rstrip("/")

DEFAULT_STATUS_CONTEXT = "PR Approval Check"


def _env_bool(name: str, default: bool) -> bool:
    raw = str(os.getenv(name, "true" if default else "false")).strip().lower()
    return raw in {"1", "true", "yes", "on"}


def get_status_context() -> str:
    return str(os.getenv("APPROVALGATE_STATUS_CONTEXT", DEFAULT_STATUS_CONTEXT)).strip() or DEFAULT_STATUS_CONTEXT


def is_strict_conditions() -> bool:
    """
    Fail on condition names that are not registered.
    Defaults to disabled so new condition types can roll out without
    breaking rules evaluated by older deployments.
    """
    return _env_bool("APPROVALGATE_STRICT_CONDITIONS", False)


def get_http_timeout_seconds() -> float:
    return float(os.getenv("APPROVALGATE_HTTP_TIMEOUT_SECONDS", "10"))


def get_webhook_secret() -> str:
    return os.getenv("GITHUB_WEBHOOK_SECRET", "")


def get_rules_source() -> tuple:
    """
    Returns (inline_json, file_path) for the webhook listener's rule set.
    """
    return os.getenv("APPROVALGATE_RULES", ""), os.getenv("APPROVALGATE_RULES_FILE", "")
