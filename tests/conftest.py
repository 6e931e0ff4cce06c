import os

import pytest


def pytest_configure(config):
    os.environ.setdefault("APPROVALGATE_LOG_FORMAT", "text")
    os.environ.setdefault("APPROVALGATE_LOG_LEVEL", "WARNING")
    os.environ.setdefault("GITHUB_TOKEN", "test-token")


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    for name in (
        "APPROVALGATE_STRICT_CONDITIONS",
        "APPROVALGATE_STATUS_CONTEXT",
        "APPROVALGATE_RULES",
        "APPROVALGATE_RULES_FILE",
        "GITHUB_WEBHOOK_SECRET",
    ):
        monkeypatch.delenv(name, raising=False)
    yield
