from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
import requests
from github import GithubException

from approvalgate.integrations.github import (
    GitHubClient,
    GitHubClientError,
    GitHubDependencyTimeout,
    GitHubDependencyUnavailable,
)
from approvalgate.reporting.status import CommitStatus

STATUS = CommitStatus(state="success", description="Approved (2/2)")


def _client() -> GitHubClient:
    return GitHubClient(token="test-token", base_url="https://api.github.test", timeout=3)


def test_list_reviews_normalizes_pygithub_reviews():
    client = _client()
    submitted = datetime(2024, 1, 1, 10, tzinfo=timezone.utc)
    pr = MagicMock()
    pr.get_reviews.return_value = [
        SimpleNamespace(user=SimpleNamespace(login="alice"), state="APPROVED", submitted_at=submitted),
        SimpleNamespace(user=None, state="COMMENTED", submitted_at=None),
    ]
    gh = MagicMock()
    gh.get_repo.return_value.get_pull.return_value = pr
    client._client = gh

    reviews = client.list_reviews("o/r", 5)

    gh.get_repo.assert_called_once_with("o/r")
    gh.get_repo.return_value.get_pull.assert_called_once_with(5)
    assert reviews[0].reviewer == "alice"
    assert reviews[0].submitted_at == submitted
    assert reviews[1].reviewer == ""
    assert reviews[1].submitted_at is None


def test_list_reviews_wraps_github_errors():
    client = _client()
    gh = MagicMock()
    gh.get_repo.side_effect = GithubException(404, {"message": "Not Found"}, None)
    client._client = gh

    with pytest.raises(GitHubClientError):
        client.list_reviews("o/missing", 1)


def test_create_commit_status_posts_to_statuses_endpoint():
    client = _client()
    with patch("approvalgate.integrations.github.requests.post") as post:
        post.return_value = MagicMock(status_code=201, text="")
        client.create_commit_status("o/r", "abc123", STATUS)

    post.assert_called_once()
    args, kwargs = post.call_args
    assert args[0] == "https://api.github.test/repos/o/r/statuses/abc123"
    assert kwargs["json"] == {"state": "success", "description": "Approved (2/2)", "context": "PR Approval Check"}
    assert kwargs["headers"]["Authorization"] == "Bearer test-token"
    assert kwargs["timeout"] == 3


def test_create_commit_status_raises_on_error_response():
    client = _client()
    with patch("approvalgate.integrations.github.requests.post") as post:
        post.return_value = MagicMock(status_code=422, text="Validation Failed")
        with pytest.raises(GitHubClientError, match="status_code=422"):
            client.create_commit_status("o/r", "abc123", STATUS)


@pytest.mark.parametrize(
    "exc,expected",
    [
        (requests.Timeout("slow"), GitHubDependencyTimeout),
        (requests.ConnectionError("down"), GitHubDependencyUnavailable),
    ],
)
def test_create_commit_status_maps_transport_errors(exc, expected):
    client = _client()
    with patch("approvalgate.integrations.github.requests.post", side_effect=exc):
        with pytest.raises(expected):
            client.create_commit_status("o/r", "abc123", STATUS)


def test_create_commit_status_requires_sha():
    with pytest.raises(GitHubClientError):
        _client().create_commit_status("o/r", "", STATUS)
