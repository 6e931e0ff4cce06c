import logging
from typing import List, Optional

import requests
from github import Auth, Github, GithubException

from approvalgate.approvals.types import Review
from approvalgate.config import GITHUB_API_URL, GITHUB_TOKEN, get_http_timeout_seconds
from approvalgate.reporting.status import CommitStatus

logger = logging.getLogger(__name__)


class GitHubClientError(RuntimeError):
    """Base GitHub integration error."""


class GitHubDependencyTimeout(GitHubClientError):
    """Raised when GitHub API calls exceed the configured timeout."""


class GitHubDependencyUnavailable(GitHubClientError):
    """Raised for transport errors talking to GitHub."""


class GitHubClient:
    """
    Reads reviews through PyGithub and writes commit statuses through the
    REST API.
    """

    def __init__(self, token: Optional[str] = None, base_url: Optional[str] = None, timeout: Optional[float] = None):
        self.token = token if token is not None else GITHUB_TOKEN
        self.base_url = (base_url or GITHUB_API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else get_http_timeout_seconds()
        self.headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.token:
            self.headers["Authorization"] = f"Bearer {self.token}"
        self._client: Optional[Github] = None

    @property
    def client(self) -> Github:
        if self._client is None:
            auth = Auth.Token(self.token) if self.token else None
            self._client = Github(auth=auth, base_url=self.base_url, timeout=int(self.timeout))
        return self._client

    def list_reviews(self, repo_full_name: str, pr_number: int) -> List[Review]:
        """
        Fetch every review on the PR (PyGithub follows pagination).
        """
        reviews: List[Review] = []
        try:
            repo = self.client.get_repo(repo_full_name)
            pr = repo.get_pull(int(pr_number))
            for r in pr.get_reviews():
                reviews.append(Review(
                    reviewer=r.user.login if r.user else "",
                    state=r.state or "",
                    submitted_at=r.submitted_at,
                ))
        except GithubException as exc:
            raise GitHubClientError(f"Failed to list reviews for {repo_full_name}#{pr_number}: {exc}") from exc
        logger.info("Fetched %s reviews for %s#%s", len(reviews), repo_full_name, pr_number)
        return reviews

    def create_commit_status(self, repo_full_name: str, sha: str, status: CommitStatus) -> None:
        if not sha:
            raise GitHubClientError("Cannot create commit status without a head SHA")

        path = f"/repos/{repo_full_name}/statuses/{sha}"
        url = f"{self.base_url}{path}"
        try:
            resp = requests.post(url, json=status.to_payload(), headers=self.headers, timeout=self.timeout)
        except requests.Timeout as exc:
            raise GitHubDependencyTimeout(f"GitHub POST {path} timed out after {self.timeout}s") from exc
        except requests.RequestException as exc:
            raise GitHubDependencyUnavailable(f"GitHub POST {path} request failed: {exc}") from exc

        if resp.status_code not in (200, 201):
            raise GitHubClientError(
                f"Failed to create commit status: status_code={resp.status_code} response={resp.text}"
            )
        logger.info("Created commit status on %s@%s: %s", repo_full_name, sha, status.description)
