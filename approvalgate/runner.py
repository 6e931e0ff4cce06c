"""
Approval check orchestration: event -> reviews -> first applicable rule
-> commit status.
"""
import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol, Sequence

from approvalgate.approvals.types import ApprovalRule, Review, ValidationResult
from approvalgate.approvals.validator import find_applicable_result
from approvalgate.config import DEFAULT_STATUS_CONTEXT
from approvalgate.context.builder import parse_event, pull_request_ref
from approvalgate.errors import InvalidEventError
from approvalgate.reporting.status import CommitStatus, build_commit_status

logger = logging.getLogger(__name__)


class ApprovalCheckClient(Protocol):
    def list_reviews(self, repo_full_name: str, pr_number: int) -> Sequence[Review]:
        ...

    def create_commit_status(self, repo_full_name: str, sha: str, status: CommitStatus) -> None:
        ...


@dataclass(frozen=True)
class CheckOutcome:
    pr_number: int
    head_sha: str
    result: Optional[ValidationResult] = None
    status: Optional[CommitStatus] = None
    posted: bool = False

    @property
    def rule_name(self) -> Optional[str]:
        return self.result.rule.name if self.result is not None else None


def run_approval_check(
    *,
    repo: str,
    event_name: str,
    event_payload: Any,
    rules: Sequence[ApprovalRule],
    client: ApprovalCheckClient,
    strict: bool = False,
    status_context: str = DEFAULT_STATUS_CONTEXT,
    dry_run: bool = False,
) -> CheckOutcome:
    payload = parse_event(event_name, event_payload)

    ref = pull_request_ref(payload)
    if ref.number is None:
        raise InvalidEventError("Pull request number missing from event payload")
    log_fields = {"event": event_name, "repo": repo, "pr_number": ref.number}
    logger.info("Checking approvals at head %s", ref.head_sha or "<unknown>", extra=log_fields)

    reviews = list(client.list_reviews(repo, ref.number))
    result = find_applicable_result(rules, reviews, payload, strict=strict)
    if result is None:
        logger.info("No applicable approval rule found", extra=log_fields)
        return CheckOutcome(pr_number=ref.number, head_sha=ref.head_sha)

    status = build_commit_status(result, context=status_context)
    logger.info(
        "Applicable rule: %s",
        result.rule.name,
        extra={
            **log_fields,
            "rule": result.rule.name,
            "approved": result.approved,
            "approval_count": result.approval_count,
            "required_count": result.required_count,
        },
    )
    if dry_run:
        return CheckOutcome(pr_number=ref.number, head_sha=ref.head_sha, result=result, status=status)

    client.create_commit_status(repo, ref.head_sha, status)
    return CheckOutcome(
        pr_number=ref.number,
        head_sha=ref.head_sha,
        result=result,
        status=status,
        posted=True,
    )
