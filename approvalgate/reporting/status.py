from dataclasses import dataclass
from typing import Any, Dict, Literal

from approvalgate.approvals.types import ValidationResult
from approvalgate.config import DEFAULT_STATUS_CONTEXT

StatusState = Literal["success", "pending", "failure", "error"]


@dataclass(frozen=True)
class CommitStatus:
    state: StatusState
    description: str
    context: str = DEFAULT_STATUS_CONTEXT

    def to_payload(self) -> Dict[str, Any]:
        return {
            "state": self.state,
            "description": self.description,
            "context": self.context,
        }


def describe_result(result: ValidationResult) -> str:
    label = "Approved" if result.approved else "Needs more approvals"
    return f"{label} ({result.approval_count}/{result.required_count})"


def build_commit_status(result: ValidationResult, context: str = DEFAULT_STATUS_CONTEXT) -> CommitStatus:
    """
    Satisfied rules report success; unmet rules stay pending so the PR can
    still collect approvals.
    """
    return CommitStatus(
        state="success" if result.approved else "pending",
        description=describe_result(result),
        context=context,
    )
