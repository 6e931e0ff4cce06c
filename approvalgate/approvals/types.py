"""
Approval validation types.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

APPROVED = "APPROVED"
CHANGES_REQUESTED = "CHANGES_REQUESTED"
COMMENTED = "COMMENTED"


@dataclass(frozen=True)
class Review:
    """A PR review."""
    reviewer: str
    state: str # APPROVED, CHANGES_REQUESTED, COMMENTED, DISMISSED, ...
    submitted_at: Optional[Union[datetime, str]] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Review":
        """Build a Review from a GitHub REST review record."""
        user = data.get("user") if isinstance(data.get("user"), dict) else {}
        return cls(
            reviewer=str(user.get("login") or ""),
            state=str(data.get("state") or ""),
            submitted_at=data.get("submitted_at"),
        )


class RuleRequirement(BaseModel):
    model_config = ConfigDict(frozen=True)

    count: int = Field(ge=0)


class ApprovalRule(BaseModel):
    """
    A named approval policy.

    `conditions` is the rule's `if` block: condition name -> condition
    config. Empty means the rule always applies.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    conditions: Dict[str, Any] = Field(default_factory=dict, alias="if")
    requires: RuleRequirement

    @field_validator("conditions", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return {} if value is None else value


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of evaluating one applicable rule."""
    approved: bool
    approval_count: int
    rule: ApprovalRule

    @property
    def required_count(self) -> int:
        return self.rule.requires.count
