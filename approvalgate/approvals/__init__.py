from .types import ApprovalRule, Review, RuleRequirement, ValidationResult
from .validator import count_approvals, find_applicable_result, validate_approvals

__all__ = [
    "ApprovalRule",
    "Review",
    "RuleRequirement",
    "ValidationResult",
    "count_approvals",
    "find_applicable_result",
    "validate_approvals",
]
