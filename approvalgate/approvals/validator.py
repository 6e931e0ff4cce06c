"""
Rule-based approval validator.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Iterable, Optional, Sequence, Tuple

from approvalgate.context.builder import build_rule_context
from approvalgate.context.types import PayloadLike
from approvalgate.rules.registry import DEFAULT_REGISTRY, ConditionRegistry
from .types import APPROVED, COMMENTED, ApprovalRule, Review, ValidationResult

_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


def _dt(value: object) -> Optional[datetime]:
    """
    Coerce a submission timestamp to an aware UTC datetime, or None when
    it is missing or unparseable.
    """
    if isinstance(value, datetime):
        return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)
    if isinstance(value, str) and value.strip():
        raw = value.strip()
        if raw.endswith(("Z", "z")):
            raw = raw[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(raw)
        except ValueError:
            return None
        return parsed if parsed.tzinfo is not None else parsed.replace(tzinfo=timezone.utc)
    return None


def _recency(review: Review) -> Tuple[bool, datetime]:
    # Invalid timestamps lose to every valid one, including datetime.min.
    submitted = _dt(review.submitted_at)
    return (submitted is not None, submitted or _EARLIEST)


def latest_reviews_by_user(reviews: Iterable[Review]) -> Dict[str, Review]:
    latest: Dict[str, Review] = {}
    for review in reviews:
        # A comment after an approval must not erase the approval.
        if str(review.state or "").upper() == COMMENTED:
            continue
        reviewer = str(review.reviewer or "")
        existing = latest.get(reviewer)
        if existing is None or _recency(review) >= _recency(existing):
            latest[reviewer] = review
    return latest


def count_approvals(reviews: Iterable[Review]) -> int:
    return sum(
        1
        for review in latest_reviews_by_user(reviews).values()
        if str(review.state or "").upper() == APPROVED
    )


def validate_approvals(
    rule: ApprovalRule,
    reviews: Sequence[Review],
    payload: PayloadLike,
    *,
    registry: ConditionRegistry = DEFAULT_REGISTRY,
    strict: bool = False,
) -> Optional[ValidationResult]:
    """
    Evaluate one rule against the PR's reviews.

    Returns None when the rule declares conditions that do not hold for
    this pull request; otherwise the approval tally against the rule's
    required count.
    """
    approval_count = count_approvals(reviews)
    approved = approval_count >= rule.requires.count

    context = build_rule_context(payload)
    applicable = registry.evaluate_all(rule.conditions, context, strict=strict)
    if rule.conditions and not applicable:
        return None

    return ValidationResult(
        approved=approved,
        approval_count=approval_count,
        rule=rule,
    )


def find_applicable_result(
    rules: Iterable[ApprovalRule],
    reviews: Sequence[Review],
    payload: PayloadLike,
    *,
    registry: ConditionRegistry = DEFAULT_REGISTRY,
    strict: bool = False,
) -> Optional[ValidationResult]:
    """First applicable rule wins, in declaration order."""
    for rule in rules:
        result = validate_approvals(rule, reviews, payload, registry=registry, strict=strict)
        if result is not None:
            return result
    return None
