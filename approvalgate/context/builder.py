from typing import Any, Mapping, Optional

from approvalgate.errors import InvalidEventError
from approvalgate.rules.types import RuleContext
from .types import (
    EventPayload,
    PayloadLike,
    PullRequestPayload,
    PullRequestRef,
    ReviewEventPayload,
    as_mapping,
)

SUPPORTED_EVENTS = ("pull_request", "pull_request_review")


def as_event_payload(payload: PayloadLike) -> EventPayload:
    """
    Classify a raw mapping as a pull request or a review-event wrapper.

    A mapping with `head`/`user` is a pull request; otherwise a mapping
    carrying `pull_request` is a wrapper. Anything else is treated as a
    pull request with missing fields.
    """
    if isinstance(payload, (PullRequestPayload, ReviewEventPayload)):
        return payload
    if not isinstance(payload, Mapping):
        raise InvalidEventError(f"Event payload must be a mapping, got {type(payload).__name__}")
    if "head" in payload or "user" in payload:
        return PullRequestPayload(payload)
    if isinstance(payload.get("pull_request"), Mapping):
        return ReviewEventPayload(payload)
    return PullRequestPayload(payload)


def parse_event(event_name: str, event: Any) -> EventPayload:
    """
    Extract the pull request from a webhook / workflow event body.

    Raises InvalidEventError when the event cannot carry a pull request.
    """
    if event_name not in SUPPORTED_EVENTS:
        raise InvalidEventError(f"Invalid context event name: {event_name}")
    if not isinstance(event, Mapping):
        raise InvalidEventError("Event payload must be a JSON object")
    pull_request = event.get("pull_request")
    if not isinstance(pull_request, Mapping):
        raise InvalidEventError(f"Event {event_name} has no pull_request object")
    return PullRequestPayload(pull_request)


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def build_rule_context(payload: PayloadLike) -> RuleContext:
    pr = as_event_payload(payload).pull_request
    return RuleContext(
        from_branch=_text(as_mapping(pr.get("head")).get("ref")),
        author=_text(as_mapping(pr.get("user")).get("login")),
    )


def pull_request_ref(payload: PayloadLike) -> PullRequestRef:
    pr = as_event_payload(payload).pull_request
    number: Optional[int] = None
    raw_number = pr.get("number")
    if isinstance(raw_number, int) and not isinstance(raw_number, bool):
        number = raw_number
    elif isinstance(raw_number, str) and raw_number.isdigit():
        number = int(raw_number)
    return PullRequestRef(
        number=number,
        head_sha=_text(as_mapping(pr.get("head")).get("sha")),
    )
