"""
Event payload shapes that carry a pull request.
"""
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union


def as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


@dataclass(frozen=True)
class PullRequestRef:
    number: Optional[int]
    head_sha: str


@dataclass(frozen=True)
class PullRequestPayload:
    """A pull request object delivered directly."""
    data: Mapping[str, Any]

    @property
    def pull_request(self) -> Mapping[str, Any]:
        return self.data


@dataclass(frozen=True)
class ReviewEventPayload:
    """A review event wrapping the pull request under `pull_request`."""
    data: Mapping[str, Any]

    @property
    def pull_request(self) -> Mapping[str, Any]:
        return as_mapping(self.data.get("pull_request"))


EventPayload = Union[PullRequestPayload, ReviewEventPayload]

PayloadLike = Union[EventPayload, Mapping[str, Any], Dict[str, Any]]
