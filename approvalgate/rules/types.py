"""
Rule condition types.
"""
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class RuleContext:
    """Normalized view of the pull request that rule conditions evaluate."""
    from_branch: str = ""
    author: str = ""


class RuleCondition:
    """
    A named predicate over a RuleContext and a condition-specific config.
    """
    name: str = ""

    def evaluate(self, config: Any, context: RuleContext) -> bool:
        raise NotImplementedError("Condition must implement evaluate()")
