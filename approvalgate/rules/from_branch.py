import re
from functools import lru_cache
from typing import Any, Mapping

from approvalgate.errors import RuleConfigError
from .types import RuleCondition, RuleContext


@lru_cache(maxsize=128)
def _compile(pattern: str) -> "re.Pattern[str]":
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise RuleConfigError(f"from_branch: invalid pattern {pattern!r}: {exc}") from exc


class FromBranchCondition(RuleCondition):
    """
    Matches the source branch against `pattern`.

    Uses search semantics, so the pattern is unanchored unless it
    spells out `^` / `$` itself.
    """
    name = "from_branch"

    def evaluate(self, config: Any, context: RuleContext) -> bool:
        pattern = config.get("pattern") if isinstance(config, Mapping) else None
        if not isinstance(pattern, str):
            raise RuleConfigError("from_branch: 'pattern' must be a string")
        return _compile(pattern).search(context.from_branch) is not None
