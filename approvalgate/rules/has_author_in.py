from typing import Any, Mapping

from approvalgate.errors import RuleConfigError
from .types import RuleCondition, RuleContext


class HasAuthorInCondition(RuleCondition):
    name = "has_author_in"

    def evaluate(self, config: Any, context: RuleContext) -> bool:
        users = config.get("users") if isinstance(config, Mapping) else None
        if not isinstance(users, (list, tuple, set, frozenset)):
            raise RuleConfigError("has_author_in: 'users' must be a list of logins")
        return context.author in {u for u in users if isinstance(u, str)}
