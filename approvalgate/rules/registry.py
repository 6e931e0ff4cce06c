"""
Condition Registry - maps condition names from a rule's `if` block to
their evaluators.
"""
import logging
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

from approvalgate.errors import UnknownConditionError
from .from_branch import FromBranchCondition
from .has_author_in import HasAuthorInCondition
from .types import RuleCondition, RuleContext

logger = logging.getLogger(__name__)


class ConditionRegistry:
    """
    Read-only lookup of named conditions, fixed at construction.

    Evaluation is a conjunction: every condition named in the mapping
    must hold. Names with no registered condition are treated as
    satisfied unless `strict` is requested.
    """

    def __init__(self, conditions: Iterable[RuleCondition]):
        by_name = {}
        for condition in conditions:
            if condition.name in by_name:
                raise ValueError(f"Duplicate condition name: {condition.name}")
            by_name[condition.name] = condition
        self._conditions = MappingProxyType(by_name)

    @property
    def names(self) -> tuple:
        return tuple(self._conditions)

    def get(self, name: str) -> Optional[RuleCondition]:
        return self._conditions.get(name)

    def evaluate_all(
        self,
        conditions: Optional[Mapping[str, Any]],
        context: RuleContext,
        *,
        strict: bool = False,
    ) -> bool:
        if not conditions:
            return True

        for name, config in conditions.items():
            condition = self.get(name)
            if condition is None:
                if strict:
                    raise UnknownConditionError(f"Unknown rule condition: {name}")
                logger.warning("Ignoring unknown rule condition: %s", name)
                continue
            if not condition.evaluate(config, context):
                return False
        return True


DEFAULT_REGISTRY = ConditionRegistry([FromBranchCondition(), HasAuthorInCondition()])


def evaluate_conditions(
    conditions: Optional[Mapping[str, Any]],
    context: RuleContext,
    *,
    strict: bool = False,
) -> bool:
    return DEFAULT_REGISTRY.evaluate_all(conditions, context, strict=strict)
