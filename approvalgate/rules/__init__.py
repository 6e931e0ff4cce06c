from .registry import DEFAULT_REGISTRY, ConditionRegistry, evaluate_conditions
from .types import RuleCondition, RuleContext

__all__ = [
    "DEFAULT_REGISTRY",
    "ConditionRegistry",
    "RuleCondition",
    "RuleContext",
    "evaluate_conditions",
]
