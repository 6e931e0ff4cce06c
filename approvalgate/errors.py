class ApprovalGateError(ValueError):
    """Base error for approval evaluation failures."""


class InvalidEventError(ApprovalGateError):
    """Raised when a pull-request context cannot be derived from an event."""


class RuleConfigError(ApprovalGateError):
    """Raised for approval rule configuration that cannot be evaluated."""


class UnknownConditionError(RuleConfigError):
    """Raised in strict mode when a rule names an unregistered condition."""
