import json
import os
from typing import Any, List, Optional

import yaml
from pydantic import ValidationError

from approvalgate.errors import RuleConfigError
from .types import ApprovalRule


def parse_rules(raw: Any) -> List[ApprovalRule]:
    """
    Validate a rule list (a JSON string or already-decoded data) into
    ApprovalRule objects, preserving declaration order.
    """
    data = raw
    if isinstance(raw, (str, bytes)):
        try:
            data = json.loads(raw)
        except ValueError as exc:
            raise RuleConfigError(f"Approval rules are not valid JSON: {exc}") from exc

    if not isinstance(data, list):
        raise RuleConfigError("Approval rules must be a list")

    rules: List[ApprovalRule] = []
    for index, item in enumerate(data):
        try:
            rules.append(ApprovalRule.model_validate(item))
        except ValidationError as exc:
            raise RuleConfigError(f"Invalid approval rule at index {index}: {exc}") from exc
    return rules


def load_rules_file(path: str) -> List[ApprovalRule]:
    """Load rules from a YAML (or JSON) file."""
    if not os.path.exists(path):
        raise RuleConfigError(f"Approval rules file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise RuleConfigError(f"Failed to parse approval rules {path}: {exc}") from exc
    return parse_rules(data if data is not None else [])


def load_rules(inline: Optional[str] = None, path: Optional[str] = None) -> List[ApprovalRule]:
    if inline:
        return parse_rules(inline)
    if path:
        return load_rules_file(path)
    raise RuleConfigError("No approval rules configured")
