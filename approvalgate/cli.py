import argparse
import json
import logging
import os
import sys
from typing import Any, List, Optional

from approvalgate import __version__
from approvalgate.approvals.loader import load_rules
from approvalgate.approvals.types import Review
from approvalgate.approvals.validator import find_applicable_result
from approvalgate.config import get_status_context, is_strict_conditions
from approvalgate.errors import ApprovalGateError
from approvalgate.observability.log_config import configure_logging
from approvalgate.reporting.status import describe_result

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="approvalgate")
    sub = p.add_subparsers(dest="cmd", required=True)

    check_p = sub.add_parser("check", help="Evaluate approval rules for a workflow event and report a commit status.")
    check_p.add_argument("--event-name", default=os.getenv("GITHUB_EVENT_NAME", ""), help="Triggering event name")
    check_p.add_argument("--event-path", default=os.getenv("GITHUB_EVENT_PATH", ""), help="Path to the event JSON")
    check_p.add_argument("--repo", default=os.getenv("GITHUB_REPOSITORY", ""), help="Repository name (owner/repo)")
    check_p.add_argument("--token", help="GitHub token (optional, else uses GITHUB_TOKEN env)")
    check_p.add_argument("--rules", default=os.getenv("INPUT_APPROVAL-RULES", ""), help="Approval rules as a JSON array")
    check_p.add_argument("--rules-file", help="Path to approval rules (YAML or JSON)")
    check_p.add_argument("--strict-conditions", action="store_true", help="Fail on unknown rule conditions")
    check_p.add_argument("--dry-run", action="store_true", help="Evaluate but do not post a commit status")

    eval_p = sub.add_parser("evaluate", help="Evaluate approval rules offline from JSON files.")
    eval_p.add_argument("--payload", required=True, help="Path to a pull request (or review event) JSON")
    eval_p.add_argument("--reviews", required=True, help="Path to a JSON array of GitHub review records")
    eval_p.add_argument("--rules", help="Approval rules as a JSON array")
    eval_p.add_argument("--rules-file", help="Path to approval rules (YAML or JSON)")
    eval_p.add_argument("--strict-conditions", action="store_true", help="Fail on unknown rule conditions")
    eval_p.add_argument("--format", default="json", choices=["json", "text"])

    sub.add_parser("version", help="Print version.")
    return p


def _read_json(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _check(args: argparse.Namespace) -> int:
    from approvalgate.integrations.github import GitHubClient
    from approvalgate.runner import run_approval_check

    if not args.repo:
        raise ApprovalGateError("Repository is required (--repo or GITHUB_REPOSITORY)")
    if not args.event_path:
        raise ApprovalGateError("Event path is required (--event-path or GITHUB_EVENT_PATH)")

    rules = load_rules(args.rules, args.rules_file)
    event = _read_json(args.event_path)
    outcome = run_approval_check(
        repo=args.repo,
        event_name=args.event_name,
        event_payload=event,
        rules=rules,
        client=GitHubClient(token=args.token),
        strict=args.strict_conditions or is_strict_conditions(),
        status_context=get_status_context(),
        dry_run=args.dry_run,
    )
    if outcome.status is not None:
        print(f"{outcome.rule_name}: {outcome.status.state} {outcome.status.description}")
    else:
        print("No applicable approval rule found")
    return 0


def _evaluate(args: argparse.Namespace) -> int:
    rules = load_rules(args.rules, args.rules_file)
    payload = _read_json(args.payload)
    raw_reviews = _read_json(args.reviews)
    if not isinstance(raw_reviews, list):
        raise ApprovalGateError("Reviews file must contain a JSON array")
    reviews: List[Review] = [Review.from_api(r) for r in raw_reviews if isinstance(r, dict)]

    result = find_applicable_result(
        rules,
        reviews,
        payload,
        strict=args.strict_conditions or is_strict_conditions(),
    )

    if args.format == "text":
        if result is None:
            print("No applicable approval rule found")
        else:
            print(f"{result.rule.name}: {describe_result(result)}")
        return 0

    output: Optional[dict] = None
    if result is not None:
        output = {
            "rule": result.rule.name,
            "approved": result.approved,
            "approval_count": result.approval_count,
            "required_count": result.required_count,
        }
    print(json.dumps(output, indent=2))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    # If no arguments provided, show help
    if not argv:
        argv.append("--help")

    p = build_parser()
    args = p.parse_args(argv)

    if args.cmd == "version":
        print(f"approvalgate {__version__}")
        return 0

    configure_logging()
    try:
        if args.cmd == "check":
            return _check(args)
        if args.cmd == "evaluate":
            return _evaluate(args)
    except (ApprovalGateError, OSError) as e:
        print(f"Action failed: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.exception("Unexpected failure")
        print(f"Action failed: {e}", file=sys.stderr)
        return 1

    p.error(f"Unknown command: {args.cmd}")
    return 2


if __name__ == "__main__":
    sys.exit(main())
