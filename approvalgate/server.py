import hashlib
import hmac
import json
import logging
from typing import List, Optional

from fastapi import FastAPI, Header, HTTPException, Request

from approvalgate.approvals.loader import load_rules
from approvalgate.approvals.types import ApprovalRule
from approvalgate.config import (
    get_rules_source,
    get_status_context,
    get_webhook_secret,
    is_strict_conditions,
)
from approvalgate.errors import ApprovalGateError
from approvalgate.integrations.github import GitHubClient, GitHubClientError
from approvalgate.observability.log_config import configure_logging
from approvalgate.runner import run_approval_check

configure_logging()

app = FastAPI(
    title="ApprovalGate Webhook Listener",
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)
logger = logging.getLogger(__name__)

HANDLED_ACTIONS = {
    "pull_request": {"opened", "synchronize", "reopened", "ready_for_review", "edited"},
    "pull_request_review": {"submitted", "edited", "dismissed"},
}


def get_rules() -> List[ApprovalRule]:
    inline, path = get_rules_source()
    return load_rules(inline, path)


def get_client() -> GitHubClient:
    return GitHubClient()


def verify_signature(secret: str, body: bytes, signature: Optional[str]) -> bool:
    mac = hmac.new(secret.encode(), msg=body, digestmod=hashlib.sha256)
    expected = "sha256=" + mac.hexdigest()
    return hmac.compare_digest(expected, signature or "")


@app.get("/healthz")
def healthz():
    return {"status": "ok"}


@app.post("/webhooks/github")
async def github_webhook(
    request: Request,
    x_hub_signature_256: str = Header(None),
    x_github_event: str = Header(None),
):
    body = await request.body()

    # Handle GitHub ping FIRST
    if x_github_event == "ping":
        return {"msg": "pong"}

    secret = get_webhook_secret()
    if secret and not verify_signature(secret, body, x_hub_signature_256):
        raise HTTPException(status_code=401, detail="Invalid signature")

    try:
        data = json.loads(body)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail="Invalid JSON payload") from exc

    actions = HANDLED_ACTIONS.get(x_github_event or "")
    if actions is None:
        return {"msg": f"Ignored event: {x_github_event}"}

    action = data.get("action") if isinstance(data, dict) else None
    if action not in actions:
        return {"msg": f"Ignored {x_github_event} action: {action}"}

    repo_full_name = (data.get("repository") or {}).get("full_name")
    if not repo_full_name:
        return {"msg": "Missing repository"}

    try:
        outcome = run_approval_check(
            repo=repo_full_name,
            event_name=x_github_event,
            event_payload=data,
            rules=get_rules(),
            client=get_client(),
            strict=is_strict_conditions(),
            status_context=get_status_context(),
        )
    except ApprovalGateError as exc:
        logger.warning("Approval check rejected: repo=%s error=%s", repo_full_name, exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except GitHubClientError as exc:
        logger.exception("GitHub dependency failure: repo=%s", repo_full_name)
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    if outcome.result is None:
        return {"status": "skipped", "pr_number": outcome.pr_number, "rule": None}

    return {
        "status": "processed",
        "pr_number": outcome.pr_number,
        "rule": outcome.rule_name,
        "approved": outcome.result.approved,
        "approval_count": outcome.result.approval_count,
        "required_count": outcome.result.required_count,
        "state": outcome.status.state if outcome.status else None,
    }
