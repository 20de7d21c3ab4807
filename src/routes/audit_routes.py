"""
Audit Routes

POST /api/audit runs a brand visibility audit; GET /api/audit/{audit_id}
returns a stored one and GET /api/audit?brand= lists a brand's audits.
"""

import json
import logging
from typing import Dict, List

from fastapi import APIRouter, HTTPException, Query, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from models.schemas import AuditRequest
from src.controllers.audit_controller import execute_audit

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/audit", tags=["Audit"])


def get_client_ip(request: Request) -> str:
    """Client key for rate limiting: first forwarded address, then real IP."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    return request.headers.get("x-real-ip") or "anonymous"


def flatten_validation_error(error: ValidationError) -> Dict[str, object]:
    """Group validation messages by top-level field."""
    form_errors: List[str] = []
    field_errors: Dict[str, List[str]] = {}

    for item in error.errors():
        loc = item.get("loc") or ()
        if loc:
            field_errors.setdefault(str(loc[0]), []).append(item["msg"])
        else:
            form_errors.append(item["msg"])

    return {"formErrors": form_errors, "fieldErrors": field_errors}


@router.post("")
async def create_audit(request: Request):
    """
    Run a visibility audit for a brand.

    The daily quota is counted before the body is validated.

    Body:
    - brandName: Brand to audit (1-100 chars)
    - websiteUrl: Brand website (optional)
    - category: One of the supported category ids
    - competitors: Up to 5 competitor names (optional)
    """
    limiter = request.app.state.rate_limiter
    quota = limiter.check(get_client_ip(request))

    if not quota.allowed:
        return JSONResponse(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            content={
                "error": f"Daily limit reached. You can run {limiter.limit} audits per day.",
                "code": "RATE_LIMIT",
                "resetAt": quota.reset_at,
            },
            headers={
                "X-RateLimit-Remaining": "0",
                "X-RateLimit-Reset": str(quota.reset_at),
            }
        )

    body = await request.body()
    try:
        payload = json.loads(body or b"null")
        audit_request = AuditRequest.model_validate(payload)
    except json.JSONDecodeError as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid input", "details": {"formErrors": [str(e)], "fieldErrors": {}}}
        )
    except ValidationError as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid input", "details": flatten_validation_error(e)}
        )

    try:
        response = await run_in_threadpool(
            execute_audit,
            audit_request,
            cache=request.app.state.response_cache,
            store=request.app.state.audit_store
        )
    except Exception as e:
        logger.exception(f"Audit API error: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to run audit. Please try again."}
        )

    return JSONResponse(
        content=response.model_dump(mode="json", by_alias=True),
        headers={
            "X-RateLimit-Remaining": str(quota.remaining),
            "X-RateLimit-Reset": str(quota.reset_at),
        }
    )


@router.get("")
def list_audits(request: Request, brand: str = Query(..., min_length=1, max_length=100)):
    """List stored audit ids for a brand, oldest first."""
    audit_ids = request.app.state.audit_store.list_brand_audits(brand)
    return {"brand": brand, "auditIds": audit_ids}


@router.get("/{audit_id}")
def get_audit(audit_id: str, request: Request):
    """Return a stored audit with its per-query records."""
    record = request.app.state.audit_store.get_audit(audit_id)
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Audit {audit_id} not found"
        )
    return JSONResponse(content=record.model_dump(mode="json", by_alias=True))
