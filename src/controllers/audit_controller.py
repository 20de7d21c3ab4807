"""
Audit Controller

Handles business logic for running and persisting a brand visibility audit.
"""

import logging
from datetime import datetime
from typing import List, Optional

from config.constants import MAX_COMPETITORS
from graph_orchestrator import run_audit
from models.schemas import (
    AnnotatedResponse,
    AuditRecord,
    AuditRequest,
    AuditResponse,
    AuditStatus,
    BrandInfo,
    QueryRecord,
)
from storage.audit_store import AuditStore
from utils.helpers import generate_audit_id

logger = logging.getLogger(__name__)


def to_query_record(response: AnnotatedResponse) -> QueryRecord:
    """Flatten an annotated response into its persisted form."""
    details = response.mention_details
    return QueryRecord(
        platform=response.platform,
        prompt=response.prompt,
        response_text=response.response_text,
        brand_mentioned=response.brand_mentioned,
        mention_sentiment=details.sentiment if details else None,
        mention_position=details.position if details else None,
        competitors_mentioned=response.competitors_found,
        cached=response.cached
    )


def build_audit_response(audit_id: str, request: AuditRequest, result: dict) -> AuditResponse:
    """Assemble the API response from the final workflow state."""
    breakdown = result["score_breakdown"]
    return AuditResponse(
        audit_id=audit_id,
        status=AuditStatus.COMPLETED,
        visibility_score=breakdown.total,
        score_breakdown=breakdown,
        competitors=result["competitor_results"][:MAX_COMPETITORS],
        gaps=result["gaps"],
        recommendations=result["recommendations"],
        brand=BrandInfo(name=request.brand_name, category=request.category)
    )


def save_audit(
    store: Optional[AuditStore],
    response: AuditResponse,
    request: AuditRequest,
    responses: List[AnnotatedResponse],
    created_at: datetime
) -> bool:
    """Persist the audit after the response has been computed."""
    if store is None:
        return False

    record = AuditRecord(
        audit=response,
        website_url=str(request.website_url) if request.website_url else None,
        created_at=created_at,
        completed_at=datetime.now(),
        queries=[to_query_record(r) for r in responses]
    )
    return store.save_audit(record)


def execute_audit(
    request: AuditRequest,
    cache=None,
    store: Optional[AuditStore] = None
) -> AuditResponse:
    """
    Run a complete audit for a validated request.

    Args:
        request: Validated audit request
        cache: Optional ResponseCache for provider answers
        store: Optional AuditStore; persistence failures never fail the audit

    Returns:
        AuditResponse with the score, top competitors, gaps and recommendations
    """
    audit_id = generate_audit_id()
    created_at = datetime.now()

    logger.info(f"Running audit {audit_id} for '{request.brand_name}' ({request.category.value})")

    result = run_audit(
        brand_name=request.brand_name,
        category=request.category,
        competitors=request.competitors or [],
        cache=cache
    )

    if result.get("errors"):
        logger.warning(f"Audit {audit_id} finished with {len(result['errors'])} errors")

    response = build_audit_response(audit_id, request, result)
    save_audit(store, response, request, result.get("enriched_responses", []), created_at)

    return response
