"""
LangGraph Orchestrator

This module defines and executes the sequential workflow behind one brand
visibility audit. It uses LangGraph's StateGraph to pass state between the
prompt store, the AI model tester and the scorer analyzer.
"""

import logging
from typing import List, Optional

from langgraph.graph import StateGraph, END

from agents.ai_model_tester_agent import run_ai_model_testing_workflow
from agents.scorer_analyzer_agent import run_scorer_analysis_workflow
from config.constants import PLATFORMS
from models.schemas import AuditWorkflowState, ScoreBreakdown
from storage.prompt_store import get_prompt_store

logger = logging.getLogger(__name__)


def load_prompts(state: AuditWorkflowState) -> AuditWorkflowState:
    """Node: Load the fixed prompt set for the brand's category."""
    category = state["category"]
    prompts = get_prompt_store().get_prompts(category)

    logger.info(f"📝 Loaded {len(prompts)} prompts for category '{getattr(category, 'value', category)}'")
    return {"prompts": prompts}


def query_platforms(state: AuditWorkflowState) -> AuditWorkflowState:
    """Node: Send every prompt to every platform."""
    result = run_ai_model_testing_workflow(
        prompts=state.get("prompts", []),
        platforms=state.get("platforms", list(PLATFORMS)),
        brand_name=state["brand_name"],
        cache=state.get("response_cache"),
        timeout_seconds=state.get("timeout_seconds")
    )

    return {
        "responses": result["responses"],
        "errors": state.get("errors", []) + result["errors"]
    }


def analyze(state: AuditWorkflowState) -> AuditWorkflowState:
    """Node: Score the collected responses and build the action plan."""
    result = run_scorer_analysis_workflow(
        brand_name=state["brand_name"],
        category=state["category"],
        responses=state.get("responses", []),
        declared_competitors=state.get("competitors", [])
    )

    return {
        "enriched_responses": result["enriched_responses"],
        "score_breakdown": result["score_breakdown"],
        "competitor_results": result["competitor_results"],
        "gaps": result["gaps"],
        "recommendations": result["recommendations"],
        "errors": state.get("errors", []) + result["errors"]
    }


def create_workflow_graph():
    """
    Build the LangGraph StateGraph for the audit workflow.

    START → load_prompts → query_platforms → analyze → END

    Returns:
        Compiled StateGraph ready for execution
    """
    workflow = StateGraph(AuditWorkflowState)

    workflow.add_node("load_prompts", load_prompts)
    workflow.add_node("query_platforms", query_platforms)
    workflow.add_node("analyze", analyze)

    workflow.set_entry_point("load_prompts")
    workflow.add_edge("load_prompts", "query_platforms")
    workflow.add_edge("query_platforms", "analyze")
    workflow.add_edge("analyze", END)

    return workflow.compile()


# Singleton graph instance
_graph = None


def get_workflow_graph():
    global _graph
    if _graph is None:
        _graph = create_workflow_graph()
    return _graph


def run_audit(
    brand_name: str,
    category: str,
    competitors: Optional[List[str]] = None,
    cache=None,
    timeout_seconds: Optional[float] = None
) -> AuditWorkflowState:
    """
    Execute a complete visibility audit for one brand.

    Args:
        brand_name: Brand to audit
        category: Category id of the brand
        competitors: Competitor names that must appear in the report
        cache: Optional ResponseCache for provider answers
        timeout_seconds: Overall provider budget (default: AUDIT_TIMEOUT_SECONDS)

    Returns:
        Final AuditWorkflowState with score_breakdown, competitor_results
        (ranked, then declared competitors at score 0), gaps,
        recommendations and the annotated responses

    Example:
        >>> result = run_audit("Mamaearth", "beauty", ["Minimalist"])
        >>> result["score_breakdown"].total
        42
    """
    initial_state: AuditWorkflowState = {
        "brand_name": brand_name,
        "category": category,
        "competitors": list(competitors or []),
        "platforms": list(PLATFORMS),
        "prompts": [],
        "response_cache": cache,
        "timeout_seconds": timeout_seconds,
        "responses": [],
        "enriched_responses": [],
        "score_breakdown": ScoreBreakdown(),
        "competitor_results": [],
        "gaps": [],
        "recommendations": [],
        "errors": []
    }

    logger.info(f"🚀 Starting audit for '{brand_name}'")
    final_state = get_workflow_graph().invoke(initial_state)
    logger.info(
        f"✅ Audit for '{brand_name}' complete: score {final_state['score_breakdown'].total}, "
        f"{len(final_state['gaps'])} gaps"
    )
    return final_state
