"""
LangGraph workflow definition for scorer analysis.
"""

from typing import List, Optional
from langgraph.graph import StateGraph, END

from agents.scorer_analyzer_agent.models import ScorerAnalyzerState
from agents.scorer_analyzer_agent.nodes import (
    enrich_responses,
    score_visibility,
    rank_competitors,
    find_gaps,
    recommend,
    finalize
)
from models.schemas import AnnotatedResponse, ScoreBreakdown


# Singleton graph instance
_graph = None


def create_scorer_analyzer_graph():
    """Create the LangGraph workflow for scorer analysis."""
    from langgraph.graph import START

    workflow = StateGraph(ScorerAnalyzerState)

    # Add nodes
    workflow.add_node("enrich", enrich_responses)
    workflow.add_node("score", score_visibility)
    workflow.add_node("rank", rank_competitors)
    workflow.add_node("find_gaps", find_gaps)
    workflow.add_node("recommend", recommend)
    workflow.add_node("finalize", finalize)

    # Define edges (workflow)
    workflow.add_edge(START, "enrich")
    workflow.add_edge("enrich", "score")
    workflow.add_edge("score", "rank")
    workflow.add_edge("rank", "find_gaps")
    workflow.add_edge("find_gaps", "recommend")
    workflow.add_edge("recommend", "finalize")
    workflow.add_edge("finalize", END)

    return workflow.compile()


def get_scorer_analyzer_graph():
    """Get or create the scorer analyzer graph."""
    global _graph
    if _graph is None:
        _graph = create_scorer_analyzer_graph()
    return _graph


def run_scorer_analysis_workflow(
    brand_name: str,
    category: str,
    responses: List[AnnotatedResponse],
    declared_competitors: Optional[List[str]] = None,
    progress_callback = None
):
    """
    Run the scorer analysis workflow with optional progress streaming.

    Entry point for the scorer analyzer agent.

    Args:
        brand_name: Brand being audited
        category: Category id of the brand
        responses: Provider responses with brand detection already applied
        declared_competitors: Competitor names the user asked to always report
        progress_callback: Optional callback function(step, status, message, data) for progress updates

    Returns:
        Dictionary with score_breakdown, competitor_results, gaps,
        recommendations, enriched_responses and summary
    """
    graph = get_scorer_analyzer_graph()

    # Prepare initial state
    initial_state = {
        "brand_name": brand_name,
        "category": category,
        "responses": list(responses),
        "declared_competitors": list(declared_competitors or []),
        "enriched_responses": [],
        "score_breakdown": ScoreBreakdown(),
        "competitor_results": [],
        "gaps": [],
        "recommendations": [],
        "summary": {},
        "errors": [],
        "completed": False
    }

    state = initial_state

    # Execute graph with streaming
    for step_output in graph.stream(initial_state):
        node_name = list(step_output.keys())[0]
        state = step_output[node_name]

        # Progress callbacks
        if progress_callback:
            if node_name == "enrich":
                progress_callback("scoring", "in_progress", "Detecting competitors in responses...", None)
            elif node_name == "score":
                score = state["score_breakdown"].total
                progress_callback("scoring", "in_progress", f"Visibility score: {score}", None)
            elif node_name == "find_gaps":
                progress_callback("scoring", "in_progress", f"Found {len(state['gaps'])} content gaps", None)
            elif node_name == "finalize":
                progress_callback("scoring", "completed", "Scoring complete", None)

    return {
        "score_breakdown": state.get("score_breakdown", ScoreBreakdown()),
        "competitor_results": state.get("competitor_results", []),
        "gaps": state.get("gaps", []),
        "recommendations": state.get("recommendations", []),
        "enriched_responses": state.get("enriched_responses", []),
        "summary": state.get("summary", {}),
        "errors": state.get("errors", [])
    }
