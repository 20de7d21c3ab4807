"""
LangGraph workflow definition for AI model testing.
"""

from typing import List, Optional
from langgraph.graph import StateGraph, END

from agents.ai_model_tester_agent.models import AIModelTesterState
from agents.ai_model_tester_agent.nodes import (
    initialize_responses,
    test_queries_batch,
    finalize
)
from models.schemas import Platform


# Singleton graph instance
_graph = None


def create_ai_model_tester_graph():
    """Create the LangGraph workflow for AI model testing."""
    from langgraph.graph import START

    workflow = StateGraph(AIModelTesterState)

    workflow.add_node("initialize", initialize_responses)
    workflow.add_node("test_queries", test_queries_batch)
    workflow.add_node("finalize", finalize)

    workflow.add_edge(START, "initialize")
    workflow.add_edge("initialize", "test_queries")
    workflow.add_edge("test_queries", "finalize")
    workflow.add_edge("finalize", END)

    return workflow.compile()


def get_ai_model_tester_graph():
    """Get or create the AI model tester graph."""
    global _graph
    if _graph is None:
        _graph = create_ai_model_tester_graph()
    return _graph


def run_ai_model_testing_workflow(
    prompts: List[str],
    platforms: List[Platform],
    brand_name: str,
    cache=None,
    timeout_seconds: Optional[float] = None,
    progress_callback = None
):
    """
    Run the AI model testing workflow with optional progress streaming.

    Entry point for the AI model tester agent.

    Args:
        prompts: Prompts to send to every platform
        platforms: Platforms to query
        brand_name: Brand detected in each answer
        cache: Optional ResponseCache shared by all calls
        timeout_seconds: Overall budget (default: AUDIT_TIMEOUT_SECONDS)
        progress_callback: Optional callback function(step, status, message, data) for progress updates

    Returns:
        Dictionary with responses and errors
    """
    graph = get_ai_model_tester_graph()

    initial_state = {
        "prompts": list(prompts),
        "platforms": list(platforms),
        "brand_name": brand_name,
        "response_cache": cache,
        "timeout_seconds": timeout_seconds,
        "responses": [],
        "errors": [],
        "completed": False
    }

    state = initial_state

    for step_output in graph.stream(initial_state):
        node_name = list(step_output.keys())[0]
        state = step_output[node_name]

        if progress_callback:
            if node_name == "initialize":
                progress_callback("testing", "in_progress", f"Querying {len(platforms)} platforms...", None)
            elif node_name == "test_queries":
                expected = len(prompts) * len(platforms)
                collected = len(state.get("responses", []))
                progress_callback("testing", "in_progress", f"Collected {collected}/{expected} responses", None)
            elif node_name == "finalize":
                progress_callback("testing", "completed", "Platform testing complete", None)

    return {
        "responses": state.get("responses", []),
        "errors": state.get("errors", [])
    }
