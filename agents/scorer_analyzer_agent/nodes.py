"""
Node functions for the scorer analyzer LangGraph workflow.
"""

import logging
from typing import List

from agents.scorer_analyzer_agent.detection import enrich_response_with_competitors
from agents.scorer_analyzer_agent.gaps import identify_gaps
from agents.scorer_analyzer_agent.models import ScorerAnalyzerState
from agents.scorer_analyzer_agent.recommendations import generate_recommendations
from agents.scorer_analyzer_agent.scoring import (
    calculate_competitor_scores,
    calculate_visibility_score,
    platforms_with_mentions,
)
from models.schemas import CompetitorResult

logger = logging.getLogger(__name__)


def merge_declared_competitors(
    results: List[CompetitorResult],
    declared: List[str]
) -> List[CompetitorResult]:
    """Append user-declared competitors missing from the ranking with a zero score."""
    merged = list(results)
    for name in declared:
        if not any(result.name.lower() == name.lower() for result in merged):
            merged.append(CompetitorResult(name=name, score=0, mention_count=0, platforms=[]))
    return merged


def enrich_responses(state: ScorerAnalyzerState) -> ScorerAnalyzerState:
    """Node: Detect competitors in every response."""
    brand_name = state.get("brand_name", "")
    category = state.get("category", "")
    responses = state.get("responses", [])

    logger.info(f"🔍 Detecting competitors in {len(responses)} responses...")

    state["enriched_responses"] = [
        enrich_response_with_competitors(response, brand_name, category)
        for response in responses
    ]
    return state


def score_visibility(state: ScorerAnalyzerState) -> ScorerAnalyzerState:
    """Node: Calculate the weighted visibility score."""
    breakdown = calculate_visibility_score(state.get("enriched_responses", []))
    state["score_breakdown"] = breakdown

    logger.info(
        f"🎯 Visibility score: {breakdown.total} "
        f"(frequency={breakdown.mention_frequency}, sentiment={breakdown.sentiment_quality}, "
        f"coverage={breakdown.platform_coverage}, position={breakdown.position_strength})"
    )
    return state


def rank_competitors(state: ScorerAnalyzerState) -> ScorerAnalyzerState:
    """Node: Rank competitors and add the ones the user asked about."""
    ranked = calculate_competitor_scores(state.get("enriched_responses", []))
    state["competitor_results"] = merge_declared_competitors(
        ranked,
        state.get("declared_competitors", [])
    )

    logger.info(f"🏆 Ranked {len(ranked)} competitors found in responses")
    return state


def find_gaps(state: ScorerAnalyzerState) -> ScorerAnalyzerState:
    """Node: Identify queries where competitors appear without the brand."""
    gaps = identify_gaps(state.get("enriched_responses", []), state.get("brand_name", ""))
    state["gaps"] = gaps

    high = sum(1 for gap in gaps if gap.priority.value == "high")
    logger.info(f"🕳️  Found {len(gaps)} gaps ({high} high priority)")
    return state


def recommend(state: ScorerAnalyzerState) -> ScorerAnalyzerState:
    """Node: Build the action plan from the gaps."""
    competitor_names = [result.name for result in state.get("competitor_results", [])]

    state["recommendations"] = generate_recommendations(
        state.get("gaps", []),
        state.get("brand_name", ""),
        state.get("category", ""),
        competitor_names
    )
    return state


def finalize(state: ScorerAnalyzerState) -> ScorerAnalyzerState:
    """Node: Summarize the batch and mark as completed."""
    responses = state.get("enriched_responses", [])

    state["summary"] = {
        "total_responses": len(responses),
        "total_mentions": sum(1 for r in responses if r.brand_mentioned),
        "cached_responses": sum(1 for r in responses if r.cached),
        "empty_responses": sum(1 for r in responses if not r.response_text),
        "platforms_with_mentions": [p.value for p in platforms_with_mentions(responses)],
    }
    state["completed"] = True

    logger.info("✅ Scorer analysis workflow complete")
    return state
