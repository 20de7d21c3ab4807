"""
State for the scorer analyzer workflow.
"""

from typing import Any, Dict, List, TypedDict

from models.schemas import AnnotatedResponse, CompetitorResult, Gap, Recommendation, ScoreBreakdown


class ScorerAnalyzerState(TypedDict):
    """State for the scorer analyzer graph."""
    # Input
    brand_name: str
    category: str
    responses: List[AnnotatedResponse]
    declared_competitors: List[str]

    # Processing
    enriched_responses: List[AnnotatedResponse]

    # Output
    score_breakdown: ScoreBreakdown
    competitor_results: List[CompetitorResult]
    gaps: List[Gap]
    recommendations: List[Recommendation]
    summary: Dict[str, Any]

    # Metadata
    errors: List[str]
    completed: bool
