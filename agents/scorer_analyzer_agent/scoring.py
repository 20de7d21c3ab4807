"""
Visibility scoring and competitor ranking over a batch of annotated answers.
"""

from typing import Dict, List

from config.constants import MAX_COMPETITORS, PLATFORM_COUNT, SCORE_WEIGHTS
from models.schemas import AnnotatedResponse, CompetitorResult, Platform, ScoreBreakdown, Sentiment
from utils.helpers import round_half_up, title_case

SENTIMENT_WEIGHTS = {
    Sentiment.POSITIVE: 1.0,
    Sentiment.NEUTRAL: 0.5,
    Sentiment.NEGATIVE: 0.0,
}


def position_weight(position: int) -> float:
    """Weight of a list position: 1st=1.0, 2nd=0.5, 3rd=0.33, 4th and later=0.25."""
    if position == 1:
        return 1.0
    if position == 2:
        return 0.5
    if position == 3:
        return 0.33
    return 0.25


def calculate_visibility_score(responses: List[AnnotatedResponse]) -> ScoreBreakdown:
    """
    Aggregate a batch of annotated answers into the visibility score.

    Four sub-scores in [0, 100] are combined with SCORE_WEIGHTS:
    - mention_frequency: share of answers mentioning the brand
    - sentiment_quality: average sentiment weight of the mentions
    - platform_coverage: platforms with at least one mention out of 3
    - position_strength: average list position weight of the mentions

    The total is computed from the unrounded sub-scores and rounded once.

    Args:
        responses: Annotated answers for one audit

    Returns:
        ScoreBreakdown, all zeros for an empty batch
    """
    total_queries = len(responses)
    if total_queries == 0:
        return ScoreBreakdown()

    mentioned = [r for r in responses if r.brand_mentioned]

    mention_frequency = (len(mentioned) / total_queries) * 100

    sentiment_quality = 0.0
    position_strength = 0.0
    if mentioned:
        sentiment_sum = sum(SENTIMENT_WEIGHTS[r.mention_details.sentiment] for r in mentioned)
        sentiment_quality = (sentiment_sum / len(mentioned)) * 100

        position_sum = sum(position_weight(r.mention_details.position or 1) for r in mentioned)
        position_strength = (position_sum / len(mentioned)) * 100

    platforms_with_mention = {r.platform for r in mentioned}
    platform_coverage = (len(platforms_with_mention) / PLATFORM_COUNT) * 100

    total = round_half_up(
        mention_frequency * SCORE_WEIGHTS["mention_frequency"] +
        sentiment_quality * SCORE_WEIGHTS["sentiment_quality"] +
        platform_coverage * SCORE_WEIGHTS["platform_coverage"] +
        position_strength * SCORE_WEIGHTS["position_strength"]
    )

    return ScoreBreakdown(
        mention_frequency=round_half_up(mention_frequency),
        sentiment_quality=round_half_up(sentiment_quality),
        platform_coverage=round_half_up(platform_coverage),
        position_strength=round_half_up(position_strength),
        total=min(100, total),
    )


def calculate_competitor_scores(responses: List[AnnotatedResponse]) -> List[CompetitorResult]:
    """
    Rank competitors found across a batch of annotated answers.

    score = 60 * (mentions / answers in batch) + 40 * (platforms / 3)

    Args:
        responses: Annotated answers with competitors_found filled in

    Returns:
        Up to MAX_COMPETITORS results sorted by score, ties in first-seen order
    """
    total_responses = len(responses)
    competitor_stats: Dict[str, Dict] = {}

    for response in responses:
        for competitor in response.competitors_found:
            key = competitor.name.lower()
            if key not in competitor_stats:
                competitor_stats[key] = {"mention_count": 0, "platforms": []}
            stats = competitor_stats[key]
            stats["mention_count"] += 1
            if response.platform not in stats["platforms"]:
                stats["platforms"].append(response.platform)

    results = []
    for name, stats in competitor_stats.items():
        mention_rate = stats["mention_count"] / total_responses
        platform_factor = len(stats["platforms"]) / PLATFORM_COUNT
        score = round_half_up(mention_rate * 60 + platform_factor * 40)

        results.append(CompetitorResult(
            name=title_case(name),
            score=min(100, score),
            mention_count=stats["mention_count"],
            platforms=list(stats["platforms"]),
        ))

    results.sort(key=lambda result: result.score, reverse=True)
    return results[:MAX_COMPETITORS]


def platforms_with_mentions(responses: List[AnnotatedResponse]) -> List[Platform]:
    """Platforms that mentioned the brand at least once, in first-seen order."""
    platforms: List[Platform] = []
    for response in responses:
        if response.brand_mentioned and response.platform not in platforms:
            platforms.append(response.platform)
    return platforms
