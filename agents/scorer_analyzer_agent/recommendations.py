"""
Recommendation generation from content gaps.

Six templated actions, each emitted only when the gap mix calls for it.
The final plan keeps the five with the highest impact.
"""

from typing import List

from config.constants import (
    AGGREGATOR_SITES,
    DEFAULT_AGGREGATOR_SITES,
    DEFAULT_SUBREDDITS,
    GUIDE_LABELS,
    MAX_RECOMMENDATIONS,
    SUBREDDITS,
)
from models.schemas import Difficulty, Gap, GapPriority, GapType, Impact, Recommendation

IMPACT_ORDER = {
    Impact.HIGH: 3,
    Impact.MEDIUM: 2,
    Impact.LOW: 1,
}


def get_guide_label(category: str) -> str:
    """Label used in category guide titles, the category id when unknown."""
    return GUIDE_LABELS.get(category, str(getattr(category, "value", category)))


def get_subreddits(category: str) -> List[str]:
    return list(SUBREDDITS.get(category, DEFAULT_SUBREDDITS))


def get_aggregator_sites(category: str) -> List[str]:
    return list(AGGREGATOR_SITES.get(category, DEFAULT_AGGREGATOR_SITES))


def _quoted_prompts(gaps: List[Gap], limit: int = 3) -> str:
    return ", ".join(f'"{gap.prompt}"' for gap in gaps[:limit])


def generate_recommendations(
    gaps: List[Gap],
    brand_name: str,
    category: str,
    competitor_names: List[str]
) -> List[Recommendation]:
    """
    Turn gaps into a ranked action plan.

    Args:
        gaps: Gaps from identify_gaps
        brand_name: The audited brand
        category: Category id of the brand
        competitor_names: Ranked competitor names, first is the top competitor

    Returns:
        At most five recommendations sorted by impact
    """
    subreddits = get_subreddits(category)
    aggregators = get_aggregator_sites(category)
    top_competitor = competitor_names[0] if competitor_names else "competitors"
    category_id = str(getattr(category, "value", category))

    high_gaps = [g for g in gaps if g.priority == GapPriority.HIGH]
    category_gaps = [g for g in gaps if g.type == GapType.MISSING_FROM_CATEGORY]
    comparison_gaps = [g for g in gaps if g.type == GapType.MISSING_FROM_COMPARISON]

    recommendations = []

    if comparison_gaps or high_gaps:
        recommendations.append(Recommendation(
            title=f'Create a detailed "{brand_name} vs {top_competitor}" comparison article',
            why=(
                f'AI models heavily cite comparison articles when answering "which is better" queries. '
                f"{top_competitor} appears in {len(high_gaps)} queries where {brand_name} doesn't. "
                f"Publishing an honest comparison gives AI models a source to cite your brand."
            ),
            difficulty=Difficulty.MEDIUM,
            impact=Impact.HIGH,
            action_detail=(
                f"Publish a 1,500+ word comparison on your blog covering: features, pricing, pros/cons, "
                f"and use cases. Be balanced, since AI models prefer objective content over promotional. "
                f"Include a comparison table with specific data points. "
                f"Target these specific queries: {_quoted_prompts(comparison_gaps)}."
            ),
        ))

    recommendations.append(Recommendation(
        title=f"Build authentic Reddit presence in {' and '.join(subreddits[:2])}",
        why=(
            "Reddit is the #1 source AI models cite: 40% of all LLM citations come from Reddit. "
            "Indian D2C brands have almost zero Reddit presence, making this the biggest "
            "untapped opportunity."
        ),
        difficulty=Difficulty.MEDIUM,
        impact=Impact.HIGH,
        action_detail=(
            f"Start by genuinely participating in {', '.join(subreddits)}. Answer real questions about "
            f"your category. Share honest experiences (not promotional posts, Reddit communities detect "
            f"and ban spam). After building credibility, naturally mention {brand_name} when relevant. "
            f"Target: 2-3 genuine Reddit posts per week for 3 months."
        ),
    ))

    if category_gaps:
        recommendations.append(Recommendation(
            title=f"Get listed on {', '.join(aggregators[:3])} with detailed product pages",
            why=(
                f"AI models pull data from aggregator and review sites. Your competitors appear on "
                f"these platforms but {brand_name} is missing or has minimal presence. "
                f"{len(category_gaps)} category queries don't mention your brand."
            ),
            difficulty=Difficulty.EASY,
            impact=Impact.MEDIUM,
            action_detail=(
                f"Submit your brand and products to: {', '.join(aggregators)}. Ensure each listing has: "
                f"detailed product descriptions with specific claims, customer review integration, "
                f"pricing info, and high-quality images. Encourage existing customers to leave reviews "
                f"on these platforms."
            ),
        ))

    recommendations.append(Recommendation(
        title="Optimize your website for AI extraction",
        why=(
            f"When AI is asked about {brand_name}, it pulls from your website. Most D2C sites are "
            f"optimized for humans, not AI. Adding structured data, FAQ schema, and clear factual "
            f"claims makes your site 3x more likely to be cited."
        ),
        difficulty=Difficulty.EASY,
        impact=Impact.MEDIUM,
        action_detail=(
            f"Quick wins: (1) Add FAQ schema markup to your top 5 product pages with common questions "
            f'and clear answers. (2) Create a comprehensive "About {brand_name}" page with founding '
            f"story, key differentiators, awards, and specific statistics. (3) Add comparison tables "
            f"with concrete numbers on product pages. (4) Ensure your meta descriptions include "
            f'category keywords ("best [category] in India").'
        ),
    ))

    if len(high_gaps) >= 3:
        recommendations.append(Recommendation(
            title="Get featured in high-authority Indian publications",
            why=(
                f"Perplexity and Google AI heavily weight authoritative sources. {top_competitor} is "
                f"cited from publications that {brand_name} doesn't appear in. High-authority backlinks "
                f"are the strongest signal for AI recommendation."
            ),
            difficulty=Difficulty.HARD,
            impact=Impact.HIGH,
            action_detail=(
                f"Target these publications: YourStory, Inc42, BusinessToday, Economic Times Brand "
                f"Equity, Mint. Pitch angles: founder story, product innovation, category insights "
                f'("The state of {category_id} in India 2025"), or a data-driven industry report. Even '
                f"one feature in a top publication can significantly boost AI citations."
            ),
        ))

    if len(category_gaps) >= 2:
        recommendations.append(Recommendation(
            title=f'Publish a "Best {get_guide_label(category)} in India" guide featuring your brand',
            why=(
                f'{len(category_gaps)} category-level queries ("best [product] in India") don\'t mention '
                f"{brand_name}. Publishing authoritative category content positions your brand as a "
                f"thought leader and gives AI models a source to cite."
            ),
            difficulty=Difficulty.MEDIUM,
            impact=Impact.MEDIUM,
            action_detail=(
                "Create a comprehensive, honest guide reviewing the top 10 brands in your category "
                "(including yours). Use specific metrics: ingredients, pricing, reviews, certifications. "
                "Don't make it purely self-promotional, AI prefers balanced content. Include quotes from "
                "real customers and link to third-party reviews."
            ),
        ))

    recommendations.sort(key=lambda rec: IMPACT_ORDER[rec.impact], reverse=True)
    return recommendations[:MAX_RECOMMENDATIONS]
