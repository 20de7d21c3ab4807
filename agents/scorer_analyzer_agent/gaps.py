"""
Content gap identification: queries where competitors show up and the brand does not.
"""

from collections import Counter
from typing import List

from models.schemas import AnnotatedResponse, Gap, GapPriority, GapType

COMPARISON_MARKERS = (" vs ", "compare", "versus")
RECOMMENDATION_MARKERS = ("should i", "recommend", "which")

PRIORITY_ORDER = {
    GapPriority.HIGH: 3,
    GapPriority.MEDIUM: 2,
    GapPriority.LOW: 1,
}


def classify_gap_type(prompt: str) -> GapType:
    """Classify a prompt; comparison wording wins over recommendation wording."""
    prompt_lower = prompt.lower()

    if any(marker in prompt_lower for marker in COMPARISON_MARKERS):
        return GapType.MISSING_FROM_COMPARISON
    if any(marker in prompt_lower for marker in RECOMMENDATION_MARKERS):
        return GapType.MISSING_FROM_RECOMMENDATION
    return GapType.MISSING_FROM_CATEGORY


def is_gap(response: AnnotatedResponse) -> bool:
    return not response.brand_mentioned and len(response.competitors_found) > 0


def identify_gaps(responses: List[AnnotatedResponse], brand_name: str) -> List[Gap]:
    """
    Find answers where at least one competitor appears but the brand is absent.

    Priority is high for two or more competitors, medium for one. A prompt
    that produces a gap on two or more platforms is high regardless.

    Args:
        responses: Annotated answers with competitors_found filled in
        brand_name: The audited brand

    Returns:
        Gaps sorted by priority, ties in encounter order
    """
    gap_counts_by_prompt = Counter(r.prompt for r in responses if is_gap(r))

    gaps = []
    for response in responses:
        if not is_gap(response):
            continue

        competitor_count = len(response.competitors_found)
        if competitor_count >= 2:
            priority = GapPriority.HIGH
        elif competitor_count == 1:
            priority = GapPriority.MEDIUM
        else:
            priority = GapPriority.LOW

        if gap_counts_by_prompt[response.prompt] >= 2:
            priority = GapPriority.HIGH

        gaps.append(Gap(
            prompt=response.prompt,
            platform=response.platform,
            priority=priority,
            type=classify_gap_type(response.prompt),
            competitors_present=[c.name for c in response.competitors_found],
        ))

    gaps.sort(key=lambda gap: PRIORITY_ORDER[gap.priority], reverse=True)
    return gaps
