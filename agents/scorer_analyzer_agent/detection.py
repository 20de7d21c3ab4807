"""
Brand and competitor mention detection for AI answers.

Detection is a plain text scan: lowercase substring search for names and
fixed word lists for sentiment. No tokenization, so a listed word inside a
longer word still counts.
"""

import re
from typing import List, Mapping, Sequence

from config.constants import (
    COMPETITOR_SENTIMENT_RADIUS,
    COMPETITOR_SENTIMENT_WORDS,
    KNOWN_BRANDS,
    MENTION_SENTIMENT_RADIUS,
    MENTION_SENTIMENT_WORDS,
    MENTION_SNIPPET_RADIUS,
)
from models.schemas import AnnotatedResponse, CompetitorMention, MentionResult, Sentiment
from utils.helpers import title_case

NUMBERED_ITEM_PATTERN = re.compile(r"\d+\.\s")
WHITESPACE_PATTERN = re.compile(r"\s+")


def classify_sentiment(context: str, words: Mapping[str, Sequence[str]]) -> Sentiment:
    """
    Classify a lowercase context window against positive/negative word lists.

    Each listed word counts once no matter how often it appears.
    """
    positive_hits = sum(1 for word in words["positive"] if word in context)
    negative_hits = sum(1 for word in words["negative"] if word in context)

    if positive_hits > negative_hits:
        return Sentiment.POSITIVE
    if negative_hits > positive_hits:
        return Sentiment.NEGATIVE
    return Sentiment.NEUTRAL


def detect_list_position(normalized_text: str, mention_index: int) -> int:
    """
    Estimate which numbered list item a mention belongs to.

    Counts "<n>. " markers up to the mention, so in "1. A 2. B 3. BrandX"
    BrandX is item 3. Text without numbering yields 1.
    """
    markers = NUMBERED_ITEM_PATTERN.findall(normalized_text[:mention_index])
    # The marker count is the item number ("3. BrandX" is 3, not 4); unnumbered text is 1
    return max(len(markers), 1)


def detect_brand_mention(text: str, brand_name: str) -> MentionResult:
    """
    Detect whether, where and how a brand is mentioned in an AI answer.

    The brand is matched case-insensitively. If the direct search fails, the
    brand is searched again with all whitespace removed from both sides
    ("m Caffeine" vs "mcaffeine"); such a match is reported at index 0.

    Args:
        text: Raw AI answer text
        brand_name: Brand to look for

    Returns:
        MentionResult with sentiment, list position and a context snippet
    """
    normalized_text = text.lower()
    normalized_brand = brand_name.lower().strip()

    index = normalized_text.find(normalized_brand)
    index_no_spaces = -1
    if index == -1:
        brand_no_spaces = WHITESPACE_PATTERN.sub("", normalized_brand)
        text_no_spaces = WHITESPACE_PATTERN.sub("", normalized_text)
        index_no_spaces = text_no_spaces.find(brand_no_spaces)

    if index == -1 and index_no_spaces == -1:
        return MentionResult(mentioned=False, sentiment=Sentiment.NEUTRAL, position=0, snippet="")

    # No-space matches have no offset in the original text
    mention_index = index if index != -1 else 0

    snippet_start = max(0, mention_index - MENTION_SNIPPET_RADIUS)
    snippet_end = min(len(text), mention_index + len(brand_name) + MENTION_SNIPPET_RADIUS)
    snippet = text[snippet_start:snippet_end].strip()

    position = detect_list_position(normalized_text, mention_index)

    sentiment_context = normalized_text[
        max(0, mention_index - MENTION_SENTIMENT_RADIUS):
        min(len(normalized_text), mention_index + len(normalized_brand) + MENTION_SENTIMENT_RADIUS)
    ]
    sentiment = classify_sentiment(sentiment_context, MENTION_SENTIMENT_WORDS)

    return MentionResult(mentioned=True, sentiment=sentiment, position=position, snippet=snippet)


def extract_competitors(text: str, brand_name: str, category: str) -> List[CompetitorMention]:
    """
    Find known competitor brands of a category inside an AI answer.

    Competitors are reported in the category list order, not the order in
    which they appear in the text. Known brands that equal, contain or are
    contained in the target brand are skipped.

    Args:
        text: Raw AI answer text
        brand_name: The audited brand
        category: Category id used to pick the known brand list

    Returns:
        List of CompetitorMention, positions numbered from 1
    """
    normalized_text = text.lower()
    normalized_brand = brand_name.lower().strip()
    known_brands = KNOWN_BRANDS.get(category, ())

    competitors = []
    position = 1

    for brand in known_brands:
        if brand == normalized_brand or normalized_brand in brand or brand in normalized_brand:
            continue

        index = normalized_text.find(brand)
        if index == -1:
            continue

        context = normalized_text[
            max(0, index - COMPETITOR_SENTIMENT_RADIUS):
            min(len(normalized_text), index + len(brand) + COMPETITOR_SENTIMENT_RADIUS)
        ]

        competitors.append(CompetitorMention(
            name=title_case(brand),
            position=position,
            sentiment=classify_sentiment(context, COMPETITOR_SENTIMENT_WORDS),
        ))
        position += 1

    return competitors


def enrich_response_with_competitors(
    response: AnnotatedResponse,
    brand_name: str,
    category: str
) -> AnnotatedResponse:
    """Return a copy of the response with competitors_found filled in."""
    competitors = extract_competitors(response.response_text, brand_name, category)
    return response.model_copy(update={"competitors_found": competitors})
