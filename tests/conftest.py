"""
Shared fixtures for the audit test suite.
"""

from typing import List, Optional

import pytest

from models.schemas import (
    AnnotatedResponse,
    CompetitorMention,
    MentionDetails,
    Platform,
    Sentiment,
)


def build_response(
    platform: Platform = Platform.CHATGPT,
    prompt: str = "best skincare brands in India",
    text: str = "",
    mentioned: bool = False,
    sentiment: Sentiment = Sentiment.NEUTRAL,
    position: int = 1,
    competitors: Optional[List[str]] = None,
    cached: bool = False,
) -> AnnotatedResponse:
    """Build an AnnotatedResponse without going through detection."""
    details = None
    if mentioned:
        details = MentionDetails(sentiment=sentiment, position=position, context_snippet=text[:100])

    return AnnotatedResponse(
        platform=platform,
        prompt=prompt,
        response_text=text,
        brand_mentioned=mentioned,
        mention_details=details,
        competitors_found=[
            CompetitorMention(name=name, position=i, sentiment=Sentiment.NEUTRAL)
            for i, name in enumerate(competitors or [], 1)
        ],
        cached=cached,
    )


@pytest.fixture
def make_response():
    return build_response


@pytest.fixture
def sample_answers():
    """Three realistic answers to the same beauty prompt, one per platform."""
    prompt = "What are the best skincare brands in India?"
    return [
        (Platform.CHATGPT, prompt,
         "Here are the top picks:\n1. Minimalist - trusted for actives\n2. Plum - great vegan range\n"
         "3. Mamaearth - popular toxin-free brand"),
        (Platform.PERPLEXITY, prompt,
         "Popular options include Minimalist, Dot & Key and Plum. Some users report issues with pricing."),
        (Platform.GOOGLE_AI, prompt,
         "Leading Indian skincare brands are Lakme, Biotique and Forest Essentials."),
    ]


class FakeRedis:
    """In-memory stand-in for the few Redis counter commands the limiter uses."""

    def __init__(self):
        self.values = {}
        self.expirations = {}

    def incr(self, key):
        self.values[key] = self.values.get(key, 0) + 1
        return self.values[key]

    def expireat(self, key, when):
        self.expirations[key] = when
        return True


@pytest.fixture
def fake_redis():
    return FakeRedis()
