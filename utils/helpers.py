"""
Utility functions and helpers for the AI Brand Visibility Audit.

This module provides small text and number helpers shared by the scoring
pipeline, the provider clients and the API layer.
"""

import math
import uuid
from typing import Optional


def generate_audit_id() -> str:
    """
    Generate a unique audit identifier.

    Returns:
        str: Unique audit ID as a string in UUID4 format

    Example:
        >>> audit_id = generate_audit_id()
        >>> print(audit_id)
        '550e8400-e29b-41d4-a716-446655440000'
    """
    return str(uuid.uuid4())


def sanitize_brand_name(brand_name: Optional[str]) -> str:
    """
    Collapse repeated whitespace in a brand name and handle None values.

    Example:
        >>> sanitize_brand_name("  mama   earth ")
        'mama earth'
        >>> sanitize_brand_name(None)
        ''
    """
    if not brand_name:
        return ""
    return " ".join(brand_name.strip().split())


def title_case(name: str) -> str:
    """
    Uppercase the first letter of each space-separated token.

    The rest of each token is left as-is, so "dot & key" becomes
    "Dot & Key" and "fire-boltt" becomes "Fire-boltt".
    """
    return " ".join(word[:1].upper() + word[1:] for word in name.split(" "))


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer with halves rounded up.

    Python's round() uses banker's rounding; scores are reported with
    half-up rounding so that 62.5 becomes 63.

    Example:
        >>> round_half_up(62.5)
        63
        >>> round_half_up(0.49)
        0
    """
    return int(math.floor(value + 0.5))


def truncate_text(text: str, max_length: int = 100, suffix: str = "...") -> str:
    """
    Truncate text to a maximum length with optional suffix.

    Useful for creating preview text or limiting response lengths in logs.

    Example:
        >>> truncate_text("This is a very long text", max_length=10)
        'This is...'
        >>> truncate_text("Short", max_length=10)
        'Short'
    """
    if len(text) <= max_length:
        return text
    return text[:max_length - len(suffix)] + suffix
