# Utilities package

from .helpers import (
    generate_audit_id,
    sanitize_brand_name,
    title_case,
    round_half_up,
    truncate_text
)

__all__ = [
    "generate_audit_id",
    "sanitize_brand_name",
    "title_case",
    "round_half_up",
    "truncate_text"
]
