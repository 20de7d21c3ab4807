"""
State for the AI model tester graph.
"""

from typing import Any, List, Optional, TypedDict

from models.schemas import AnnotatedResponse, Platform


class AIModelTesterState(TypedDict):
    """State for the AI model tester graph."""
    # Input
    prompts: List[str]
    platforms: List[Platform]
    brand_name: str
    response_cache: Any  # Optional ResponseCache
    timeout_seconds: Optional[float]

    # Output
    responses: List[AnnotatedResponse]  # Only calls that finished in time

    # Metadata
    errors: List[str]
    completed: bool
