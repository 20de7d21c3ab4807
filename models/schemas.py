"""
Data models and schemas for the AI Brand Visibility Audit.

This module defines the enumerations, the immutable value objects passed
through the scoring pipeline, the API request/response models and the
workflow state used by the audit orchestrator.

All models expose snake_case attributes and serialize with camelCase
aliases, which is the wire format of the HTTP API and the cache.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator, model_validator
from pydantic.alias_generators import to_camel
from typing_extensions import TypedDict


# Enumerations

class Platform(str, Enum):
    """AI answer surfaces queried during an audit."""
    CHATGPT = "chatgpt"
    PERPLEXITY = "perplexity"
    GOOGLE_AI = "google_ai"


class Sentiment(str, Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class CategoryId(str, Enum):
    """Closed set of product categories supported by the audit."""
    BEAUTY = "beauty"
    FOOD = "food"
    HEALTH = "health"
    FASHION = "fashion"
    ELECTRONICS = "electronics"
    BABY = "baby"
    HOME = "home"
    PET = "pet"


class AuditStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class GapPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class GapType(str, Enum):
    MISSING_FROM_COMPARISON = "missing_from_comparison"
    MISSING_FROM_CATEGORY = "missing_from_category"
    MISSING_FROM_RECOMMENDATION = "missing_from_recommendation"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class Impact(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# Pipeline Value Objects

class ValueObject(BaseModel):
    """Base for immutable pipeline records with camelCase wire names."""
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class MentionResult(ValueObject):
    """Outcome of scanning one answer for the target brand."""
    mentioned: bool
    sentiment: Sentiment = Sentiment.NEUTRAL
    position: int = 0
    snippet: str = ""


class MentionDetails(ValueObject):
    sentiment: Sentiment
    position: int = Field(1, ge=1)
    context_snippet: str = ""


class CompetitorMention(ValueObject):
    """A known competitor found in one answer."""
    name: str
    position: int = Field(..., ge=1)
    sentiment: Sentiment


class AnnotatedResponse(ValueObject):
    """
    One AI answer for one (prompt, platform) query, annotated with brand
    and competitor mentions.

    mention_details is present if and only if brand_mentioned is true.
    """
    platform: Platform
    prompt: str
    response_text: str = ""
    citations: Optional[List[str]] = None
    brand_mentioned: bool = False
    mention_details: Optional[MentionDetails] = None
    competitors_found: List[CompetitorMention] = Field(default_factory=list)
    cached: bool = False
    latency_ms: int = Field(0, ge=0)

    @model_validator(mode="after")
    def check_mention_details(self) -> "AnnotatedResponse":
        if self.brand_mentioned and self.mention_details is None:
            raise ValueError("mention_details is required when brand_mentioned is true")
        if not self.brand_mentioned and self.mention_details is not None:
            raise ValueError("mention_details must be empty when brand_mentioned is false")
        return self


class ScoreBreakdown(ValueObject):
    mention_frequency: int = Field(0, ge=0, le=100)
    sentiment_quality: int = Field(0, ge=0, le=100)
    platform_coverage: int = Field(0, ge=0, le=100)
    position_strength: int = Field(0, ge=0, le=100)
    total: int = Field(0, ge=0, le=100)


class CompetitorResult(ValueObject):
    name: str
    score: int = Field(0, ge=0, le=100)
    mention_count: int = Field(0, ge=0)
    platforms: List[Platform] = Field(default_factory=list)


class Gap(ValueObject):
    """A query/platform pair where competitors appear but the brand does not."""
    prompt: str
    platform: Platform
    priority: GapPriority
    type: GapType
    competitors_present: List[str] = Field(default_factory=list)


class Recommendation(ValueObject):
    title: str
    why: str
    difficulty: Difficulty
    impact: Impact
    action_detail: str


# API Request/Response Models

class AuditRequest(BaseModel):
    """Request model for the POST /api/audit endpoint."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    brand_name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Brand to audit",
        examples=["Mamaearth"]
    )
    website_url: Optional[HttpUrl] = Field(
        None,
        description="Brand website (optional)",
        examples=["https://mamaearth.in"]
    )
    category: CategoryId = Field(
        ...,
        description="Product category of the brand",
        examples=["beauty"]
    )
    competitors: Optional[List[str]] = Field(
        None,
        max_length=5,
        description="Competitors to always include in the report (max 5)",
        examples=[["mCaffeine", "Minimalist"]]
    )

    @field_validator("website_url", mode="before")
    @classmethod
    def empty_url_as_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("competitors")
    @classmethod
    def strip_competitors(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        if value is None:
            return value
        return [name.strip() for name in value]


class BrandInfo(ValueObject):
    name: str
    category: CategoryId


class AuditResponse(ValueObject):
    """Response model for the POST /api/audit endpoint."""
    audit_id: str
    status: AuditStatus
    visibility_score: Optional[int] = None
    score_breakdown: Optional[ScoreBreakdown] = None
    competitors: List[CompetitorResult] = Field(default_factory=list)
    gaps: List[Gap] = Field(default_factory=list)
    recommendations: List[Recommendation] = Field(default_factory=list)
    brand: BrandInfo


class QueryRecord(ValueObject):
    """Persisted outcome of one provider query within an audit."""
    platform: Platform
    prompt: str
    response_text: str = ""
    brand_mentioned: bool = False
    mention_sentiment: Optional[Sentiment] = None
    mention_position: Optional[int] = None
    competitors_mentioned: List[CompetitorMention] = Field(default_factory=list)
    cached: bool = False


class AuditRecord(ValueObject):
    """Durable copy of a finished audit."""
    audit: AuditResponse
    website_url: Optional[str] = None
    created_at: datetime
    completed_at: Optional[datetime] = None
    queries: List[QueryRecord] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Response model for the /health endpoint."""
    status: str = Field(
        ...,
        description="Health status of the system",
        examples=["healthy", "degraded"]
    )
    version: str = Field(
        ...,
        description="Application version",
        examples=["1.0.0"]
    )
    cache_connected: bool = Field(
        False,
        description="Whether the Redis cache is reachable"
    )


# LangGraph Workflow State Model

class AuditWorkflowState(TypedDict, total=False):
    """
    State model for the audit orchestration workflow.

    Fields are marked as total=False to allow partial state updates at
    each step.
    """
    brand_name: str
    category: str
    competitors: List[str]  # User-declared competitor names
    platforms: List[Platform]
    prompts: List[str]
    response_cache: Any  # Optional ResponseCache, injected by the caller
    timeout_seconds: Optional[float]
    responses: List[AnnotatedResponse]  # Raw provider results, competitors not yet detected
    enriched_responses: List[AnnotatedResponse]
    score_breakdown: ScoreBreakdown
    competitor_results: List[CompetitorResult]
    gaps: List[Gap]
    recommendations: List[Recommendation]
    errors: List[str]
