"""
Tests for the HTTP API with the audit workflow replaced by a canned result.
"""

import pytest
from fastapi.testclient import TestClient

from models.schemas import (
    AnnotatedResponse,
    CompetitorResult,
    Difficulty,
    Gap,
    GapPriority,
    GapType,
    Impact,
    MentionDetails,
    Platform,
    Recommendation,
    ScoreBreakdown,
    Sentiment,
)
from src.app import app, init_app_state
from src.controllers import audit_controller
from utils.rate_limit import DailyRateLimiter


class MemoryStore:
    def __init__(self):
        self.records = {}
        self.brands = {}

    def save_audit(self, record):
        self.records[record.audit.audit_id] = record
        self.brands.setdefault(record.audit.brand.name.lower(), []).append(record.audit.audit_id)
        return True

    def list_brand_audits(self, brand_name):
        return list(self.brands.get(brand_name.lower(), []))

    def get_audit(self, audit_id):
        return self.records.get(audit_id)


def canned_audit(brand_name, category, competitors=None, cache=None):
    ranked = [
        CompetitorResult(name=f"Brand {i}", score=90 - i * 10, mention_count=3, platforms=[Platform.CHATGPT])
        for i in range(5)
    ]
    declared = [CompetitorResult(name=name, score=0) for name in competitors or []]
    return {
        "score_breakdown": ScoreBreakdown(
            mention_frequency=40, sentiment_quality=50, platform_coverage=67,
            position_strength=50, total=49
        ),
        "competitor_results": ranked + declared,
        "gaps": [Gap(
            prompt="Best serum in India",
            platform=Platform.PERPLEXITY,
            priority=GapPriority.MEDIUM,
            type=GapType.MISSING_FROM_CATEGORY,
            competitors_present=["Brand 0"],
        )],
        "recommendations": [Recommendation(
            title="Optimize your website for AI extraction",
            why="why",
            difficulty=Difficulty.EASY,
            impact=Impact.MEDIUM,
            action_detail="detail",
        )],
        "enriched_responses": [
            AnnotatedResponse(
                platform=Platform.CHATGPT,
                prompt="Best serum in India",
                response_text="Mamaearth is the best",
                brand_mentioned=True,
                mention_details=MentionDetails(sentiment=Sentiment.POSITIVE, position=1),
            ),
        ],
        "errors": [],
    }


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def client(monkeypatch, store, fake_redis):
    monkeypatch.setattr(audit_controller, "run_audit", canned_audit)
    init_app_state(app)
    app.state.audit_store = store
    app.state.rate_limiter = DailyRateLimiter(fake_redis, limit=2)
    return TestClient(app)


VALID_BODY = {"brandName": "Mamaearth", "category": "beauty", "competitors": ["mCaffeine"]}


def test_successful_audit(client, store):
    response = client.post("/api/audit", json=VALID_BODY)

    assert response.status_code == 200
    data = response.json()
    print(f"\n✓ Audit {data['auditId']} scored {data['visibilityScore']}")

    assert data["status"] == "completed"
    assert data["visibilityScore"] == 49
    assert data["scoreBreakdown"]["platformCoverage"] == 67
    assert data["brand"] == {"name": "Mamaearth", "category": "beauty"}
    # Only the first five competitors are returned
    assert len(data["competitors"]) == 5
    assert data["gaps"][0]["type"] == "missing_from_category"
    assert response.headers["X-RateLimit-Remaining"] == "1"
    assert response.headers["X-RateLimit-Reset"].isdigit()

    record = store.records[data["auditId"]]
    assert record.queries[0].brand_mentioned
    assert record.queries[0].mention_sentiment is not None


def test_stored_audit_can_be_fetched(client):
    audit_id = client.post("/api/audit", json=VALID_BODY).json()["auditId"]

    response = client.get(f"/api/audit/{audit_id}")

    assert response.status_code == 200
    assert response.json()["audit"]["auditId"] == audit_id
    assert client.get("/api/audit/unknown").status_code == 404


def test_brand_audits_are_listed(client):
    first = client.post("/api/audit", json=VALID_BODY).json()["auditId"]
    second = client.post("/api/audit", json=VALID_BODY).json()["auditId"]

    response = client.get("/api/audit", params={"brand": "MAMAEARTH"})

    assert response.status_code == 200
    assert response.json()["auditIds"] == [first, second]
    assert client.get("/api/audit", params={"brand": "Plum"}).json()["auditIds"] == []
    assert client.get("/api/audit").status_code == 422


def test_unknown_category_is_rejected(client):
    response = client.post("/api/audit", json={"brandName": "Mamaearth", "category": "gardening"})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid input"
    assert "category" in body["details"]["fieldErrors"]


def test_too_many_competitors_and_blank_brand(client):
    response = client.post("/api/audit", json={
        "brandName": "   ",
        "category": "beauty",
        "competitors": ["a", "b", "c", "d", "e", "f"],
    })

    assert response.status_code == 400
    field_errors = response.json()["details"]["fieldErrors"]
    assert "brandName" in field_errors
    assert "competitors" in field_errors


def test_malformed_json_is_rejected(client):
    response = client.post("/api/audit", content=b"{not json", headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert response.json()["details"]["formErrors"]


def test_quota_exhaustion_returns_429(client):
    headers = {"x-forwarded-for": "10.0.0.1, 192.168.0.1"}
    assert client.post("/api/audit", json=VALID_BODY, headers=headers).status_code == 200
    assert client.post("/api/audit", json=VALID_BODY, headers=headers).status_code == 200

    response = client.post("/api/audit", json=VALID_BODY, headers=headers)

    assert response.status_code == 429
    body = response.json()
    assert body["code"] == "RATE_LIMIT"
    assert isinstance(body["resetAt"], int)
    assert response.headers["X-RateLimit-Remaining"] == "0"

    # A different client still has quota
    other = client.post("/api/audit", json=VALID_BODY, headers={"x-real-ip": "10.0.0.2"})
    assert other.status_code == 200


def test_workflow_failure_returns_500(client, monkeypatch):
    def broken_audit(*args, **kwargs):
        raise RuntimeError("graph exploded")

    monkeypatch.setattr(audit_controller, "run_audit", broken_audit)

    response = client.post("/api/audit", json=VALID_BODY)

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to run audit. Please try again."}


def test_health_without_redis(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "degraded"
    assert response.json()["cache_connected"] is False
