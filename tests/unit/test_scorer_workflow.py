"""
Tests for the scorer analyzer LangGraph workflow.
"""

from agents.ai_model_tester_agent.utils import build_response
from agents.scorer_analyzer_agent import run_scorer_analysis_workflow
from agents.scorer_analyzer_agent.nodes import merge_declared_competitors
from models.schemas import CategoryId, CompetitorResult, Platform


def test_workflow_on_sample_answers(sample_answers):
    responses = [
        build_response(platform, prompt, text, "Mamaearth")
        for platform, prompt, text in sample_answers
    ]

    events = []
    result = run_scorer_analysis_workflow(
        brand_name="Mamaearth",
        category=CategoryId.BEAUTY,
        responses=responses,
        declared_competitors=["mCaffeine"],
        progress_callback=lambda step, status, message, data: events.append((step, status))
    )

    breakdown = result["score_breakdown"]
    print(f"\n📊 Visibility score: {breakdown.total}")

    # Only ChatGPT mentions the brand, at list item 3 with positive wording
    assert breakdown.mention_frequency == 33
    assert breakdown.platform_coverage == 33
    assert breakdown.sentiment_quality == 100
    assert breakdown.position_strength == 33

    names = [c.name for c in result["competitor_results"]]
    assert names[0] == "Minimalist"
    assert names[-1] == "mCaffeine"
    assert result["competitor_results"][-1].score == 0

    # Perplexity and Google answers miss the brand but list competitors
    assert {gap.platform for gap in result["gaps"]} == {Platform.PERPLEXITY, Platform.GOOGLE_AI}
    assert all(gap.priority.value == "high" for gap in result["gaps"])

    assert 2 <= len(result["recommendations"]) <= 5
    assert result["summary"]["total_mentions"] == 1
    assert events[-1] == ("scoring", "completed")


def test_workflow_on_empty_batch():
    result = run_scorer_analysis_workflow("Mamaearth", CategoryId.BEAUTY, [])

    assert result["score_breakdown"].total == 0
    assert result["competitor_results"] == []
    assert result["gaps"] == []
    assert len(result["recommendations"]) == 2


def test_merge_declared_competitors_skips_ranked_names():
    ranked = [CompetitorResult(name="Plum", score=40, mention_count=2, platforms=[Platform.CHATGPT])]

    merged = merge_declared_competitors(ranked, ["plum", "Lakme"])

    assert [c.name for c in merged] == ["Plum", "Lakme"]
    assert merged[1].score == 0
    assert merged[1].platforms == []
