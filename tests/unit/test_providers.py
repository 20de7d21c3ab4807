"""
Tests for the provider clients and query_platform.

Upstream APIs are mocked; no network access.
"""

from unittest.mock import MagicMock

import pytest
import requests

from agents.ai_model_tester_agent import utils as providers
from agents.ai_model_tester_agent.utils import query_platform, retry_with_backoff
from config.settings import settings
from models.schemas import Platform


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch):
    monkeypatch.setattr(providers.time, "sleep", lambda seconds: None)


@pytest.fixture
def api_keys(monkeypatch):
    monkeypatch.setattr(settings, "OPENAI_API_KEY", "sk-test")
    monkeypatch.setattr(settings, "PERPLEXITY_API_KEY", "pplx-test")
    monkeypatch.setattr(settings, "SERPAPI_KEY", "serp-test")


def fake_http_response(payload):
    response = MagicMock()
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    return response


class FakeCache:
    def __init__(self, stored=None):
        self.stored = dict(stored or {})
        self.writes = []

    def get(self, platform, prompt):
        return self.stored.get((platform, prompt))

    def set(self, platform, prompt, payload):
        self.writes.append((platform, prompt, payload))
        self.stored[(platform, prompt)] = payload
        return True


def test_chatgpt_answer_is_annotated(api_keys, monkeypatch):
    llm = MagicMock()
    llm.invoke.return_value = MagicMock(content="1. Plum\n2. Mamaearth - a trusted pick")
    chat_cls = MagicMock(return_value=llm)
    monkeypatch.setattr(providers, "ChatOpenAI", chat_cls)

    result = query_platform("chatgpt", "best skincare brands", "Mamaearth")

    assert result.platform == Platform.CHATGPT
    assert result.brand_mentioned
    assert result.mention_details.position == 2
    assert result.competitors_found == []
    assert not result.cached
    assert chat_cls.call_args.kwargs["model"] == "gpt-4o-mini"
    assert chat_cls.call_args.kwargs["temperature"] == 0.3
    assert chat_cls.call_args.kwargs["max_tokens"] == 1000


def test_perplexity_keeps_citations(api_keys, monkeypatch):
    post = MagicMock(return_value=fake_http_response({
        "choices": [{"message": {"content": "Minimalist is popular."}}],
        "citations": ["https://example.com/a", "https://example.com/b"],
    }))
    monkeypatch.setattr(providers.requests, "post", post)

    result = query_platform(Platform.PERPLEXITY, "best serum", "Mamaearth")

    assert result.response_text == "Minimalist is popular."
    assert result.citations == ["https://example.com/a", "https://example.com/b"]
    assert not result.brand_mentioned
    assert post.call_args.kwargs["json"]["model"] == "sonar"


def test_google_ai_joins_text_blocks(api_keys, monkeypatch):
    get = MagicMock(return_value=fake_http_response({
        "ai_overview": {"text_blocks": [{"text": "Top brands:"}, {"snippet": "Mamaearth and Plum"}]}
    }))
    monkeypatch.setattr(providers.requests, "get", get)

    result = query_platform(Platform.GOOGLE_AI, "best face wash", "Mamaearth")

    assert result.response_text == "Top brands:\nMamaearth and Plum"
    assert result.brand_mentioned
    params = get.call_args.kwargs["params"]
    assert params["gl"] == "in"
    assert params["hl"] == "en"


def test_google_ai_without_overview_is_neutral(api_keys, monkeypatch):
    cache = FakeCache()
    monkeypatch.setattr(providers.requests, "get", MagicMock(return_value=fake_http_response({})))

    result = query_platform(Platform.GOOGLE_AI, "best face wash", "Mamaearth", cache)

    assert result.response_text == ""
    assert not result.brand_mentioned
    assert result.mention_details is None
    assert cache.writes == []


def test_missing_key_gives_neutral_record(monkeypatch):
    monkeypatch.setattr(settings, "PERPLEXITY_API_KEY", None)
    post = MagicMock()
    monkeypatch.setattr(providers.requests, "post", post)

    result = query_platform(Platform.PERPLEXITY, "best serum", "Mamaearth")

    assert result.response_text == ""
    assert not result.brand_mentioned
    assert result.latency_ms >= 0
    post.assert_not_called()


def test_upstream_failure_is_retried_then_absorbed(api_keys, monkeypatch):
    post = MagicMock(side_effect=requests.ConnectionError("connection reset"))
    monkeypatch.setattr(providers.requests, "post", post)

    result = query_platform(Platform.PERPLEXITY, "best serum", "Mamaearth")

    assert result.response_text == ""
    assert not result.brand_mentioned
    assert post.call_count == 1 + settings.PROVIDER_MAX_RETRIES


def test_fresh_answer_is_cached(api_keys, monkeypatch):
    cache = FakeCache()
    monkeypatch.setattr(providers.requests, "post", MagicMock(return_value=fake_http_response({
        "choices": [{"message": {"content": "Mamaearth is great"}}],
    })))

    query_platform(Platform.PERPLEXITY, "best serum", "Mamaearth", cache)

    assert len(cache.writes) == 1
    platform, prompt, payload = cache.writes[0]
    assert payload["responseText"] == "Mamaearth is great"
    assert payload["brandMentioned"] is True


def test_cache_hit_reruns_detection_for_requesting_brand(api_keys, monkeypatch):
    cache = FakeCache()
    monkeypatch.setattr(providers.requests, "post", MagicMock(return_value=fake_http_response({
        "choices": [{"message": {"content": "1. Plum\n2. Minimalist is highly rated"}}],
    })))
    query_platform(Platform.PERPLEXITY, "best serum", "Plum", cache)

    post = MagicMock()
    monkeypatch.setattr(providers.requests, "post", post)
    result = query_platform(Platform.PERPLEXITY, "best serum", "Minimalist", cache)

    post.assert_not_called()
    assert result.cached
    assert result.brand_mentioned
    assert result.mention_details.position == 2


def test_malformed_cache_entry_falls_through(api_keys, monkeypatch):
    cache = FakeCache({(Platform.CHATGPT, "best serum"): {"platform": "nope"}})
    llm = MagicMock()
    llm.invoke.return_value = MagicMock(content="Plum")
    monkeypatch.setattr(providers, "ChatOpenAI", MagicMock(return_value=llm))

    result = query_platform(Platform.CHATGPT, "best serum", "Mamaearth", cache)

    assert not result.cached
    assert result.response_text == "Plum"


def test_retry_with_backoff_returns_first_success():
    calls = []

    @retry_with_backoff(max_retries=3, initial_delay=0)
    def flaky():
        calls.append(1)
        if len(calls) < 3:
            raise RuntimeError("429 too many requests")
        return "ok"

    assert flaky() == "ok"
    assert len(calls) == 3


def test_retry_with_backoff_reraises_last_error():
    @retry_with_backoff(max_retries=1, initial_delay=0)
    def always_fails():
        raise ValueError("boom")

    with pytest.raises(ValueError):
        always_fails()


def http_error(status_code):
    response = MagicMock(status_code=status_code)
    return requests.HTTPError(f"{status_code} Client Error", response=response)


def test_unauthorized_is_not_retried(api_keys, monkeypatch):
    failing = fake_http_response({})
    failing.raise_for_status.side_effect = http_error(401)
    post = MagicMock(return_value=failing)
    monkeypatch.setattr(providers.requests, "post", post)

    result = query_platform(Platform.PERPLEXITY, "best serum", "Mamaearth")

    assert result.response_text == ""
    assert post.call_count == 1


def test_throttling_and_server_errors_are_retried(api_keys, monkeypatch):
    for status_code in (429, 503):
        failing = fake_http_response({})
        failing.raise_for_status.side_effect = http_error(status_code)
        get = MagicMock(return_value=failing)
        monkeypatch.setattr(providers.requests, "get", get)

        query_platform(Platform.GOOGLE_AI, "best face wash", "Mamaearth")

        assert get.call_count == 1 + settings.PROVIDER_MAX_RETRIES


def test_call_timeout_fits_audit_budget(monkeypatch):
    monkeypatch.setattr(settings, "PROVIDER_TIMEOUT", 30.0)
    monkeypatch.setattr(settings, "PROVIDER_MAX_RETRIES", 2)
    monkeypatch.setattr(settings, "PROVIDER_RETRY_DELAY", 1.0)
    monkeypatch.setattr(settings, "AUDIT_TIMEOUT_SECONDS", 60.0)

    timeout = providers.call_timeout()

    assert timeout == 19.0
    assert timeout * 3 + 1.0 + 2.0 <= 60.0

    monkeypatch.setattr(settings, "PROVIDER_TIMEOUT", 10.0)
    assert providers.call_timeout() == 10.0
