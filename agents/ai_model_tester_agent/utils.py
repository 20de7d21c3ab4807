"""
Provider clients for the AI model tester.

Each provider returns raw answer text; query_platform wraps the call with
the response cache, brand detection and failure handling so that callers
always receive a well-formed AnnotatedResponse.
"""

import logging
import time
from functools import wraps
from typing import List, Optional, Tuple

import requests
from langchain_core.messages import HumanMessage
from langchain_openai import ChatOpenAI
from pydantic import ValidationError

from agents.scorer_analyzer_agent.detection import detect_brand_mention
from config.settings import settings
from models.schemas import AnnotatedResponse, MentionDetails, Platform
from utils.helpers import truncate_text

logger = logging.getLogger(__name__)

ProviderReply = Tuple[str, Optional[List[str]]]  # (answer text, citations)


def _status_code(error: Exception) -> Optional[int]:
    """HTTP status carried by a requests or OpenAI client error, if any."""
    response = getattr(error, "response", None)
    status = getattr(response, "status_code", None)
    if status is None:
        status = getattr(error, "status_code", None)
    return status if isinstance(status, int) else None


def is_retryable(error: Exception) -> bool:
    """Client errors other than 429 will fail the same way on every attempt."""
    status = _status_code(error)
    return status is None or status == 429 or status >= 500


def call_timeout() -> float:
    """Per-call timeout, shrunk so every attempt plus backoff fits inside the audit budget."""
    retries = settings.PROVIDER_MAX_RETRIES
    backoff = settings.PROVIDER_RETRY_DELAY * (2 ** retries - 1)
    budget = max(settings.AUDIT_TIMEOUT_SECONDS - backoff, 1.0)
    return min(settings.PROVIDER_TIMEOUT, budget / (1 + retries))


def retry_with_backoff(max_retries=None, initial_delay=None):
    """Decorator for retrying functions with exponential backoff."""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            attempts = 1 + (max_retries if max_retries is not None else settings.PROVIDER_MAX_RETRIES)
            delay = initial_delay if initial_delay is not None else settings.PROVIDER_RETRY_DELAY
            last_exception = None

            for attempt in range(attempts):
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    last_exception = e
                    if not is_retryable(e):
                        logger.error(f"{func.__name__} failed with status {_status_code(e)}, not retrying: {str(e)}")
                        raise

                    error_msg = str(e).lower()

                    # Check if it's a rate limit error
                    is_rate_limit = any(term in error_msg for term in [
                        'rate limit', 'too many requests', '429', 'quota'
                    ])

                    if attempt < attempts - 1:
                        # Longer delay for rate limits
                        wait_time = delay * 3 if is_rate_limit else delay
                        logger.warning(
                            f"{func.__name__} attempt {attempt + 1}/{attempts} failed: {str(e)}. "
                            f"Retrying in {wait_time}s..."
                        )
                        time.sleep(wait_time)
                        delay *= 2
                    else:
                        logger.error(f"{func.__name__}: all {attempts} attempts failed: {str(e)}")

            raise last_exception
        return wrapper
    return decorator


@retry_with_backoff()
def query_chatgpt(prompt: str) -> ProviderReply:
    """Query ChatGPT (OpenAI) with the bare prompt."""
    if not settings.OPENAI_API_KEY:
        logger.error("OpenAI API key not configured")
        return "", None

    llm = ChatOpenAI(
        model=settings.CHATGPT_MODEL,
        openai_api_key=settings.OPENAI_API_KEY,
        temperature=settings.PROVIDER_TEMPERATURE,
        max_tokens=settings.PROVIDER_MAX_TOKENS,
        timeout=call_timeout(),
        max_retries=0
    )

    response = llm.invoke([HumanMessage(content=prompt)])
    return response.content or "", None


@retry_with_backoff()
def query_perplexity(prompt: str) -> ProviderReply:
    """Query Perplexity's chat completions API, keeping the cited URLs."""
    if not settings.PERPLEXITY_API_KEY:
        logger.error("Perplexity API key not configured")
        return "", None

    response = requests.post(
        settings.PERPLEXITY_API_URL,
        json={
            "model": settings.PERPLEXITY_MODEL,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": settings.PROVIDER_MAX_TOKENS,
            "temperature": settings.PROVIDER_TEMPERATURE,
        },
        headers={"Authorization": f"Bearer {settings.PERPLEXITY_API_KEY}"},
        timeout=call_timeout()
    )
    response.raise_for_status()

    data = response.json()
    choices = data.get("choices") or [{}]
    text = (choices[0].get("message") or {}).get("content") or ""
    return text, list(data.get("citations") or [])


@retry_with_backoff()
def query_google_ai(prompt: str) -> ProviderReply:
    """Fetch Google's AI Overview for the prompt through SerpAPI."""
    if not settings.SERPAPI_KEY:
        logger.error("SerpAPI key not configured")
        return "", None

    response = requests.get(
        settings.SERPAPI_URL,
        params={
            "api_key": settings.SERPAPI_KEY,
            "q": prompt,
            "engine": "google",
            "gl": settings.SERPAPI_COUNTRY,
            "hl": settings.SERPAPI_LANGUAGE,
        },
        timeout=call_timeout()
    )
    response.raise_for_status()

    overview = response.json().get("ai_overview") or {}
    text = overview.get("text")
    if not text:
        blocks = overview.get("text_blocks") or []
        text = "\n".join(
            block.get("text") or block.get("snippet") or ""
            for block in blocks
        )
    return text or "", None


PROVIDERS = {
    Platform.CHATGPT: query_chatgpt,
    Platform.PERPLEXITY: query_perplexity,
    Platform.GOOGLE_AI: query_google_ai,
}


def _elapsed_ms(start: float) -> int:
    return max(0, int((time.monotonic() - start) * 1000))


def build_response(
    platform: Platform,
    prompt: str,
    text: str,
    brand_name: str,
    citations: Optional[List[str]] = None,
    cached: bool = False,
    latency_ms: int = 0
) -> AnnotatedResponse:
    """Run brand detection over an answer and wrap it in an AnnotatedResponse."""
    mention = detect_brand_mention(text, brand_name)
    details = None
    if mention.mentioned:
        details = MentionDetails(
            sentiment=mention.sentiment,
            position=mention.position,
            context_snippet=mention.snippet
        )

    return AnnotatedResponse(
        platform=platform,
        prompt=prompt,
        response_text=text,
        citations=citations,
        brand_mentioned=mention.mentioned,
        mention_details=details,
        cached=cached,
        latency_ms=latency_ms
    )


def query_platform(platform: str, prompt: str, brand_name: str, cache=None) -> AnnotatedResponse:
    """
    Query one platform for one prompt.

    Args:
        platform: Platform id (chatgpt, perplexity, google_ai)
        prompt: Prompt sent verbatim to the platform
        brand_name: Brand to detect in the answer
        cache: Optional ResponseCache

    Returns:
        AnnotatedResponse; failures yield an empty, unmentioned record
    """
    platform = Platform(platform)
    start = time.monotonic()

    if cache is not None:
        payload = cache.get(platform, prompt)
        if payload:
            try:
                stored = AnnotatedResponse.model_validate(payload)
            except ValidationError as e:
                logger.warning(f"Ignoring malformed cache entry for {platform.value}: {e}")
            else:
                # Cached answers are shared across brands, so detection runs again
                return build_response(
                    platform,
                    prompt,
                    stored.response_text,
                    brand_name,
                    citations=stored.citations,
                    cached=True,
                    latency_ms=_elapsed_ms(start)
                )

    try:
        text, citations = PROVIDERS[platform](prompt)
    except Exception as e:
        logger.error(f"{platform.value} query error: {str(e)}")
        return AnnotatedResponse(platform=platform, prompt=prompt, latency_ms=_elapsed_ms(start))

    if not text:
        logger.warning(f"{platform.value} returned no answer for: {truncate_text(prompt, 50)}")
        return AnnotatedResponse(platform=platform, prompt=prompt, latency_ms=_elapsed_ms(start))

    result = build_response(
        platform,
        prompt,
        text,
        brand_name,
        citations=citations,
        latency_ms=_elapsed_ms(start)
    )

    if cache is not None:
        cache.set(platform, prompt, result.model_dump(mode="json", by_alias=True))

    return result
