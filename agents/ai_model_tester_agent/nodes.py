"""
Node functions for the AI model tester LangGraph workflow.
"""

import logging
import math
import threading
import time
from concurrent.futures import ThreadPoolExecutor, wait

from agents.ai_model_tester_agent.models import AIModelTesterState
from agents.ai_model_tester_agent.utils import query_platform
from config.settings import settings

logger = logging.getLogger(__name__)


def _run_query(slots, platform, prompt, brand_name, cache):
    with slots:
        return query_platform(platform, prompt, brand_name, cache)


def initialize_responses(state: AIModelTesterState) -> AIModelTesterState:
    """Node: Initialize response storage."""
    logger.info("🚀 Initializing AI model testing...")

    prompts = state.get("prompts", [])
    platforms = state.get("platforms", [])

    state["responses"] = []
    state["errors"] = state.get("errors", [])

    logger.info(f"Testing {len(prompts)} prompts across {len(platforms)} platforms")
    return state


def test_queries_batch(state: AIModelTesterState) -> AIModelTesterState:
    """
    Node: Run every (prompt, platform) query with bounded parallelism.

    At most MAX_CONCURRENT_QUERIES calls run at once, and no platform holds
    more than its share of them. Calls that fail or have not finished when
    the audit deadline passes are dropped; answers that did arrive are kept.
    """
    logger.info("🧪 Testing prompts across platforms...")

    prompts = state.get("prompts", [])
    platforms = state.get("platforms", [])
    brand_name = state.get("brand_name", "")
    cache = state.get("response_cache")
    errors = state.get("errors", [])
    responses = []

    if not prompts:
        errors.append("No prompts to test")
        state["errors"] = errors
        return state

    if not platforms:
        errors.append("No platforms specified")
        state["errors"] = errors
        return state

    timeout = state.get("timeout_seconds") or settings.AUDIT_TIMEOUT_SECONDS
    deadline = time.monotonic() + timeout
    max_concurrent = max(1, settings.MAX_CONCURRENT_QUERIES)
    tasks = [(prompt, platform) for prompt in prompts for platform in platforms]

    # Each platform gets its own share of the slots, so a hanging platform
    # cannot starve the others of workers
    slots = threading.BoundedSemaphore(max_concurrent)
    share = max(1, math.ceil(max_concurrent / len(platforms)))
    executors = {platform: ThreadPoolExecutor(max_workers=share) for platform in platforms}
    try:
        future_to_task = {
            executors[platform].submit(_run_query, slots, platform, prompt, brand_name, cache): (prompt, platform)
            for prompt, platform in tasks
        }

        done, not_done = wait(future_to_task, timeout=max(0.0, deadline - time.monotonic()))

        # Keep submission order so responses line up with prompts
        for future, (prompt, platform) in future_to_task.items():
            if future not in done:
                continue
            try:
                responses.append(future.result())
            except Exception as e:
                error_msg = f"Error querying {getattr(platform, 'value', platform)}: {str(e)}"
                errors.append(error_msg)
                logger.error(error_msg)

        if not_done:
            for future in not_done:
                future.cancel()
            errors.append(f"{len(not_done)} queries did not finish before the audit deadline")
            logger.warning(f"⏱️  Audit deadline reached, {len(not_done)}/{len(tasks)} queries unfinished")
    finally:
        for executor in executors.values():
            executor.shutdown(wait=False, cancel_futures=True)

    state["responses"] = responses
    state["errors"] = errors

    logger.info(f"✓ Completed batch testing. Collected {len(responses)}/{len(tasks)} responses")
    return state


def finalize(state: AIModelTesterState) -> AIModelTesterState:
    """Node: Finalize and mark as completed."""
    logger.info("✅ AI model testing workflow complete")
    state["completed"] = True
    return state
