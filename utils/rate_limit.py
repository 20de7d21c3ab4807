"""
Per-client daily audit quota, counted in Redis.

Counters live under `rate_limit:<client>:<YYYYMMDD>` and expire at the end
of the local day, so every worker shares one count and stale keys go away
on their own.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

import redis

from config.settings import settings
from utils.cache import get_cache_key

logger = logging.getLogger(__name__)

RATE_LIMIT_PREFIX = "rate_limit"


@dataclass(frozen=True)
class RateLimitStatus:
    allowed: bool
    remaining: int
    reset_at: int  # epoch milliseconds


def end_of_day_ms(now: datetime) -> int:
    """Last millisecond of the local day containing `now`, in epoch milliseconds."""
    end = now.replace(hour=23, minute=59, second=59, microsecond=999000)
    return int(end.timestamp() * 1000)


class DailyRateLimiter:
    """
    Fixed daily quota per client key (usually the caller's IP).

    The first call of a day creates the day's counter; calls beyond `limit`
    are refused until local midnight. Without Redis, or when Redis fails,
    calls are allowed.
    """

    def __init__(
        self,
        redis_client: Optional[redis.Redis],
        limit: Optional[int] = None,
        now: Callable[[], datetime] = datetime.now
    ):
        self.redis_client = redis_client
        self.limit = limit if limit is not None else settings.DAILY_AUDIT_LIMIT
        self._now = now

    def check(self, key: str) -> RateLimitStatus:
        """
        Count one call for `key` and report whether it is allowed.

        Returns:
            RateLimitStatus with the remaining quota and the reset time
        """
        now = self._now()
        reset_at = end_of_day_ms(now)

        if self.redis_client is None:
            return RateLimitStatus(allowed=True, remaining=self.limit, reset_at=reset_at)

        rate_key = get_cache_key(RATE_LIMIT_PREFIX, key, now.strftime("%Y%m%d"))

        try:
            current = self.redis_client.incr(rate_key)

            # Set expiry on first increment
            if current == 1:
                self.redis_client.expireat(rate_key, math.ceil(reset_at / 1000))

        except redis.RedisError as e:
            logger.error(f"Error checking rate limit: {e}")
            return RateLimitStatus(allowed=True, remaining=self.limit, reset_at=reset_at)

        if current > self.limit:
            logger.warning(f"Daily audit limit reached for {key}: {current}/{self.limit}")
            return RateLimitStatus(allowed=False, remaining=0, reset_at=reset_at)

        return RateLimitStatus(allowed=True, remaining=self.limit - current, reset_at=reset_at)
