"""
Redis persistence for finished audits.
"""

import logging
from typing import List, Optional

import redis
from pydantic import ValidationError

from config.settings import settings
from models.schemas import AuditRecord
from utils.cache import get_cache_key
from utils.helpers import sanitize_brand_name

logger = logging.getLogger(__name__)


def _brand_key(brand_name: str) -> str:
    return get_cache_key("brand", sanitize_brand_name(brand_name).lower())


class AuditStore:
    """
    Stores audit records under `audit:<audit_id>` and keeps a per-brand
    index of audit ids under `brand:<normalized name>`.

    Writes happen after the audit result is computed; a failed write is
    logged and never affects the response.
    """

    def __init__(self, redis_client: Optional[redis.Redis], ttl: Optional[int] = None):
        self.redis_client = redis_client
        self.ttl = ttl or settings.REDIS_AUDIT_TTL

    @property
    def enabled(self) -> bool:
        return self.redis_client is not None

    def save_audit(self, record: AuditRecord) -> bool:
        """
        Persist an audit record and index it by brand.

        Returns:
            bool: True if stored successfully
        """
        if not self.enabled:
            return False

        audit_id = record.audit.audit_id
        audit_key = get_cache_key("audit", audit_id)
        brand_key = _brand_key(record.audit.brand.name)

        try:
            pipe = self.redis_client.pipeline()
            pipe.setex(audit_key, self.ttl, record.model_dump_json(by_alias=True))
            pipe.rpush(brand_key, audit_id)
            pipe.expire(brand_key, self.ttl)
            pipe.execute()
            logger.info(f"Stored audit: {audit_id} -> {record.audit.status.value}")
            return True
        except redis.RedisError as e:
            logger.error(f"Error storing audit {audit_id}: {e}")
            return False

    def get_audit(self, audit_id: str) -> Optional[AuditRecord]:
        """
        Get a stored audit record.

        Returns:
            AuditRecord or None if not found
        """
        if not self.enabled:
            return None

        try:
            data = self.redis_client.get(get_cache_key("audit", audit_id))
        except redis.RedisError as e:
            logger.error(f"Error getting audit {audit_id}: {e}")
            return None

        if not data:
            return None

        try:
            return AuditRecord.model_validate_json(data)
        except ValidationError as e:
            logger.error(f"Stored audit {audit_id} is unreadable: {e}")
            return None

    def list_brand_audits(self, brand_name: str) -> List[str]:
        """Audit ids recorded for a brand, oldest first."""
        if not self.enabled:
            return []

        try:
            return list(self.redis_client.lrange(_brand_key(brand_name), 0, -1))
        except redis.RedisError as e:
            logger.error(f"Error listing audits for {brand_name}: {e}")
            return []
