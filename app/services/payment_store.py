"""Payment record storage.

Handlers depend on the ``PaymentStore`` interface only. The in-memory store
lives for the process lifetime; the Redis store survives restarts and is
shared between workers.
"""

import logging
from abc import ABC, abstractmethod

import redis.asyncio as redis

from app.schemas.payment import PaymentRecord

logger = logging.getLogger(__name__)


class PaymentStore(ABC):
    """Keyed storage for the last verified notification per order."""

    @abstractmethod
    async def upsert(self, order_id: str, record: PaymentRecord) -> None:
        """Store ``record``, replacing any previous record for the order."""
        pass

    @abstractmethod
    async def get(self, order_id: str) -> PaymentRecord | None:
        """Return the record for ``order_id``, or None if never notified."""
        pass

    async def close(self) -> None:
        """Release any held connections."""
        return None


class InMemoryPaymentStore(PaymentStore):
    """Process-lifetime dict store. No persistence, no eviction."""

    def __init__(self):
        self._records: dict[str, PaymentRecord] = {}

    async def upsert(self, order_id: str, record: PaymentRecord) -> None:
        self._records[order_id] = record

    async def get(self, order_id: str) -> PaymentRecord | None:
        return self._records.get(order_id)

    def __len__(self) -> int:
        return len(self._records)


class RedisPaymentStore(PaymentStore):
    """Redis-backed store. Records are JSON strings without expiry."""

    key_prefix = "payhere:payment:"

    def __init__(self, redis_url: str | None = None, client: redis.Redis | None = None):
        """Initialize store.

        Args:
            redis_url: Redis connection URL, used when no client is given
            client: Pre-built async Redis client
        """
        if client is None and redis_url is None:
            raise ValueError("RedisPaymentStore needs a redis_url or a client")
        self.redis_url = redis_url
        self._redis = client

    async def get_redis(self) -> redis.Redis:
        """Get Redis connection."""
        if self._redis is None:
            self._redis = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
        return self._redis

    def _key(self, order_id: str) -> str:
        return f"{self.key_prefix}{order_id}"

    async def upsert(self, order_id: str, record: PaymentRecord) -> None:
        redis_client = await self.get_redis()
        await redis_client.set(self._key(order_id), record.model_dump_json())

    async def get(self, order_id: str) -> PaymentRecord | None:
        redis_client = await self.get_redis()
        raw = await redis_client.get(self._key(order_id))
        if raw is None:
            return None
        return PaymentRecord.model_validate_json(raw)

    async def close(self) -> None:
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None
            logger.info("Closed Redis payment store connection")


def build_payment_store(backend: str, redis_url: str | None = None) -> PaymentStore:
    """Create the configured store backend."""
    if backend == "redis":
        return RedisPaymentStore(redis_url=redis_url)
    if backend == "memory":
        return InMemoryPaymentStore()
    raise ValueError(f"Unknown payment store backend: {backend}")
