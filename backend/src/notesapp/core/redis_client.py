"""Redis client for access token revocation."""

import logging
from typing import Optional

import redis.asyncio as redis

from ..config import get_settings

logger = logging.getLogger(__name__)

BLACKLIST_PREFIX = "blacklist:"


class RedisClient:
    """Thin wrapper over redis.asyncio with lazy connection."""

    def __init__(self):
        self.settings = get_settings()
        self.redis: Optional[redis.Redis] = None

    async def connect(self) -> None:
        """Connect to Redis."""
        if self.redis is not None:
            return
        client = redis.from_url(
            self.settings.redis_url,
            max_connections=self.settings.redis_max_connections,
            decode_responses=True,
        )
        try:
            await client.ping()
        except Exception as e:
            logger.error(f"Failed to connect to Redis: {e}")
            await client.aclose()
            raise
        self.redis = client
        logger.info("Connected to Redis successfully")

    async def disconnect(self) -> None:
        """Disconnect from Redis."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            logger.info("Disconnected from Redis")

    async def ping(self) -> bool:
        await self.connect()
        return bool(await self.redis.ping())

    async def add_to_blacklist(self, token_jti: str, expire: int) -> bool:
        """Store a revoked token id for ``expire`` seconds."""
        try:
            await self.connect()
            return bool(await self.redis.setex(f"{BLACKLIST_PREFIX}{token_jti}", expire, "1"))
        except Exception as e:
            logger.error(f"Failed to blacklist token: {e}")
            return False

    async def is_token_blacklisted(self, token_jti: str) -> bool:
        """Raises when Redis is unreachable; callers decide how to degrade."""
        await self.connect()
        return await self.redis.exists(f"{BLACKLIST_PREFIX}{token_jti}") > 0


# Global Redis client instance
_redis_client: Optional[RedisClient] = None


def get_redis_client() -> RedisClient:
    """Get the process-wide Redis client."""
    global _redis_client
    if _redis_client is None:
        _redis_client = RedisClient()
    return _redis_client
