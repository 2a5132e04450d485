# blogsphere/services/redis_service.py
from typing import Optional
from redis.asyncio import Redis
from blogsphere.config import settings

class RedisService:
    def __init__(self, redis: Optional[Redis] = None):
        self.redis: Redis = redis or Redis.from_url(settings.redis_url, decode_responses=True)

    async def set(self, key: str, value: str, expire: int = None):
        """Set a key with optional expiration in seconds"""
        await self.redis.set(name=key, value=value, ex=expire)

    async def setex(self, key: str, expire: int, value: str):
        await self.redis.set(name=key, value=value, ex=expire)

    async def get(self, key: str):
        """Get the value of a key"""
        return await self.redis.get(key)

    async def delete(self, key: str):
        """Delete a key"""
        await self.redis.delete(key)

    async def close(self):
        """Close the Redis connection"""
        await self.redis.aclose()

_redis_service: Optional[RedisService] = None

def get_redis() -> RedisService:
    """Dependency returning the shared Redis client"""
    global _redis_service
    if _redis_service is None:
        _redis_service = RedisService()
    return _redis_service
