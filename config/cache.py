from typing import Optional
from redis.asyncio import Redis, from_url
from config.settings import settings

# Redis only backs per-IP rate limiting; upload coordination lives in the object store.
_limiter_client: Optional[Redis] = None


async def get_redis() -> Redis:
    global _limiter_client
    if _limiter_client is None:
        _limiter_client = from_url(
            settings.REDIS_URL,
            encoding="utf-8",
            decode_responses=True,  # fastapi-limiter reads script results as str
            socket_keepalive=True,
            health_check_interval=30,
        )
        # Fail fast on startup if Redis is unreachable.
        await _limiter_client.ping()
    return _limiter_client


async def close_redis() -> None:
    global _limiter_client
    if _limiter_client is not None:
        await _limiter_client.aclose()
        _limiter_client = None
