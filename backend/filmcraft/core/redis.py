from redis import Redis
from redis.asyncio import Redis as AsyncRedis

from filmcraft.core.config import settings

redis_client = Redis.from_url(settings.REDIS_URL)


def get_redis() -> Redis:
    return redis_client


async def get_async_redis():
    client = AsyncRedis.from_url(settings.REDIS_URL)
    try:
        yield client
    finally:
        await client.aclose()
