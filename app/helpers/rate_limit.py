from redis.asyncio import Redis


async def allow(redis: Redis, key: str, limit: int, window_seconds: int) -> bool:
    """
    Fixed-window counter. Returns False once `key` exceeded `limit` hits
    inside the current window.
    """
    bucket = f"rl:{key}"
    count = await redis.incr(bucket)
    if count == 1:
        await redis.expire(bucket, window_seconds)
    return count <= limit
