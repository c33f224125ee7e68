# app/db/redis.py
import logging
from typing import Optional
import redis.asyncio as redis
from app.core.config import get_settings

logger = logging.getLogger(__name__)

redis_client: Optional[redis.Redis] = None


async def connect():
    """
    Connect Redis when REDIS_URL is set.
    Redis only backs the optional snapshot cache, so failures disable it
    instead of blocking startup.
    """
    global redis_client
    settings = get_settings()
    if not settings.REDIS_URL:
        logger.info("No REDIS_URL configured, snapshot cache disabled")
        redis_client = None
        return

    try:
        redis_client = redis.from_url(settings.REDIS_URL, decode_responses=True)
        await redis_client.ping()
        logger.info("Redis connected")
    except Exception as e:
        logger.warning("Failed to connect to Redis, snapshot cache disabled: %s", e)
        redis_client = None


async def disconnect():
    global redis_client
    if redis_client:
        await redis_client.aclose()
        redis_client = None
        logger.info("Redis disconnected")


def get_redis() -> Optional[redis.Redis]:
    """Redis client, or None when not configured or unavailable."""
    return redis_client
