"""
Cliente Redis para el cache de respuestas.

Este módulo administra la instancia global de redis.asyncio usada por el
backend de cache cuando CACHE_BACKEND=redis.
"""

import logging
from typing import Optional

import redis.asyncio as redis

from storefront.core.config import get_settings

logger = logging.getLogger(__name__)

# Global Redis client instance
_redis_client: Optional[redis.Redis] = None


def get_redis_client() -> redis.Redis:
    """
    Returns a Redis client instance.

    Returns:
        redis.Redis: Redis client instance

    Raises:
        RuntimeError: If Redis URL is not configured
    """
    global _redis_client

    settings = get_settings()
    if not settings.REDIS_URL:
        raise RuntimeError("Redis URL not configured")

    if _redis_client is None:
        config = settings.redis_config
        _redis_client = redis.from_url(
            config["url"],
            encoding="utf-8",
            decode_responses=config["decode_responses"],
            max_connections=config["max_connections"],
            socket_timeout=config["socket_timeout"],
        )
        logger.debug("Redis client instance created")

    return _redis_client


async def test_redis_connection() -> bool:
    """
    Verifica la conectividad con Redis.

    Returns:
        bool: True si la conexión es exitosa, False en caso contrario
    """
    try:
        client = get_redis_client()
        await client.ping()
        logger.info("✅ Redis connection OK")
        return True
    except Exception as e:
        logger.error(f"❌ Redis connection test failed: {e}")
        return False


async def close_redis():
    """
    Cierra el pool de conexiones Redis.
    """
    global _redis_client

    if _redis_client is not None:
        await _redis_client.aclose()
        _redis_client = None
        logger.info("Redis connection pool closed")
