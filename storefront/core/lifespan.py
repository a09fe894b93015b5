"""
Gestión del ciclo de vida de la aplicación FastAPI.

Este módulo maneja los eventos de startup y shutdown: logging,
verificación de configuración, cache de tags y sesión del gateway.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import FastAPI

from storefront.core.cache_manager import close_cache, initialize_cache
from storefront.core.config import get_settings, validate_required_settings
from storefront.core.logging_config import setup_logging
from storefront.db.shopify_clients.unified_client import close_gateway, initialize_gateway

logger = logging.getLogger(__name__)

_startup_time = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Gestión del ciclo de vida de la aplicación.
    Maneja eventos de startup y shutdown de manera ordenada.

    Args:
        app: Instancia de FastAPI
    """
    # === STARTUP ===
    logger.info("🚀 Iniciando Storefront Commerce Gateway...")

    try:
        # 1. Configurar logging
        await startup_configure_logging()

        # 2. Verificar configuración
        await startup_verify_configuration()

        # 3. Inicializar servicios (cache + gateway)
        await startup_initialize_services()

        logger.info("🎉 Aplicación iniciada correctamente")

    except Exception as e:
        logger.error(f"❌ Error durante el startup: {e}")
        await shutdown_cleanup_services()
        raise

    # === YIELD (aplicación corriendo) ===
    yield

    # === SHUTDOWN ===
    logger.info("🛑 Cerrando Storefront Commerce Gateway...")

    try:
        await shutdown_cleanup_services()
        logger.info("👋 Aplicación cerrada correctamente")
    except Exception as e:
        logger.error(f"❌ Error durante el shutdown: {e}")


# === FUNCIONES DE STARTUP ===


async def startup_configure_logging():
    """Configura el sistema de logging."""
    setup_logging()
    logger.info("✅ Sistema de logging configurado")


async def startup_verify_configuration():
    """Verifica que la configuración sea válida."""
    settings = get_settings()
    validate_required_settings(settings)

    if not settings.SHOPIFY_REVALIDATION_SECRET and not settings.SHOPIFY_WEBHOOK_SECRET:
        logger.warning("⚠️ Sin secreto de revalidación ni de webhooks: /api/revalidate rechazará todo")

    logger.info(f"✅ Configuración verificada - Tienda: {settings.store_domain}")


async def startup_initialize_services():
    """Inicializa el cache de tags y la sesión del gateway."""
    global _startup_time

    cache = await initialize_cache()
    await initialize_gateway(cache=cache)
    _startup_time = datetime.now(timezone.utc)

    logger.info("✅ Servicios inicializados")


# === FUNCIONES DE SHUTDOWN ===


async def shutdown_cleanup_services():
    """Cierra la sesión del gateway y el cache."""
    await close_gateway()
    await close_cache()
    logger.info("✅ Servicios finalizados")


def get_startup_info() -> Dict[str, Any]:
    """
    Obtiene información del startup de la aplicación.

    Returns:
        Dict: Información de startup y uptime
    """
    if _startup_time is None:
        return {"started": False}

    uptime = datetime.now(timezone.utc) - _startup_time
    return {
        "started": True,
        "startup_time": _startup_time.isoformat(),
        "uptime_seconds": int(uptime.total_seconds()),
    }
