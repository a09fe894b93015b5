"""
Configuración centralizada de routers para la aplicación FastAPI.

Este módulo se encarga de registrar los routers de la API y los
endpoints base (raíz, ping y health).
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from storefront.api.v1.endpoints.revalidate import router as revalidate_router
from storefront.api.v1.endpoints.storefront import router as storefront_router
from storefront.core.cache_manager import get_tag_cache
from storefront.core.config import get_settings
from storefront.core.lifespan import get_startup_info
from storefront.db.shopify_clients.unified_client import get_gateway

logger = logging.getLogger(__name__)


def create_root_endpoints(app: FastAPI) -> None:
    """
    Crea endpoints raíz de la aplicación.

    Args:
        app: Instancia de FastAPI
    """
    settings = get_settings()

    @app.get("/", tags=["Root"], summary="API Info")
    async def root():
        """
        Endpoint raíz que proporciona información básica de la API.
        """
        return {
            "message": settings.APP_NAME,
            "site": settings.SITE_NAME,
            "version": settings.APP_VERSION,
            "status": "running",
            "documentation": "/docs" if (settings.DEBUG or settings.ENABLE_DOCS) else "disabled",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "endpoints": {
                "health": "/health",
                "storefront": "/api/v1/storefront",
                "revalidate": "/api/revalidate",
            },
        }

    @app.get("/ping", tags=["Root"], summary="Simple Ping")
    async def ping():
        """
        Endpoint simple para verificar que la API responde.
        """
        return {"message": "pong", "timestamp": datetime.now(timezone.utc).isoformat()}


def create_health_endpoints(app: FastAPI) -> None:
    """
    Crea endpoint de health check.

    Args:
        app: Instancia de FastAPI
    """
    settings = get_settings()

    @app.get("/health", tags=["Health"], summary="Health Check")
    async def health_check():
        """
        Verifica que el gateway tenga sesión y reporta el estado del cache.
        """
        try:
            gateway_ready = get_gateway().session is not None
        except RuntimeError:
            gateway_ready = False

        return JSONResponse(
            status_code=200 if gateway_ready else 503,
            content={
                "status": "healthy" if gateway_ready else "unhealthy",
                "version": settings.APP_VERSION,
                "environment": settings.ENVIRONMENT,
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "services": {"storefront_gateway": gateway_ready},
                "cache_info": get_tag_cache().stats(),
                "startup": get_startup_info(),
            },
        )


def configure_api_routers(app: FastAPI) -> None:
    """
    Registra los routers de la API.

    Args:
        app: Instancia de FastAPI
    """
    app.include_router(storefront_router, prefix="/api/v1")
    app.include_router(revalidate_router, prefix="/api")
    logger.info("✅ Routers API registrados")


def configure_all_routers(app: FastAPI) -> None:
    """
    Configura todos los routers y endpoints de la aplicación.

    Args:
        app: Instancia de FastAPI
    """
    logger.info("🔧 Configurando routers...")

    create_root_endpoints(app)
    create_health_endpoints(app)
    configure_api_routers(app)

    logger.info("✅ Todos los routers configurados")
