"""
Manejadores de excepciones centralizados para la aplicación FastAPI.

Este módulo traduce las excepciones de la aplicación a respuestas JSON
consistentes. Los detalles internos del backend solo se incluyen con
DEBUG activo y nunca para fallos de carrito.
"""

import logging
import traceback
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.core.config import get_settings
from storefront.utils.error_handler import (
    AppException,
    CartOperationException,
    ShopifyAPIException,
    ShopifyTransportException,
    ValidationException,
    WebhookAuthenticationException,
    log_error,
)

logger = logging.getLogger(__name__)


def _base_content(request: Request, error_type: str, message: str) -> Dict[str, Any]:
    return {
        "error": True,
        "error_type": error_type,
        "message": message,
        "path": str(request.url.path),
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "request_id": request.headers.get("X-Request-ID"),
    }


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """
    Manejador para excepciones personalizadas de la aplicación.

    Args:
        request: Request de FastAPI
        exc: Excepción personalizada de la app

    Returns:
        JSONResponse: Respuesta JSON con error formateado
    """
    logger.error(f"App Exception: {exc.message} - Code: {exc.error_code.value} - URL: {request.url}")

    content = _base_content(request, "application_error", exc.message)
    content["error_code"] = exc.error_code.value
    content["details"] = exc.details if get_settings().DEBUG else None
    return JSONResponse(status_code=exc.status_code, content=content)


async def shopify_api_exception_handler(request: Request, exc: ShopifyAPIException) -> JSONResponse:
    """
    Manejador específico para errores reportados por la Storefront API.
    """
    logger.error(
        f"Shopify API Exception: {exc.message} - "
        f"API Code: {exc.api_response_code} - "
        f"Cause: {exc.cause} - "
        f"URL: {request.url}"
    )

    content = _base_content(request, "shopify_api_error", exc.message)
    content["error_code"] = exc.error_code.value
    if get_settings().DEBUG:
        content["cause"] = exc.cause
        content["query"] = exc.query
    return JSONResponse(status_code=exc.status_code, content=content)


async def shopify_transport_exception_handler(request: Request, exc: ShopifyTransportException) -> JSONResponse:
    """
    Manejador para llamadas a la Storefront API que no completaron.
    """
    logger.error(f"Shopify Transport Exception: {exc.cause} - URL: {request.url}")

    content = _base_content(request, "shopify_connection_error", "Storefront API unavailable")
    content["error_code"] = exc.error_code.value
    content["retry_suggested"] = exc.is_retryable
    if get_settings().DEBUG:
        content["cause"] = exc.cause
    return JSONResponse(status_code=exc.status_code, content=content)


async def validation_exception_handler(request: Request, exc: ValidationException) -> JSONResponse:
    """
    Manejador para errores de validación de variables.
    """
    logger.warning(f"Validation Exception: {exc.message} - Field: {exc.field} - URL: {request.url}")

    content = _base_content(request, "validation_error", exc.message)
    content["error_code"] = exc.error_code.value
    content["field"] = exc.field
    return JSONResponse(status_code=exc.status_code, content=content)


async def cart_operation_exception_handler(request: Request, exc: CartOperationException) -> JSONResponse:
    """
    Manejador para fallos de carrito: solo el mensaje genérico.
    """
    logger.warning(f"Cart operation failed - URL: {request.url}")

    content = _base_content(request, "cart_error", exc.message)
    content["error_code"] = exc.error_code.value
    return JSONResponse(status_code=exc.status_code, content=content)


async def webhook_authentication_exception_handler(
    request: Request, exc: WebhookAuthenticationException
) -> JSONResponse:
    """
    Manejador para webhooks de revalidación no autenticados.
    """
    logger.warning(f"Rejected webhook - URL: {request.url.path}")

    content = _base_content(request, "authentication_error", exc.message)
    content["status"] = 401
    return JSONResponse(status_code=401, content=content)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    Manejador para HTTPException de FastAPI/Starlette.
    """
    logger.warning(f"HTTP Exception: {exc.status_code} - {exc.detail} - URL: {request.url}")

    content = _base_content(request, "http_error", exc.detail)
    content["status_code"] = exc.status_code
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Manejador global para excepciones no capturadas.

    Args:
        request: Request de FastAPI
        exc: Excepción no manejada

    Returns:
        JSONResponse: Respuesta JSON de error interno
    """
    log_error(exc, context={"url": str(request.url), "request_id": request.headers.get("X-Request-ID")})

    debug = get_settings().DEBUG
    message = f"{type(exc).__name__}: {str(exc)}" if debug else "Internal server error occurred"

    content = _base_content(request, "internal_server_error", message)
    content["traceback"] = traceback.format_exc() if debug else None
    return JSONResponse(status_code=500, content=content)


def configure_exception_handlers(app: FastAPI) -> None:
    """
    Configura todos los manejadores de excepciones de la aplicación.

    Args:
        app: Instancia de FastAPI
    """
    logger.info("🔧 Configurando manejadores de excepciones...")

    # Excepciones específicas antes que la base
    app.add_exception_handler(ValidationException, validation_exception_handler)
    app.add_exception_handler(ShopifyAPIException, shopify_api_exception_handler)
    app.add_exception_handler(ShopifyTransportException, shopify_transport_exception_handler)
    app.add_exception_handler(CartOperationException, cart_operation_exception_handler)
    app.add_exception_handler(WebhookAuthenticationException, webhook_authentication_exception_handler)
    app.add_exception_handler(AppException, app_exception_handler)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    logger.info("✅ Manejadores de excepciones configurados")
