"""
Sistema de manejo de errores personalizado.

Este módulo define las excepciones de la aplicación que se usan en el
borde HTTP y utilidades para manejo consistente de errores. Dentro del
gateway los fallos viajan como valores (ver storefront.domain.results) y
se convierten a estas excepciones solo al responder.
"""

import logging
import traceback
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class ErrorCode(Enum):
    """
    Códigos de error estandarizados para la aplicación.
    """

    # Errores generales
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # Errores de conexión
    SHOPIFY_CONNECTION_FAILED = "SHOPIFY_CONNECTION_FAILED"
    SHOPIFY_API_ERROR = "SHOPIFY_API_ERROR"
    CACHE_BACKEND_FAILED = "CACHE_BACKEND_FAILED"

    # Errores del carrito
    CART_OPERATION_FAILED = "CART_OPERATION_FAILED"

    # Errores de webhooks
    INVALID_WEBHOOK_SIGNATURE = "INVALID_WEBHOOK_SIGNATURE"


class ErrorSeverity(Enum):
    """
    Niveles de severidad para errores.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class AppException(Exception):
    """
    Excepción base para todas las excepciones personalizadas de la aplicación.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        is_retryable: bool = False,
    ):
        """
        Inicializa la excepción.

        Args:
            message: Mensaje de error
            error_code: Código de error estandarizado
            details: Información adicional del error
            status_code: Código HTTP asociado
            severity: Severidad del error
            is_retryable: Si la operación puede reintentarse
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        self.severity = severity
        self.is_retryable = is_retryable
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convierte la excepción a diccionario.

        Returns:
            Dict: Representación de la excepción
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "details": self.details,
            "status_code": self.status_code,
            "severity": self.severity.value,
            "is_retryable": self.is_retryable,
            "timestamp": self.timestamp.isoformat(),
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"


class ValidationException(AppException):
    """
    Excepción para variables mal formadas enviadas por el llamador.
    """

    def __init__(
        self,
        message: str,
        field: str,
        invalid_value: Any = None,
        expected_format: Optional[str] = None,
        **kwargs,
    ):
        """
        Inicializa la excepción de validación.

        Args:
            message: Mensaje de error
            field: Campo que falló la validación
            invalid_value: Valor que causó el error
            expected_format: Formato esperado
            **kwargs: Argumentos adicionales para AppException
        """
        super().__init__(
            message=message,
            error_code=ErrorCode.VALIDATION_ERROR,
            status_code=422,
            severity=ErrorSeverity.LOW,
            **kwargs,
        )
        self.field = field
        self.invalid_value = invalid_value
        self.expected_format = expected_format

        self.details.update(
            {
                "field": field,
                "invalid_value": str(invalid_value) if invalid_value is not None else None,
                "expected_format": expected_format,
            }
        )


class ShopifyTransportException(AppException):
    """
    Excepción para llamadas a la Storefront API que no completaron
    (conexión, timeout o respuesta mal formada).
    """

    def __init__(self, message: str, cause: Optional[str] = None, query: Optional[str] = None, **kwargs):
        super().__init__(
            message=message,
            error_code=ErrorCode.SHOPIFY_CONNECTION_FAILED,
            status_code=503,
            severity=ErrorSeverity.HIGH,
            is_retryable=True,
            **kwargs,
        )
        self.cause = cause
        self.query = query

        self.details.update({"cause": cause, "query": query})


class ShopifyAPIException(AppException):
    """
    Excepción para errores reportados por la API de Shopify.
    """

    def __init__(
        self,
        message: str,
        api_response_code: Optional[int] = None,
        cause: Optional[str] = None,
        query: Optional[str] = None,
        **kwargs,
    ):
        """
        Inicializa la excepción de Shopify API.

        Args:
            message: Mensaje del primer error reportado
            api_response_code: Código tipo HTTP reportado por Shopify
            cause: Causa reportada (extensions.code)
            query: Documento GraphQL que originó el error
            **kwargs: Argumentos adicionales para AppException
        """
        severity = ErrorSeverity.MEDIUM
        if api_response_code and api_response_code >= 500:
            severity = ErrorSeverity.HIGH

        super().__init__(
            message=message,
            error_code=ErrorCode.SHOPIFY_API_ERROR,
            status_code=api_response_code or 500,
            severity=severity,
            **kwargs,
        )

        self.api_response_code = api_response_code
        self.cause = cause
        self.query = query

        self.details.update(
            {
                "api_response_code": api_response_code,
                "cause": cause,
                "query": query,
            }
        )


class CartOperationException(AppException):
    """
    Excepción opaca para fallos de escritura en el carrito.

    No lleva detalles del backend: el usuario solo ve el mensaje genérico.
    """

    def __init__(self, message: str = "Error adding item to cart", **kwargs):
        super().__init__(
            message=message,
            error_code=ErrorCode.CART_OPERATION_FAILED,
            status_code=400,
            severity=ErrorSeverity.LOW,
            **kwargs,
        )


class WebhookAuthenticationException(AppException):
    """
    Excepción para webhooks de revalidación sin secreto o firma válida.
    """

    def __init__(self, message: str = "Invalid revalidation secret", **kwargs):
        super().__init__(
            message=message,
            error_code=ErrorCode.INVALID_WEBHOOK_SIGNATURE,
            status_code=401,
            severity=ErrorSeverity.MEDIUM,
            **kwargs,
        )


# === FUNCIONES DE UTILIDAD ===


def log_error(
    exception: Exception,
    context: Optional[Dict[str, Any]] = None,
    level: int = logging.ERROR,
) -> None:
    """
    Loggea un error de manera consistente.

    Args:
        exception: Excepción a loggear
        context: Contexto adicional
        level: Nivel de logging
    """
    context = context or {}

    log_data = {
        "exception_type": type(exception).__name__,
        "exception_message": str(exception),
        "traceback": traceback.format_exc(),
        **context,
    }

    if isinstance(exception, AppException):
        message = f"{exception.error_code.value}: {exception.message}"
        log_data.update(
            {
                "error_code": exception.error_code.value,
                "severity": exception.severity.value,
                "is_retryable": exception.is_retryable,
            }
        )
    else:
        message = f"Unhandled exception: {type(exception).__name__}: {str(exception)}"

    logger.log(level, message, extra=log_data)
