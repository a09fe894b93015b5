"""
Classification of Storefront API call outcomes.

Pure functions turning a raised exception or a completed HTTP exchange into
one outcome value. Only the first backend error is surfaced.
"""

import asyncio
import json
from typing import Any, Mapping, Optional, Union

import aiohttp

from storefront.domain.results import BackendError, Ok, TransportFailure

Classified = Union[Ok, BackendError, TransportFailure]


def classify_exception(exc: BaseException, document: Optional[str] = None) -> TransportFailure:
    """
    Map a transport-level exception to a TransportFailure.

    Args:
        exc: Exception raised while sending or decoding the request
        document: GraphQL document that was being sent

    Returns:
        TransportFailure: Failure describing the cause
    """
    if isinstance(exc, asyncio.TimeoutError):
        cause = "timeout"
    elif isinstance(exc, (json.JSONDecodeError, aiohttp.ContentTypeError)):
        cause = f"invalid JSON response: {exc}"
    elif isinstance(exc, aiohttp.ClientError):
        cause = f"connection error: {exc}"
    else:
        cause = f"{type(exc).__name__}: {exc}"
    return TransportFailure(cause=cause, query=document)


def _error_cause(error: Mapping[str, Any]) -> str:
    cause = error.get("cause")
    if cause:
        return str(cause)
    extensions = error.get("extensions")
    if isinstance(extensions, Mapping) and extensions.get("code"):
        return str(extensions["code"])
    return "unknown"


def _error_status(error: Mapping[str, Any]) -> int:
    status = error.get("status")
    try:
        return int(status) if status else 500
    except (TypeError, ValueError):
        return 500


def classify_response(status: int, body: Any, document: Optional[str] = None) -> Classified:
    """
    Gate a completed HTTP exchange.

    Args:
        status: HTTP status code
        body: Decoded JSON body
        document: GraphQL document that was sent

    Returns:
        Ok wrapping the body, BackendError or TransportFailure
    """
    if not isinstance(body, Mapping):
        return TransportFailure(cause="malformed response", query=document)

    errors = body.get("errors")
    if isinstance(errors, list) and errors:
        first = errors[0]
        if not isinstance(first, Mapping):
            return BackendError(message=str(first), status=status if status >= 400 else 500, query=document)
        return BackendError(
            message=str(first.get("message", "Unknown error")),
            cause=_error_cause(first),
            status=_error_status(first),
            query=document,
        )

    if isinstance(errors, str) and errors:
        # Shopify answers auth failures with {"errors": "..."}
        return BackendError(message=errors, status=status if status >= 400 else 500, query=document)

    if status >= 400:
        return BackendError(message=f"HTTP {status}", status=status, query=document)

    return Ok(body)
