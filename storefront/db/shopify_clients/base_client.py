"""
Base Storefront API client with the single outbound request path.

This module provides the foundation for all Storefront clients: session
management, cache-aware query execution, outcome classification and the
per-operation validate → execute → decode → invalidate pipeline.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Tuple

import aiohttp
from aiohttp import ClientTimeout
from pydantic import ValidationError

from storefront.core.cache_manager import TagCache, build_cache_key, get_tag_cache
from storefront.core.cache_tags import normalize_tags
from storefront.core.config import Settings, get_settings
from storefront.core.logging_config import log_api_call
from storefront.db.operations import CacheMode, StorefrontOperation
from storefront.domain.results import Ok, Result, TransportFailure, ValidationFailure

from .error_classifier import classify_exception, classify_response

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportResponse:
    """Raw decoded response of one execution."""

    status: int
    body: Dict[str, Any]
    cached: bool = False


def _validation_failure(error: ValidationError) -> ValidationFailure:
    first = error.errors()[0] if error.errors() else {}
    field = ".".join(str(part) for part in first.get("loc", ())) or "variables"
    return ValidationFailure(message=first.get("msg", str(error)), field=field)


class BaseStorefrontClient:
    """
    Base client for Storefront API operations.

    Provides session management and the cache-aware ``execute`` that all
    specialized clients inherit. Never retries: a failed call is returned
    as a failure value.
    """

    def __init__(self, cache: Optional[TagCache] = None, settings: Optional[Settings] = None):
        """Initialize the base Storefront client."""
        self.settings = settings or get_settings()
        self.graphql_url = self.settings.storefront_graphql_url
        self.api_version = self.settings.SHOPIFY_API_VERSION
        self.session: Optional[aiohttp.ClientSession] = None
        self._cache = cache

        logger.info(f"Initialized Storefront client for {self.settings.store_domain}")

    @property
    def cache(self) -> TagCache:
        return self._cache if self._cache is not None else get_tag_cache()

    async def initialize(self):
        """
        Create the HTTP session.
        """
        if self.session is not None:
            return

        timeout = ClientTimeout(
            total=self.settings.SHOPIFY_REQUEST_TIMEOUT,
            connect=self.settings.SHOPIFY_CONNECT_TIMEOUT,
        )
        connector = aiohttp.TCPConnector(limit=100, limit_per_host=30)

        self.session = aiohttp.ClientSession(
            timeout=timeout,
            connector=connector,
            headers=self.settings.get_storefront_headers(),
        )
        logger.info("✅ Storefront client session created")

    async def close(self):
        """Close the HTTP session and clean up resources."""
        if self.session:
            await self.session.close()
            self.session = None
            logger.info("Storefront client closed")

    async def _send(self, payload: Dict[str, Any], headers: Optional[Dict[str, str]] = None) -> Tuple[int, Any]:
        """
        POST one payload to the GraphQL endpoint.

        Returns:
            Tuple[int, Any]: HTTP status and decoded JSON body
        """
        if not self.session:
            raise RuntimeError("Client not initialized. Call initialize() first.")

        async with self.session.post(self.graphql_url, json=payload, headers=headers) as response:
            body = await response.json(content_type=None)
            return response.status, body

    async def execute(
        self,
        document: str,
        variables: Optional[Dict[str, Any]] = None,
        tags: Iterable = (),
        cache_mode: CacheMode = CacheMode.CACHEABLE,
        headers: Optional[Dict[str, str]] = None,
    ) -> Result[TransportResponse]:
        """
        Execute a GraphQL document.

        Args:
            document: GraphQL query or mutation
            variables: Query variables
            tags: Cache tags the response is stored under
            cache_mode: CACHEABLE or NO_CACHE
            headers: Extra request headers

        Returns:
            Ok[TransportResponse] or a failure value
        """
        if not document or not document.strip():
            return ValidationFailure(message="GraphQL document must not be empty", field="document")

        tag_list = normalize_tags(tags)
        use_cache = cache_mode == CacheMode.CACHEABLE and bool(tag_list)
        cache = self.cache

        key = None
        snapshot: Dict[str, int] = {}
        if use_cache:
            key = build_cache_key(document, variables)
            cached = await cache.get(key)
            if cached is not None:
                logger.debug(f"Cache hit for tags {tag_list}")
                return Ok(TransportResponse(status=200, body=cached, cached=True))
            snapshot = await cache.snapshot(tag_list)

        payload: Dict[str, Any] = {"query": document}
        if variables is not None:
            payload["variables"] = variables

        start_time = time.time()
        try:
            status, body = await self._send(payload, headers)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            log_api_call("POST", self.graphql_url, 0, time.time() - start_time, error=str(e))
            return classify_exception(e, document)

        log_api_call("POST", self.graphql_url, status, time.time() - start_time, tags=tag_list)

        outcome = classify_response(status, body, document)
        if not outcome.is_ok:
            logger.warning(f"❌ Storefront API call failed: {outcome}")
            return outcome

        if use_cache:
            await cache.set(key, body, tag_list, snapshot, ttl_seconds=self.settings.CACHE_TTL_SECONDS)

        return Ok(TransportResponse(status=status, body=body, cached=False))

    async def _run_operation(
        self,
        operation: StorefrontOperation,
        variables: Optional[Dict[str, Any]] = None,
    ) -> Result[Any]:
        """
        Validate variables, execute the operation and decode its data.

        Writes invalidate their target tags before the result is returned.

        Returns:
            Ok wrapping the operation's response model, or a failure value
        """
        try:
            validated = operation.variables_model.model_validate(variables or {})
        except ValidationError as e:
            logger.warning(f"Invalid variables for {operation.name}: {e.error_count()} error(s)")
            return _validation_failure(e)

        result = await self.execute(
            operation.document,
            validated.model_dump(exclude_none=True),
            tags=operation.tags,
            cache_mode=operation.cache_mode,
        )
        if not result.is_ok:
            return result

        try:
            decoded = operation.response_model.model_validate(result.value.body.get("data") or {})
        except ValidationError as e:
            logger.error(f"Unexpected response shape for {operation.name}: {e}")
            return TransportFailure(
                cause=f"unexpected response shape for {operation.name}",
                query=operation.document,
            )

        if operation.invalidates:
            tags = normalize_tags(operation.invalidates)
            await self.cache.invalidate(tags)
            logger.info(f"{operation.name} invalidated cache tags {tags}")

        return Ok(decoded)

    def __str__(self):
        """String representation of the client."""
        return f"{type(self).__name__}(url={self.graphql_url})"

    def __repr__(self):
        """Detailed string representation of the client."""
        return (
            f"{type(self).__name__}("
            f"graphql_url='{self.graphql_url}', "
            f"api_version='{self.api_version}', "
            f"initialized={self.session is not None})"
        )
