"""
Revalidación del cache a partir de webhooks de Shopify.

Autentica la llamada (secreto compartido o firma HMAC), resuelve el topic
a tags de cache e invalida esos tags. No guarda estado entre llamadas.
"""

import base64
import binascii
import hashlib
import hmac
import logging
import time
from typing import Optional

from storefront.api.v1.schemas.shopify_schemas import RevalidationResponse
from storefront.core.cache_manager import TagCache, get_tag_cache
from storefront.core.cache_tags import normalize_tags, tags_for_topic
from storefront.core.config import Settings, get_settings
from storefront.core.logging_config import log_webhook_received
from storefront.utils.error_handler import WebhookAuthenticationException

logger = logging.getLogger(__name__)


class RevalidationService:
    """
    Procesador de webhooks de revalidación.
    """

    def __init__(self, cache: Optional[TagCache] = None, settings: Optional[Settings] = None):
        """Inicializa el servicio de revalidación."""
        self.settings = settings or get_settings()
        self._cache = cache

    @property
    def cache(self) -> TagCache:
        return self._cache if self._cache is not None else get_tag_cache()

    def verify_secret(self, secret: Optional[str]) -> bool:
        """
        Compara el secreto recibido con SHOPIFY_REVALIDATION_SECRET.

        Args:
            secret: Valor del parámetro ?secret=

        Returns:
            bool: True si coincide (comparación en tiempo constante)
        """
        expected = self.settings.SHOPIFY_REVALIDATION_SECRET
        if not expected or not secret:
            return False
        return hmac.compare_digest(expected.encode("utf-8"), secret.encode("utf-8"))

    def verify_webhook_signature(self, payload: bytes, signature: Optional[str]) -> bool:
        """
        Verifica la firma HMAC del webhook.

        Args:
            payload: Payload del webhook en bytes
            signature: Firma del header X-Shopify-Hmac-Sha256 (base64)

        Returns:
            bool: True si la firma es válida
        """
        webhook_secret = self.settings.SHOPIFY_WEBHOOK_SECRET
        if not webhook_secret or not signature:
            return False

        expected_signature = hmac.new(webhook_secret.encode("utf-8"), payload, hashlib.sha256).digest()
        try:
            received_signature = base64.b64decode(signature, validate=True)
        except (binascii.Error, ValueError):
            logger.warning("Malformed webhook signature header")
            return False

        # Comparación segura contra timing attacks
        return hmac.compare_digest(expected_signature, received_signature)

    def authenticate(self, secret: Optional[str], payload: bytes, signature: Optional[str]) -> None:
        """
        Autentica la llamada de revalidación.

        Raises:
            WebhookAuthenticationException: Si no hay secreto ni firma válidos
        """
        if self.verify_secret(secret) or self.verify_webhook_signature(payload, signature):
            return
        logger.warning("Rejected revalidation request with invalid secret or signature")
        raise WebhookAuthenticationException()

    async def revalidate(
        self,
        topic: Optional[str],
        payload: bytes = b"",
        secret: Optional[str] = None,
        signature: Optional[str] = None,
        shop: Optional[str] = None,
    ) -> RevalidationResponse:
        """
        Autentica e invalida los tags asociados al topic.

        Args:
            topic: Header X-Shopify-Topic
            payload: Cuerpo crudo del request
            secret: Parámetro ?secret=
            signature: Header X-Shopify-Hmac-Sha256
            shop: Header X-Shopify-Shop-Domain

        Returns:
            RevalidationResponse: Tags invalidados y timestamp

        Raises:
            WebhookAuthenticationException: Si la autenticación falla
        """
        self.authenticate(secret, payload, signature)
        log_webhook_received(topic or "unknown", shop or "unknown")

        tags = normalize_tags(tags_for_topic(topic))
        if tags:
            evicted = await self.cache.invalidate(tags)
            logger.info(f"Revalidated {tags} for topic {topic} ({evicted} entries evicted)")
        else:
            logger.info(f"Topic {topic!r} does not affect cached data, acknowledged")

        return RevalidationResponse(
            status=200,
            revalidated=bool(tags),
            tags=tags,
            now=int(time.time() * 1000),
        )
