"""Tests unitarios para el servicio de revalidación."""

import base64
import hashlib
import hmac

import pytest

from storefront.core.cache_manager import MemoryTagCache
from storefront.core.config import Settings
from storefront.services.revalidation import RevalidationService
from storefront.utils.error_handler import WebhookAuthenticationException

SECRET = "revalidation-secret"
WEBHOOK_SECRET = "webhook-secret"


def _sign(payload: bytes, secret: str = WEBHOOK_SECRET) -> str:
    return base64.b64encode(hmac.new(secret.encode(), payload, hashlib.sha256).digest()).decode()


@pytest.fixture
def cache():
    return MemoryTagCache()


@pytest.fixture
def service(cache):
    settings = Settings(SHOPIFY_REVALIDATION_SECRET=SECRET, SHOPIFY_WEBHOOK_SECRET=WEBHOOK_SECRET)
    return RevalidationService(cache=cache, settings=settings)


async def _seed(cache, tag):
    await cache.set(f"{tag}-key", {"tag": tag}, [tag], await cache.snapshot([tag]))


class TestAuthentication:
    """Tests para la autenticación de la revalidación."""

    def test_secret_matches(self, service):
        assert service.verify_secret(SECRET) is True
        assert service.verify_secret("wrong") is False
        assert service.verify_secret(None) is False

    def test_secret_unset_rejects_everything(self, cache):
        service = RevalidationService(cache=cache, settings=Settings(SHOPIFY_REVALIDATION_SECRET=None))
        assert service.verify_secret("anything") is False

    def test_valid_signature(self, service):
        payload = b'{"id": 1}'
        assert service.verify_webhook_signature(payload, _sign(payload)) is True

    def test_signature_for_other_payload_is_rejected(self, service):
        assert service.verify_webhook_signature(b'{"id": 2}', _sign(b'{"id": 1}')) is False

    def test_malformed_signature_is_rejected(self, service):
        assert service.verify_webhook_signature(b"{}", "not base64!") is False


class TestRevalidate:
    """Tests para revalidate."""

    @pytest.mark.asyncio
    async def test_wrong_secret_evicts_nothing(self, service, cache):
        """Debe rechazar con 401 y no invalidar ningún tag."""
        await _seed(cache, "products")

        with pytest.raises(WebhookAuthenticationException) as exc_info:
            await service.revalidate("products/update", secret="wrong")

        assert exc_info.value.status_code == 401
        assert await cache.get("products-key") == {"tag": "products"}

    @pytest.mark.asyncio
    async def test_product_topic_evicts_products_only(self, service, cache):
        """Debe invalidar solo el tag del topic recibido."""
        await _seed(cache, "products")
        await _seed(cache, "collections")

        response = await service.revalidate("products/update", secret=SECRET)

        assert response.status == 200
        assert response.revalidated is True
        assert response.tags == ["products"]
        assert response.now > 0
        assert await cache.get("products-key") is None
        assert await cache.get("collections-key") == {"tag": "collections"}

    @pytest.mark.asyncio
    async def test_signed_webhook_is_accepted(self, service, cache):
        await _seed(cache, "collections")
        payload = b'{"id": 10}'

        response = await service.revalidate("collections/delete", payload=payload, signature=_sign(payload))

        assert response.tags == ["collections"]
        assert await cache.get("collections-key") is None

    @pytest.mark.asyncio
    async def test_unrelated_topic_is_acknowledged(self, service, cache):
        """Debe responder 200 sin invalidar para topics sin tags."""
        await _seed(cache, "products")

        response = await service.revalidate("orders/create", secret=SECRET)

        assert response.revalidated is False
        assert response.tags == []
        assert await cache.get("products-key") == {"tag": "products"}
