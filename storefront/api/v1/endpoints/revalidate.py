"""
Endpoint de revalidación para webhooks de Shopify.

Shopify llama a este endpoint cuando cambian productos, colecciones o
carritos; los datos cacheados con el tag correspondiente se invalidan.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Query, Request, status

from storefront.api.v1.schemas.shopify_schemas import RevalidationResponse
from storefront.services.revalidation import RevalidationService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Revalidation"])


@router.post("/revalidate", response_model=RevalidationResponse, status_code=status.HTTP_200_OK)
async def revalidate(
    request: Request,
    secret: Optional[str] = Query(None, description="Secreto compartido de revalidación"),
) -> RevalidationResponse:
    """
    Recibe un webhook de Shopify e invalida los tags afectados.

    Args:
        request: Request con headers X-Shopify-* y cuerpo crudo
        secret: Secreto compartido (alternativa a la firma HMAC)

    Returns:
        RevalidationResponse: Tags invalidados y timestamp en ms

    Raises:
        WebhookAuthenticationException: 401 sin secreto ni firma válidos
    """
    payload = await request.body()

    service = RevalidationService()
    return await service.revalidate(
        topic=request.headers.get("X-Shopify-Topic"),
        payload=payload,
        secret=secret,
        signature=request.headers.get("X-Shopify-Hmac-Sha256"),
        shop=request.headers.get("X-Shopify-Shop-Domain"),
    )
