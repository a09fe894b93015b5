"""
Endpoints JSON de la tienda.

Serializan las salidas del gateway (menú, productos, colecciones y carrito)
para la capa de renderizado. El id del carrito viaja en una cookie y se
pasa explícitamente al gateway.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response

from storefront.api.v1.schemas.storefront_schemas import AddCartLineRequest, UpdateCartLineRequest
from storefront.core.config import get_settings
from storefront.core.constants import SORTING, SortFilterItem, resolve_sort
from storefront.db.shopify_clients.unified_client import StorefrontGateway, get_gateway
from storefront.domain.models import Cart, Collection, Menu, Product
from storefront.services import cart_actions

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/storefront", tags=["Storefront"])


def get_cart_id(request: Request) -> Optional[str]:
    """Lee el id del carrito desde la cookie configurada."""
    return request.cookies.get(get_settings().CART_COOKIE_NAME)


def set_cart_cookie(response: Response, cart_id: str) -> None:
    response.set_cookie(get_settings().CART_COOKIE_NAME, cart_id, httponly=True, samesite="lax")


# === CATÁLOGO ===


@router.get("/menu", response_model=List[Menu])
@router.get("/menu/{handle}", response_model=List[Menu])
async def get_menu(handle: Optional[str] = None, gateway: StorefrontGateway = Depends(get_gateway)):
    """
    Obtiene el menú de navegación.

    Args:
        handle: Handle del menú (por defecto MENU_HANDLE)
    """
    result = await gateway.get_menu(handle)
    return result.unwrap()


@router.get("/sorting", response_model=List[SortFilterItem])
async def get_sorting_options():
    """Opciones de ordenamiento disponibles para la búsqueda."""
    return SORTING


@router.get("/products", response_model=List[Product])
async def search_products(
    q: Optional[str] = Query(None, description="Texto de búsqueda"),
    sort: Optional[str] = Query(None, description="Slug de ordenamiento (ej. price-asc)"),
    gateway: StorefrontGateway = Depends(get_gateway),
):
    """
    Busca productos visibles.

    Args:
        q: Texto de búsqueda
        sort: Slug de ordenamiento; desconocido usa Relevance
    """
    sort_item = resolve_sort(sort)
    result = await gateway.get_products(query=q, reverse=sort_item.reverse, sort_key=sort_item.sortKey)
    return result.unwrap()


@router.get("/products/{product_id:path}/recommendations", response_model=List[Product])
async def get_product_recommendations(product_id: str, gateway: StorefrontGateway = Depends(get_gateway)):
    """Productos recomendados para un producto."""
    result = await gateway.get_product_recommendations(product_id)
    return result.unwrap()


@router.get("/products/{handle}", response_model=Product)
async def get_product(handle: str, gateway: StorefrontGateway = Depends(get_gateway)):
    """
    Obtiene un producto por handle (incluye productos ocultos).

    Raises:
        HTTPException: 404 si el producto no existe
    """
    product = (await gateway.get_product(handle)).unwrap()
    if product is None:
        raise HTTPException(status_code=404, detail=f"Product '{handle}' not found")
    return product


@router.get("/collections", response_model=List[Collection])
async def get_collections(gateway: StorefrontGateway = Depends(get_gateway)):
    """Colecciones visibles, empezando por "All"."""
    result = await gateway.get_collections()
    return result.unwrap()


@router.get("/collections/{handle}", response_model=Collection)
async def get_collection(handle: str, gateway: StorefrontGateway = Depends(get_gateway)):
    """
    Obtiene una colección por handle.

    Raises:
        HTTPException: 404 si la colección no existe
    """
    collection = (await gateway.get_collection(handle)).unwrap()
    if collection is None:
        raise HTTPException(status_code=404, detail=f"Collection '{handle}' not found")
    return collection


@router.get("/collections/{handle}/products", response_model=List[Product])
async def get_collection_products(
    handle: str,
    sort: Optional[str] = Query(None, description="Slug de ordenamiento"),
    gateway: StorefrontGateway = Depends(get_gateway),
):
    """Productos visibles de una colección; vacío si la colección no existe."""
    sort_item = resolve_sort(sort)
    result = await gateway.get_collection_products(handle, reverse=sort_item.reverse, sort_key=sort_item.sortKey)
    return result.unwrap()


# === CARRITO ===


@router.get("/cart", response_model=Optional[Cart])
async def get_cart(request: Request, gateway: StorefrontGateway = Depends(get_gateway)):
    """Carrito actual según la cookie; null si no hay carrito."""
    result = await gateway.get_cart(get_cart_id(request))
    return result.unwrap()


@router.post("/cart/lines", response_model=Cart)
async def add_cart_line(
    body: AddCartLineRequest,
    request: Request,
    response: Response,
    gateway: StorefrontGateway = Depends(get_gateway),
):
    """
    Agrega una variante al carrito, creando el carrito si no existe.
    """
    cart_id = get_cart_id(request)
    if not cart_id:
        cart = (await cart_actions.ensure_cart(gateway, None)).unwrap()
        cart_id = cart.id
        set_cart_cookie(response, cart_id)

    result = await cart_actions.add_item(gateway, cart_id, body.merchandiseId, body.quantity)
    return result.unwrap()


@router.patch("/cart/lines", response_model=Cart)
async def update_cart_line(
    body: UpdateCartLineRequest,
    request: Request,
    gateway: StorefrontGateway = Depends(get_gateway),
):
    """Cambia la cantidad de una variante; cantidad 0 elimina la línea."""
    result = await cart_actions.update_item_quantity(gateway, get_cart_id(request), body.merchandiseId, body.quantity)
    return result.unwrap()


@router.delete("/cart/lines/{line_id:path}", response_model=Cart)
async def remove_cart_line(line_id: str, request: Request, gateway: StorefrontGateway = Depends(get_gateway)):
    """Elimina una línea del carrito."""
    result = await cart_actions.remove_item(gateway, get_cart_id(request), line_id)
    return result.unwrap()
