"""
Modelos de request de la API JSON de la tienda.
"""

from pydantic import BaseModel, Field


class AddCartLineRequest(BaseModel):
    """Variante a agregar al carrito."""

    merchandiseId: str = Field(description="Id de la variante seleccionada")
    quantity: int = Field(default=1, ge=1)


class UpdateCartLineRequest(BaseModel):
    """Nueva cantidad para la línea de una variante (0 la elimina)."""

    merchandiseId: str
    quantity: int = Field(ge=0)
