"""
Menu domain model.
"""

from pydantic import BaseModel, ConfigDict


class Menu(BaseModel):
    """Navigation entry pointing at a storefront route."""

    model_config = ConfigDict(frozen=True)

    title: str
    path: str
