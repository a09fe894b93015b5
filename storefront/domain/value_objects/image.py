"""
Image value object.

The normalized form always carries a non-empty ``altText``.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class Image(BaseModel):
    """Product or collection image as served to rendering."""

    model_config = ConfigDict(frozen=True)

    url: str
    altText: str
    width: Optional[int] = None
    height: Optional[int] = None
