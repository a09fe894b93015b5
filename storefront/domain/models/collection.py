"""
Collection domain model (normalized).
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from .product import SEO


class Collection(BaseModel):
    """Collection with the storefront route it is listed under."""

    model_config = ConfigDict(frozen=True)

    handle: str
    title: str
    description: str = ""
    seo: SEO = Field(default_factory=SEO)
    updatedAt: str
    path: str

    @classmethod
    def all_products(cls) -> "Collection":
        """Synthetic collection standing for the unfiltered catalog."""
        return cls(
            handle="",
            title="All",
            description="All products",
            seo=SEO(title="All", description="All products"),
            path="/search",
            updatedAt=datetime.now(timezone.utc).isoformat(),
        )
