"""
Money value object for monetary amounts returned by the Storefront API.

Amounts are kept as the decimal strings the backend sends so that no
precision is lost in this layer; arithmetic is a rendering concern.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, field_validator


class Money(BaseModel):
    """
    Immutable monetary amount with currency.

    Attributes:
        amount: Decimal amount as a string (e.g. "19.99")
        currencyCode: ISO currency code (e.g. "USD")

    Example:
        >>> Money(amount="19.99", currencyCode="USD").amount
        '19.99'
    """

    model_config = ConfigDict(frozen=True)

    amount: str
    currencyCode: str

    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount(cls, v):
        """Keep amounts as strings; numeric input is converted verbatim."""
        if isinstance(v, (int, Decimal)):
            return str(v)
        if isinstance(v, float):
            return repr(v)
        return v

    @classmethod
    def zero(cls, currency: str = "USD") -> "Money":
        """Create a zero amount in the given currency."""
        return cls(amount="0.0", currencyCode=currency)

    def __str__(self) -> str:
        return f"{self.amount} {self.currencyCode}"
