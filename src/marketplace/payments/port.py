"""Payment gateway port (abstract interface).

Checkout sessions are created with the gateway before the cart is placed;
the resulting intent id travels with the order as its payment info.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class PaymentIntent:
    """Result of creating a payment intent."""

    success: bool
    intent_id: str | None = None
    client_secret: str | None = None
    amount: int | None = None  # smallest currency unit
    currency: str | None = None
    status: str | None = None
    failure_reason: str | None = None


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def create_intent(self, amount: float, currency: str) -> PaymentIntent:
        """Open a payment for ``amount`` (major units) in ``currency``."""
        ...
