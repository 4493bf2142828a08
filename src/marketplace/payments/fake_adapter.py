"""Configurable fake payment gateway for development and testing.

No external calls are made. Tests flip it to failing with ``configure`` and
inspect ``calls`` to see what the application asked for.
"""

from uuid import uuid4

from marketplace.payments.port import PaymentGateway, PaymentIntent


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Gateway unavailable"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Gateway unavailable") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def create_intent(self, amount: float, currency: str) -> PaymentIntent:
        self.calls.append({"method": "create_intent", "amount": amount, "currency": currency})

        if self.should_succeed:
            intent_id = f"fake_pi_{uuid4().hex[:12]}"
            return PaymentIntent(
                success=True,
                intent_id=intent_id,
                client_secret=f"{intent_id}_secret_{uuid4().hex[:8]}",
                amount=round(amount * 100),
                currency=currency,
                status="created",
            )
        return PaymentIntent(
            success=False,
            status="failed",
            failure_reason=self.failure_reason,
        )
