"""Withdrawal aggregate (CQRS): a seller's payout request.

State Machine:
    PROCESSING → SUCCEEDED
    PROCESSING → REJECTED

The service charge is computed once, when the request is made, and the
recorded ``amount`` is the net payout. ``gross_amount`` is what left the
shop's balance.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, String, Text

from marketplace.domain import marketplace
from marketplace.shared.charges import WITHDRAWAL_SERVICE_RATE, split_charge
from marketplace.withdrawal.events import WithdrawalRequested, WithdrawalResolved


class WithdrawStatus(Enum):
    PROCESSING = "Processing"
    SUCCEEDED = "Succeeded"
    REJECTED = "Rejected"


_RESOLUTIONS = {WithdrawStatus.SUCCEEDED, WithdrawStatus.REJECTED}


def parse_resolution(value) -> WithdrawStatus:
    """Map an admin-supplied status onto a final withdrawal status."""
    if value is None:
        return WithdrawStatus.SUCCEEDED
    try:
        status = WithdrawStatus(value)
    except ValueError:
        raise ValidationError({"status": [f"Unknown withdrawal status: {value}"]}) from None
    if status not in _RESOLUTIONS:
        raise ValidationError({"status": [f"A withdrawal cannot be resolved as {status.value}"]})
    return status


def validate_amount(amount) -> float:
    if isinstance(amount, bool) or not isinstance(amount, int | float) or amount <= 0:
        raise ValidationError({"amount": ["Amount must be a positive number"]})
    return float(amount)


@marketplace.aggregate
class Withdrawal:
    seller_id = Identifier(required=True)
    gross_amount = Float(required=True, min_value=0.0)
    service_charge = Float(required=True, min_value=0.0)
    amount = Float(required=True, min_value=0.0)  # net payout
    payout_destination = Text()  # JSON snapshot of the shop's payout method
    status = String(choices=WithdrawStatus, default=WithdrawStatus.PROCESSING.value)
    created_at = DateTime()
    updated_at = DateTime()
    resolved_at = DateTime()

    @classmethod
    def request(cls, seller_id, amount, payout_destination=None):
        """Open a withdrawal request for ``amount`` (gross)."""
        gross = validate_amount(amount)
        charge, net = split_charge(gross, WITHDRAWAL_SERVICE_RATE)

        now = datetime.now(UTC)
        withdrawal = cls(
            seller_id=seller_id,
            gross_amount=gross,
            service_charge=charge,
            amount=net,
            payout_destination=json.dumps(payout_destination) if payout_destination else None,
            status=WithdrawStatus.PROCESSING.value,
            created_at=now,
            updated_at=now,
        )
        withdrawal.raise_(
            WithdrawalRequested(
                withdrawal_id=str(withdrawal.id),
                seller_id=str(seller_id),
                gross_amount=gross,
                service_charge=charge,
                amount=net,
                payout_destination=withdrawal.payout_destination,
                requested_at=now,
            )
        )
        return withdrawal

    @property
    def is_resolved(self) -> bool:
        return WithdrawStatus(self.status) in _RESOLUTIONS

    def resolve(self, status: WithdrawStatus) -> bool:
        """Close the request. Returns False if it was already closed the same way.

        Closing an already closed request with a different status is refused.
        """
        if self.is_resolved:
            if WithdrawStatus(self.status) == status:
                return False
            raise ValidationError({"status": [f"Withdrawal is already {self.status}"]})

        now = datetime.now(UTC)
        self.status = status.value
        self.resolved_at = now
        self.updated_at = now

        self.raise_(
            WithdrawalResolved(
                withdrawal_id=str(self.id),
                seller_id=str(self.seller_id),
                status=status.value,
                gross_amount=self.gross_amount,
                service_charge=self.service_charge,
                amount=self.amount,
                resolved_at=now,
            )
        )
        return True
