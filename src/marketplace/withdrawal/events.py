"""Domain events for the Withdrawal aggregate."""

from protean.fields import DateTime, Float, Identifier, String, Text

from marketplace.domain import marketplace


@marketplace.event(part_of="Withdrawal")
class WithdrawalRequested:
    """A seller asked for a payout; the gross amount is reserved on the ledger."""

    __version__ = 1

    withdrawal_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    gross_amount = Float(required=True)
    service_charge = Float(required=True)
    amount = Float(required=True)  # net payout
    payout_destination = Text()
    requested_at = DateTime(required=True)


@marketplace.event(part_of="Withdrawal")
class WithdrawalResolved:
    """An admin closed the request as succeeded or rejected."""

    __version__ = 1

    withdrawal_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    status = String(required=True)
    gross_amount = Float(required=True)
    service_charge = Float(required=True)
    amount = Float(required=True)
    resolved_at = DateTime(required=True)
