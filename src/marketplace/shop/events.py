"""Domain events for the Shop aggregate (event sourced).

The shop's ledger is rebuilt from these events. Every balance change is an
event carrying the delta plus the balance before and after it, so the
stream reads as a statement of account.
"""

from protean.fields import DateTime, Float, Identifier, String, Text

from marketplace.domain import marketplace


@marketplace.event(part_of="Shop")
class ShopRegistered:
    """A seller opened a shop; its ledger starts at zero."""

    __version__ = 1

    shop_id = Identifier(required=True)
    name = String(required=True)
    email = String(required=True)
    registered_at = DateTime(required=True)


@marketplace.event(part_of="Shop")
class PayoutMethodUpdated:
    __version__ = 1

    shop_id = Identifier(required=True)
    withdraw_method = Text(required=True)  # JSON: payout destination
    updated_at = DateTime(required=True)


@marketplace.event(part_of="Shop")
class PayoutMethodRemoved:
    __version__ = 1

    shop_id = Identifier(required=True)
    removed_at = DateTime(required=True)


@marketplace.event(part_of="Shop")
class ProceedsCredited:
    """Net proceeds of a delivered order were added to the balance."""

    __version__ = 1

    shop_id = Identifier(required=True)
    order_id = Identifier(required=True)
    order_total = Float(required=True)
    service_charge = Float(required=True)
    amount = Float(required=True)
    previous_balance = Float(required=True)
    new_balance = Float(required=True)
    credited_at = DateTime(required=True)


@marketplace.event(part_of="Shop")
class WithdrawalReserved:
    """The gross amount of a withdrawal request was held back from the balance."""

    __version__ = 1

    shop_id = Identifier(required=True)
    withdrawal_id = Identifier(required=True)
    amount = Float(required=True)
    previous_balance = Float(required=True)
    new_balance = Float(required=True)
    reserved_at = DateTime(required=True)


@marketplace.event(part_of="Shop")
class WithdrawalReleased:
    """A rejected withdrawal gave its reserved amount back."""

    __version__ = 1

    shop_id = Identifier(required=True)
    withdrawal_id = Identifier(required=True)
    amount = Float(required=True)
    previous_balance = Float(required=True)
    new_balance = Float(required=True)
    released_at = DateTime(required=True)


@marketplace.event(part_of="Shop")
class TransactionRecorded:
    """A resolved withdrawal was appended to the transaction history."""

    __version__ = 1

    shop_id = Identifier(required=True)
    transaction_id = Identifier(required=True)
    withdrawal_id = Identifier(required=True)
    amount = Float(required=True)
    service_charge = Float(required=True)
    final_amount = Float(required=True)
    payout_destination = Text()
    status = String(required=True)
    created_at = DateTime(required=True)
    recorded_at = DateTime(required=True)
