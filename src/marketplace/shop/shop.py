"""Shop aggregate (Event Sourced): the seller's ledger.

The shop owns the available balance and the append-only transaction
history of its withdrawals. Nothing assigns the balance directly: each
change is raised as an event carrying a delta, and ``@apply`` handlers
rebuild the balance by replaying them.

Balance movements:
    delivery            +net proceeds       (ProceedsCredited)
    withdrawal request  -gross amount       (WithdrawalReserved)
    withdrawal rejected +gross amount       (WithdrawalReleased)
    withdrawal resolved  no balance change  (TransactionRecorded)
"""

import json
from datetime import UTC, datetime
from uuid import uuid4

from protean import apply, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, String, Text

from marketplace.domain import marketplace
from marketplace.errors import InsufficientBalance
from marketplace.shared.charges import to_money
from marketplace.shop.events import (
    PayoutMethodRemoved,
    PayoutMethodUpdated,
    ProceedsCredited,
    ShopRegistered,
    TransactionRecorded,
    WithdrawalReleased,
    WithdrawalReserved,
)

REJECTED = "Rejected"


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@marketplace.entity(part_of="Shop")
class Transaction:
    """A resolved withdrawal as it appears in the shop's history."""

    withdrawal_id = Identifier(required=True)
    amount = Float(required=True)
    service_charge = Float(required=True)
    final_amount = Float(required=True)
    payout_destination = Text()
    status = String(required=True, max_length=20)
    created_at = DateTime()
    updated_at = DateTime()


# ---------------------------------------------------------------------------
# Aggregate Root (Event Sourced)
# ---------------------------------------------------------------------------
@marketplace.aggregate(is_event_sourced=True)
class Shop:
    name = String(required=True, max_length=255)
    email = String(required=True, max_length=255)
    withdraw_method = Text()  # JSON: payout destination
    available_balance = Float(default=0.0)
    transactions = HasMany(Transaction)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def balance_is_never_negative(self):
        if self.available_balance is not None and self.available_balance < 0:
            raise ValidationError({"available_balance": ["Balance cannot be negative"]})

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def register(cls, name, email):
        """Open a shop with an empty ledger."""
        shop = cls._create_new()
        shop.raise_(
            ShopRegistered(
                shop_id=str(shop.id),
                name=name,
                email=email,
                registered_at=datetime.now(UTC),
            )
        )
        return shop

    @property
    def payout_method(self) -> dict | None:
        return json.loads(self.withdraw_method) if self.withdraw_method else None

    def transaction_for(self, withdrawal_id):
        return next(
            (t for t in (self.transactions or []) if str(t.withdrawal_id) == str(withdrawal_id)),
            None,
        )

    # -------------------------------------------------------------------
    # Payout destination
    # -------------------------------------------------------------------
    def update_payout_method(self, withdraw_method: dict):
        if not withdraw_method:
            raise ValidationError({"withdraw_method": ["Payout method is required"]})

        self.raise_(
            PayoutMethodUpdated(
                shop_id=str(self.id),
                withdraw_method=json.dumps(withdraw_method),
                updated_at=datetime.now(UTC),
            )
        )

    def remove_payout_method(self):
        if not self.withdraw_method:
            return

        self.raise_(PayoutMethodRemoved(shop_id=str(self.id), removed_at=datetime.now(UTC)))

    # -------------------------------------------------------------------
    # Ledger movements
    # -------------------------------------------------------------------
    def credit_proceeds(self, order_id, order_total, service_charge, amount):
        """Add the net proceeds of a delivered order to the balance."""
        if amount < 0:
            raise ValidationError({"amount": ["Proceeds cannot be negative"]})

        previous = self.available_balance or 0.0
        self.raise_(
            ProceedsCredited(
                shop_id=str(self.id),
                order_id=str(order_id),
                order_total=order_total,
                service_charge=service_charge,
                amount=amount,
                previous_balance=previous,
                new_balance=to_money(previous + amount),
                credited_at=datetime.now(UTC),
            )
        )

    def reserve_withdrawal(self, withdrawal_id, amount):
        """Hold back the gross amount of a withdrawal request."""
        if amount <= 0:
            raise ValidationError({"amount": ["Amount must be positive"]})

        previous = self.available_balance or 0.0
        if amount > previous:
            raise InsufficientBalance(f"Insufficient balance: {previous:.2f} available, {amount:.2f} requested")

        self.raise_(
            WithdrawalReserved(
                shop_id=str(self.id),
                withdrawal_id=str(withdrawal_id),
                amount=amount,
                previous_balance=previous,
                new_balance=to_money(previous - amount),
                reserved_at=datetime.now(UTC),
            )
        )

    def release_withdrawal(self, withdrawal_id, amount):
        """Give a reserved amount back to the balance."""
        previous = self.available_balance or 0.0
        self.raise_(
            WithdrawalReleased(
                shop_id=str(self.id),
                withdrawal_id=str(withdrawal_id),
                amount=amount,
                previous_balance=previous,
                new_balance=to_money(previous + amount),
                released_at=datetime.now(UTC),
            )
        )

    def settle_withdrawal(
        self,
        withdrawal_id,
        amount,
        service_charge,
        final_amount,
        status,
        payout_destination=None,
        created_at=None,
    ) -> bool:
        """Close a reserved withdrawal and append its transaction.

        A rejected withdrawal releases its reservation first. A succeeded one
        keeps it: the money already left the balance at request time.

        Returns False when the withdrawal already has a transaction.
        """
        if self.transaction_for(withdrawal_id) is not None:
            return False

        if status == REJECTED:
            self.release_withdrawal(withdrawal_id, amount)

        now = datetime.now(UTC)
        self.raise_(
            TransactionRecorded(
                shop_id=str(self.id),
                transaction_id=str(uuid4()),
                withdrawal_id=str(withdrawal_id),
                amount=amount,
                service_charge=service_charge,
                final_amount=final_amount,
                payout_destination=payout_destination,
                status=status,
                created_at=created_at or now,
                recorded_at=now,
            )
        )
        return True

    # -------------------------------------------------------------------
    # @apply methods: rebuild state during event replay
    # -------------------------------------------------------------------
    @apply
    def _on_shop_registered(self, event: ShopRegistered):
        self.id = event.shop_id
        self.name = event.name
        self.email = event.email
        self.available_balance = 0.0
        self.created_at = event.registered_at
        self.updated_at = event.registered_at

    @apply
    def _on_payout_method_updated(self, event: PayoutMethodUpdated):
        self.withdraw_method = event.withdraw_method
        self.updated_at = event.updated_at

    @apply
    def _on_payout_method_removed(self, event: PayoutMethodRemoved):
        self.withdraw_method = None
        self.updated_at = event.removed_at

    @apply
    def _on_proceeds_credited(self, event: ProceedsCredited):
        self.available_balance = to_money((self.available_balance or 0.0) + event.amount)
        self.updated_at = event.credited_at

    @apply
    def _on_withdrawal_reserved(self, event: WithdrawalReserved):
        self.available_balance = to_money((self.available_balance or 0.0) - event.amount)
        self.updated_at = event.reserved_at

    @apply
    def _on_withdrawal_released(self, event: WithdrawalReleased):
        self.available_balance = to_money((self.available_balance or 0.0) + event.amount)
        self.updated_at = event.released_at

    @apply
    def _on_transaction_recorded(self, event: TransactionRecorded):
        # Idempotent: skip if the transaction is already in the history
        existing = next(
            (t for t in (self.transactions or []) if str(t.id) == str(event.transaction_id)),
            None,
        )
        if not existing:
            self.add_transactions(
                Transaction(
                    id=event.transaction_id,
                    withdrawal_id=event.withdrawal_id,
                    amount=event.amount,
                    service_charge=event.service_charge,
                    final_amount=event.final_amount,
                    payout_destination=event.payout_destination,
                    status=event.status,
                    created_at=event.created_at,
                    updated_at=event.recorded_at,
                )
            )
        self.updated_at = event.recorded_at
