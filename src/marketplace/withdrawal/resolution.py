"""Withdrawal resolution: command and handler.

Resolving appends exactly one transaction to the shop's history. A
succeeded withdrawal keeps the reservation made at request time, a
rejected one releases it. Repeating a resolution changes nothing.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.shared.actors import Actor, require_admin
from marketplace.shop.lookup import load_shop
from marketplace.shop.shop import Shop
from marketplace.utils.logging import get_logger
from marketplace.withdrawal.withdrawal import Withdrawal, parse_resolution

logger = get_logger(__name__)


@marketplace.command(part_of="Withdrawal")
class ResolveWithdrawal:
    withdrawal_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    status = String(max_length=20)  # defaults to Succeeded
    actor_id = Identifier(required=True)
    actor_role = String(required=True, max_length=20)


@marketplace.command_handler(part_of=Withdrawal)
class ResolveWithdrawalHandler:
    @handle(ResolveWithdrawal)
    def resolve_withdrawal(self, command):
        require_admin(Actor.from_command(command))
        status = parse_resolution(command.status)

        repo = current_domain.repository_for(Withdrawal)
        withdrawal = repo.get_withdrawal(command.withdrawal_id)
        shop = load_shop(command.seller_id)

        if str(withdrawal.seller_id) != str(shop.id):
            raise ValidationError({"seller_id": ["Withdraw request does not belong to this seller"]})

        if not withdrawal.resolve(status):
            logger.info(
                "withdrawal_already_resolved",
                withdrawal_id=str(withdrawal.id),
                status=withdrawal.status,
            )
            return str(withdrawal.id)

        shop.settle_withdrawal(
            withdrawal_id=withdrawal.id,
            amount=withdrawal.gross_amount,
            service_charge=withdrawal.service_charge,
            final_amount=withdrawal.amount,
            status=withdrawal.status,
            payout_destination=withdrawal.payout_destination,
            created_at=withdrawal.created_at,
        )
        repo.add(withdrawal)
        current_domain.repository_for(Shop).add(shop)

        logger.info(
            "withdrawal_resolved",
            withdrawal_id=str(withdrawal.id),
            shop_id=str(shop.id),
            status=withdrawal.status,
            balance=shop.available_balance,
        )
        return str(withdrawal.id)
