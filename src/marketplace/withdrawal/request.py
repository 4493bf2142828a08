"""Withdrawal request: command and handler.

The request and the ledger reservation are committed together.
"""

from protean import handle
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.shared.actors import Actor, require_shop_owner
from marketplace.shop.lookup import load_shop
from marketplace.shop.shop import Shop
from marketplace.utils.logging import get_logger
from marketplace.withdrawal.withdrawal import Withdrawal, validate_amount

logger = get_logger(__name__)


@marketplace.command(part_of="Withdrawal")
class RequestWithdrawal:
    amount = Float(required=True)
    seller_id = Identifier()  # defaults to the acting seller
    actor_id = Identifier(required=True)
    actor_role = String(required=True, max_length=20)


@marketplace.command_handler(part_of=Withdrawal)
class RequestWithdrawalHandler:
    @handle(RequestWithdrawal)
    def request_withdrawal(self, command):
        actor = Actor.from_command(command)
        seller_id = str(command.seller_id or actor.id)
        require_shop_owner(actor, seller_id)

        amount = validate_amount(command.amount)
        shop = load_shop(seller_id)

        withdrawal = Withdrawal.request(
            seller_id=seller_id,
            amount=amount,
            payout_destination=shop.payout_method,
        )
        shop.reserve_withdrawal(withdrawal.id, withdrawal.gross_amount)

        current_domain.repository_for(Withdrawal).add(withdrawal)
        current_domain.repository_for(Shop).add(shop)

        logger.info(
            "withdrawal_requested",
            withdrawal_id=str(withdrawal.id),
            shop_id=seller_id,
            gross_amount=withdrawal.gross_amount,
            service_charge=withdrawal.service_charge,
        )
        return str(withdrawal.id)
