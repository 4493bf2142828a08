"""Payout destination of a shop: commands and handler."""

import json

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.shared.actors import Actor, require_shop_owner
from marketplace.shop.lookup import load_shop
from marketplace.shop.shop import Shop


@marketplace.command(part_of="Shop")
class UpdatePayoutMethod:
    shop_id = Identifier(required=True)
    withdraw_method = Text(required=True)  # JSON: payout destination
    actor_id = Identifier(required=True)
    actor_role = String(required=True, max_length=20)


@marketplace.command(part_of="Shop")
class RemovePayoutMethod:
    shop_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    actor_role = String(required=True, max_length=20)


@marketplace.command_handler(part_of=Shop)
class PayoutMethodHandler:
    @handle(UpdatePayoutMethod)
    def update_payout_method(self, command):
        require_shop_owner(Actor.from_command(command), command.shop_id)

        shop = load_shop(command.shop_id)
        withdraw_method = (
            json.loads(command.withdraw_method) if isinstance(command.withdraw_method, str) else command.withdraw_method
        )
        shop.update_payout_method(withdraw_method)
        current_domain.repository_for(Shop).add(shop)

    @handle(RemovePayoutMethod)
    def remove_payout_method(self, command):
        require_shop_owner(Actor.from_command(command), command.shop_id)

        shop = load_shop(command.shop_id)
        shop.remove_payout_method()
        current_domain.repository_for(Shop).add(shop)
