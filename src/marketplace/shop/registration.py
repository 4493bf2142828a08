"""Shop registration: command and handler."""

from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.shop.shop import Shop
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


@marketplace.command(part_of="Shop")
class RegisterShop:
    name = String(required=True, max_length=255)
    email = String(required=True, max_length=255)


@marketplace.command_handler(part_of=Shop)
class RegisterShopHandler:
    @handle(RegisterShop)
    def register_shop(self, command):
        shop = Shop.register(name=command.name, email=command.email)
        current_domain.repository_for(Shop).add(shop)
        logger.info("shop_registered", shop_id=str(shop.id))
        return str(shop.id)
