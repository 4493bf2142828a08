"""Order fulfillment: shipping and delivery.

Delivery credits the owning shop's ledger in the same unit of work as the
order update, so neither change is committed without the other.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.order.order import Order, OrderStatus, parse_status
from marketplace.shared.actors import Actor, require_shop_owner
from marketplace.shop.lookup import load_shop
from marketplace.shop.shop import Shop
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


@marketplace.command(part_of="Order")
class UpdateOrderStatus:
    """Move an order along the shipping branch (Shipping or Delivered)."""

    order_id = Identifier(required=True)
    status = String(required=True, max_length=50)
    courier = String(max_length=50)
    tracking_id = String(max_length=50)
    actor_id = Identifier(required=True)
    actor_role = String(required=True, max_length=20)


@marketplace.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        target = parse_status(command.status)

        repo = current_domain.repository_for(Order)
        order = repo.get_order(command.order_id)
        require_shop_owner(Actor.from_command(command), order.shop_id)

        if target == OrderStatus.SHIPPING:
            order.ship(courier=command.courier, tracking_id=command.tracking_id)
            repo.add(order)
        elif target == OrderStatus.DELIVERED:
            shop = load_shop(order.shop_id)
            order.deliver()

            service_charge, net = order.seller_proceeds()
            shop.credit_proceeds(
                order_id=order.id,
                order_total=order.total_price,
                service_charge=service_charge,
                amount=net,
            )
            repo.add(order)
            current_domain.repository_for(Shop).add(shop)
            logger.info(
                "order_delivered",
                order_id=str(order.id),
                shop_id=str(order.shop_id),
                credited=net,
                service_charge=service_charge,
            )
        else:
            raise ValidationError({"status": ["Refunds are managed through the refund endpoints"]})

        return str(order.id)
