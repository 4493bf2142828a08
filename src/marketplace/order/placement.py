"""Order placement: split a checkout cart and create one order per shop."""

import json

from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.checkout.splitter import split_cart
from marketplace.domain import marketplace
from marketplace.order.order import Order
from marketplace.shared.actors import Actor, require_buyer
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


def _loads(value):
    return json.loads(value) if isinstance(value, str) else value


@marketplace.command(part_of="Order")
class PlaceOrders:
    cart = Text(required=True)  # JSON: list of cart line dicts
    shipping_address = Text(required=True)  # JSON: address dict
    buyer = Text(required=True)  # JSON: {id, name, email}
    total_price = Float(required=True)
    payment_info = Text()  # JSON: {payment_id, status, payment_type}
    actor_id = Identifier(required=True)
    actor_role = String(required=True, max_length=20)


@marketplace.command_handler(part_of=Order)
class PlaceOrdersHandler:
    @handle(PlaceOrders)
    def place_orders(self, command):
        buyer = _loads(command.buyer) or {}
        require_buyer(Actor.from_command(command), buyer.get("id"))

        requests = split_cart(
            cart=_loads(command.cart),
            shipping_address=_loads(command.shipping_address),
            buyer=buyer,
            total_price=command.total_price,
            payment_info=_loads(command.payment_info) if command.payment_info else None,
        )

        # All orders are added in the handler's unit of work and commit together
        repo = current_domain.repository_for(Order)
        order_ids = []
        for shop_id, request in requests.items():
            order = Order.create(
                shop_id=shop_id,
                buyer_id=request.buyer["id"],
                buyer_name=request.buyer.get("name"),
                buyer_email=request.buyer.get("email"),
                lines=request.lines,
                shipping_address=request.shipping_address,
                total_price=request.total_price,
                payment_info=request.payment_info,
            )
            repo.add(order)
            order_ids.append(str(order.id))

        logger.info("orders_placed", buyer_id=buyer.get("id"), order_ids=order_ids)
        return order_ids
