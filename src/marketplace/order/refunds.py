"""Order refunds: buyer request and seller approval.

Approval restores stock for every line of the order as one batch. Every
product is loaded before anything changes, so a missing product leaves the
order and all stock untouched.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.order.order import Order, OrderStatus, parse_status
from marketplace.product.product import Product
from marketplace.shared.actors import Actor, require_buyer, require_shop_owner
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


def _expect_status(value, expected: OrderStatus) -> None:
    if parse_status(value) != expected:
        raise ValidationError({"status": [f"Status must be {expected.value}"]})


@marketplace.command(part_of="Order")
class RequestRefund:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=50)
    actor_id = Identifier(required=True)
    actor_role = String(required=True, max_length=20)


@marketplace.command(part_of="Order")
class ApproveRefund:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=50)
    actor_id = Identifier(required=True)
    actor_role = String(required=True, max_length=20)


@marketplace.command_handler(part_of=Order)
class RefundHandler:
    @handle(RequestRefund)
    def request_refund(self, command):
        _expect_status(command.status, OrderStatus.PROCESSING_REFUND)

        repo = current_domain.repository_for(Order)
        order = repo.get_order(command.order_id)
        require_buyer(Actor.from_command(command), order.buyer_id)

        order.request_refund()
        repo.add(order)
        return str(order.id)

    @handle(ApproveRefund)
    def approve_refund(self, command):
        _expect_status(command.status, OrderStatus.REFUND_SUCCESS)

        repo = current_domain.repository_for(Order)
        order = repo.get_order(command.order_id)
        require_shop_owner(Actor.from_command(command), order.shop_id)

        order.approve_refund()

        product_repo = current_domain.repository_for(Product)
        quantities = order.quantities_by_product()
        products = {product_id: product_repo.get_product(product_id) for product_id in quantities}

        for product_id, quantity in quantities.items():
            products[product_id].restore_stock(quantity, order_id=order.id)
            product_repo.add(products[product_id])
        repo.add(order)

        logger.info(
            "refund_approved",
            order_id=str(order.id),
            shop_id=str(order.shop_id),
            restored=quantities,
        )
        return str(order.id)
