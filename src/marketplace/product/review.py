"""Product reviews: command and handler.

A buyer reviews a product they received; the rating lands on the product
and the matching line of the order is flagged as reviewed.
"""

from protean import handle
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.order.order import Order
from marketplace.product.product import Product
from marketplace.shared.actors import Actor, require_buyer


@marketplace.command(part_of="Product")
class SubmitReview:
    product_id: Identifier(required=True)
    order_id: Identifier(required=True)
    rating: Integer(required=True, min_value=1, max_value=5)
    comment: Text()
    user_name: String(max_length=255)
    actor_id: Identifier(required=True)
    actor_role: String(required=True, max_length=20)


@marketplace.command_handler(part_of=Product)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        order_repo = current_domain.repository_for(Order)
        order = order_repo.get_order(command.order_id)
        require_buyer(Actor.from_command(command), order.buyer_id)

        product_repo = current_domain.repository_for(Product)
        product = product_repo.get_product(command.product_id)

        order.mark_reviewed(command.product_id)
        product.review(
            user_id=order.buyer_id,
            order_id=order.id,
            rating=command.rating,
            comment=command.comment,
            user_name=command.user_name,
        )

        order_repo.add(order)
        product_repo.add(product)
