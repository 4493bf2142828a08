"""Domain events for the Order aggregate.

Orders are plain CQRS aggregates; the events below are the audit trail of
their lifecycle.
"""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from marketplace.domain import marketplace


@marketplace.event(part_of="Order")
class OrderPlaced:
    """A per-shop order was created from a checkout split."""

    __version__ = 1

    order_id = Identifier(required=True)
    shop_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    total_price = Float(required=True)
    subtotal = Float(required=True)
    line_count = Integer(required=True)
    placed_at = DateTime(required=True)


@marketplace.event(part_of="Order")
class OrderShipped:
    """The shop handed the order to a courier."""

    __version__ = 1

    order_id = Identifier(required=True)
    shop_id = Identifier(required=True)
    courier = String(required=True)
    tracking_id = String(required=True)
    shipped_at = DateTime(required=True)


@marketplace.event(part_of="Order")
class OrderDelivered:
    """The order reached the buyer; the payment is considered captured."""

    __version__ = 1

    order_id = Identifier(required=True)
    shop_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    total_price = Float(required=True)
    delivered_at = DateTime(required=True)


@marketplace.event(part_of="Order")
class RefundRequested:
    """The buyer asked for a refund."""

    __version__ = 1

    order_id = Identifier(required=True)
    shop_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    previous_status = String(required=True)
    requested_at = DateTime(required=True)


@marketplace.event(part_of="Order")
class RefundApproved:
    """The shop accepted the refund and the stock was put back."""

    __version__ = 1

    order_id = Identifier(required=True)
    shop_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {product_id, quantity}
    approved_at = DateTime(required=True)


@marketplace.event(part_of="Order")
class CartLineReviewed:
    """The buyer reviewed the product of one of the order's lines."""

    __version__ = 1

    order_id = Identifier(required=True)
    product_id = Identifier(required=True)
    reviewed_at = DateTime(required=True)
