"""Order aggregate (CQRS): one shop's share of a checkout.

A checkout spanning several shops is split into one Order per shop. Each
order then walks a closed status workflow:

    Not Shipped → Shipping → Delivered
    Not Shipped | Shipping | Delivered → Processing refund → Refund Success

Orders are never deleted; the raised events form their audit trail.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    ValueObject,
)

from marketplace.domain import marketplace
from marketplace.order.couriers import validate_tracking_id
from marketplace.order.events import (
    CartLineReviewed,
    OrderDelivered,
    OrderPlaced,
    OrderShipped,
    RefundApproved,
    RefundRequested,
)
from marketplace.shared.charges import DELIVERY_SERVICE_RATE, split_charge, to_money


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    NOT_SHIPPED = "Not Shipped"
    SHIPPING = "Shipping"
    DELIVERED = "Delivered"
    PROCESSING_REFUND = "Processing refund"
    REFUND_SUCCESS = "Refund Success"


PAYMENT_SUCCEEDED = "Succeeded"

# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.NOT_SHIPPED: {
        OrderStatus.SHIPPING,
        OrderStatus.DELIVERED,
        OrderStatus.PROCESSING_REFUND,
    },
    OrderStatus.SHIPPING: {OrderStatus.DELIVERED, OrderStatus.PROCESSING_REFUND},
    OrderStatus.DELIVERED: {OrderStatus.PROCESSING_REFUND},
    OrderStatus.PROCESSING_REFUND: {OrderStatus.REFUND_SUCCESS},
    OrderStatus.REFUND_SUCCESS: set(),  # Terminal
}


def parse_status(value) -> OrderStatus:
    """Map a client-supplied status string onto the closed enumeration."""
    try:
        return OrderStatus(value)
    except ValueError:
        raise ValidationError({"status": [f"Unknown order status: {value}"]}) from None


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@marketplace.value_object(part_of="Order")
class ShippingAddress:
    """Where the order ships to, captured at checkout and never changed."""

    address1 = String(required=True, max_length=255)
    address2 = String(max_length=255)
    city = String(required=True, max_length=100)
    country = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)


@marketplace.value_object(part_of="Order")
class Buyer:
    name = String(max_length=255)
    email = String(max_length=255)


@marketplace.value_object(part_of="Order")
class PaymentInfo:
    payment_id = String(max_length=255)
    status = String(max_length=50)
    payment_type = String(max_length=50)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@marketplace.entity(part_of="Order")
class CartLine:
    """One product/quantity/variant entry of the order.

    Frozen once the order leaves Not Shipped, apart from ``tracking_id`` and
    ``is_reviewed``.
    """

    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    selected_size = String(max_length=50)
    selected_color = String(max_length=50)
    unit_price = Float(required=True, min_value=0.0)
    shop_id = Identifier(required=True)
    is_reviewed = Boolean(default=False)
    tracking_id = String(max_length=50)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@marketplace.aggregate
class Order:
    shop_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    buyer = ValueObject(Buyer)
    cart = HasMany(CartLine)
    shipping_address = ValueObject(ShippingAddress)
    total_price = Float(required=True, min_value=0.0)
    subtotal = Float(default=0.0)
    payment_info = ValueObject(PaymentInfo)
    status = String(choices=OrderStatus, default=OrderStatus.NOT_SHIPPED.value)
    tracking_id = String(max_length=50)
    courier = String(max_length=50)
    paid_at = DateTime()
    delivered_at = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def cart_lines_belong_to_order_shop(self):
        for line in self.cart or []:
            if str(line.shop_id) != str(self.shop_id):
                raise ValidationError({"cart": [f"Line for shop {line.shop_id} does not belong to shop {self.shop_id}"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        shop_id,
        buyer_id,
        lines,
        shipping_address,
        total_price,
        buyer_name=None,
        buyer_email=None,
        payment_info=None,
    ):
        """Create the order of one shop from its share of a checkout.

        Args:
            shop_id: The shop fulfilling every line.
            buyer_id: The user who checked out.
            lines: List of dicts with product_id, quantity, unit_price,
                   shop_id and optional selected_size / selected_color.
            shipping_address: Dict with address1, address2, city, country, zip_code.
            total_price: The checkout total as submitted.
            payment_info: Optional dict with payment_id, status, payment_type.
        """
        if not lines:
            raise ValidationError({"cart": ["An order needs at least one cart line"]})

        now = datetime.now(UTC)
        payment_info = payment_info or {}

        order = cls(
            shop_id=shop_id,
            buyer_id=buyer_id,
            buyer=Buyer(name=buyer_name, email=buyer_email),
            cart=[CartLine(**line) for line in lines],
            shipping_address=ShippingAddress(**shipping_address),
            total_price=total_price,
            subtotal=to_money(sum(line["unit_price"] * line["quantity"] for line in lines)),
            payment_info=PaymentInfo(
                payment_id=payment_info.get("payment_id"),
                status=payment_info.get("status"),
                payment_type=payment_info.get("payment_type"),
            ),
            status=OrderStatus.NOT_SHIPPED.value,
            paid_at=now,
            created_at=now,
            updated_at=now,
        )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                shop_id=str(shop_id),
                buyer_id=str(buyer_id),
                total_price=order.total_price,
                subtotal=order.subtotal,
                line_count=len(order.cart),
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # State transition helper
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        """Validate that the current state allows transition to target."""
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def line_for(self, product_id):
        return next((line for line in self.cart if str(line.product_id) == str(product_id)), None)

    def quantities_by_product(self) -> dict[str, int]:
        """Total quantity per product across the order's lines, in line order."""
        quantities: dict[str, int] = {}
        for line in self.cart:
            key = str(line.product_id)
            quantities[key] = quantities.get(key, 0) + line.quantity
        return quantities

    def seller_proceeds(self) -> tuple[float, float]:
        """``(service_charge, net)`` owed to the shop once the order is delivered."""
        return split_charge(self.total_price, DELIVERY_SERVICE_RATE)

    # -------------------------------------------------------------------
    # Shipping branch
    # -------------------------------------------------------------------
    def ship(self, courier, tracking_id):
        """Hand the order to a known courier with a well-formed tracking ID."""
        self._assert_can_transition(OrderStatus.SHIPPING)
        validate_tracking_id(courier, tracking_id)

        now = datetime.now(UTC)
        self.courier = courier
        self.tracking_id = tracking_id
        for line in self.cart:
            line.tracking_id = tracking_id
        self.status = OrderStatus.SHIPPING.value
        self.updated_at = now

        self.raise_(
            OrderShipped(
                order_id=str(self.id),
                shop_id=str(self.shop_id),
                courier=courier,
                tracking_id=tracking_id,
                shipped_at=now,
            )
        )

    def deliver(self):
        """Record delivery; the payment counts as captured from here on."""
        self._assert_can_transition(OrderStatus.DELIVERED)

        now = datetime.now(UTC)
        previous_payment = self.payment_info
        self.payment_info = PaymentInfo(
            payment_id=previous_payment.payment_id if previous_payment else None,
            status=PAYMENT_SUCCEEDED,
            payment_type=previous_payment.payment_type if previous_payment else None,
        )
        self.delivered_at = now
        self.status = OrderStatus.DELIVERED.value
        self.updated_at = now

        self.raise_(
            OrderDelivered(
                order_id=str(self.id),
                shop_id=str(self.shop_id),
                buyer_id=str(self.buyer_id),
                total_price=self.total_price,
                delivered_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Refund branch
    # -------------------------------------------------------------------
    def request_refund(self):
        """Buyer-initiated; no balance or stock side effects."""
        self._assert_can_transition(OrderStatus.PROCESSING_REFUND)

        now = datetime.now(UTC)
        previous = self.status
        self.status = OrderStatus.PROCESSING_REFUND.value
        self.updated_at = now

        self.raise_(
            RefundRequested(
                order_id=str(self.id),
                shop_id=str(self.shop_id),
                buyer_id=str(self.buyer_id),
                previous_status=previous,
                requested_at=now,
            )
        )

    def approve_refund(self):
        """Seller-approved. Stock restoration is carried out by the caller."""
        self._assert_can_transition(OrderStatus.REFUND_SUCCESS)

        now = datetime.now(UTC)
        self.status = OrderStatus.REFUND_SUCCESS.value
        self.updated_at = now

        self.raise_(
            RefundApproved(
                order_id=str(self.id),
                shop_id=str(self.shop_id),
                buyer_id=str(self.buyer_id),
                items=json.dumps(
                    [{"product_id": product_id, "quantity": qty} for product_id, qty in self.quantities_by_product().items()]
                ),
                approved_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Reviews
    # -------------------------------------------------------------------
    def mark_reviewed(self, product_id):
        """Flag the line of ``product_id`` as reviewed by the buyer."""
        if OrderStatus(self.status) != OrderStatus.DELIVERED:
            raise ValidationError({"status": ["Only delivered orders can be reviewed"]})

        line = self.line_for(product_id)
        if line is None:
            raise ValidationError({"product_id": [f"Product {product_id} is not part of this order"]})
        if line.is_reviewed:
            return

        now = datetime.now(UTC)
        line.is_reviewed = True
        self.updated_at = now

        self.raise_(
            CartLineReviewed(
                order_id=str(self.id),
                product_id=str(product_id),
                reviewed_at=now,
            )
        )
