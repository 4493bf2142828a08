"""Cart splitter: one checkout cart in, one order request per shop out.

The splitter only groups and validates. Persisting the resulting orders is
left to the ``PlaceOrders`` handler, which commits all of them together.
"""

from dataclasses import dataclass, field

from protean.exceptions import ValidationError

from marketplace.shared.charges import to_money

# Allowed gap between the submitted total and the sum of the cart lines
TOTAL_TOLERANCE = 0.01

_LINE_FIELDS = ("product_id", "quantity", "unit_price", "shop_id", "selected_size", "selected_color")


@dataclass
class OrderRequest:
    """Everything needed to create the order of a single shop."""

    shop_id: str
    lines: list[dict] = field(default_factory=list)
    shipping_address: dict = field(default_factory=dict)
    buyer: dict = field(default_factory=dict)
    total_price: float = 0.0
    payment_info: dict = field(default_factory=dict)

    @property
    def subtotal(self) -> float:
        return to_money(sum(line["unit_price"] * line["quantity"] for line in self.lines))


def _normalize_line(index: int, line: dict) -> dict:
    shop_id = line.get("shop_id")
    if not shop_id:
        raise ValidationError({"cart": [f"Line {index} has no shop"]})

    quantity = line.get("quantity")
    if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity <= 0:
        raise ValidationError({"cart": [f"Line {index} must have a positive quantity"]})

    if not line.get("product_id"):
        raise ValidationError({"cart": [f"Line {index} has no product"]})

    unit_price = line.get("unit_price")
    if not isinstance(unit_price, int | float) or isinstance(unit_price, bool) or unit_price < 0:
        raise ValidationError({"cart": [f"Line {index} must have a non-negative unit price"]})

    normalized = {key: line.get(key) for key in _LINE_FIELDS}
    normalized["shop_id"] = str(shop_id)
    normalized["product_id"] = str(line["product_id"])
    normalized["unit_price"] = float(unit_price)
    return normalized


def split_cart(
    cart: list[dict],
    shipping_address: dict,
    buyer: dict,
    total_price: float,
    payment_info: dict | None = None,
) -> dict[str, OrderRequest]:
    """Group checkout lines by shop, in the order shops first appear.

    Every request carries the whole-checkout ``total_price``; the per-shop
    amount is available as ``OrderRequest.subtotal``.

    Raises:
        ValidationError: empty cart, a line without shop or with a
            non-positive quantity, or a total that does not match the lines.
    """
    if not cart:
        raise ValidationError({"cart": ["Cart is empty"]})

    if total_price is None or total_price < 0:
        raise ValidationError({"total_price": ["Total price must be zero or more"]})

    lines = [_normalize_line(index, line) for index, line in enumerate(cart)]

    expected_total = to_money(sum(line["unit_price"] * line["quantity"] for line in lines))
    if abs(expected_total - float(total_price)) > TOTAL_TOLERANCE:
        raise ValidationError(
            {"total_price": [f"Total price {total_price} does not match cart total {expected_total:.2f}"]}
        )

    requests: dict[str, OrderRequest] = {}
    for line in lines:
        request = requests.get(line["shop_id"])
        if request is None:
            request = OrderRequest(
                shop_id=line["shop_id"],
                shipping_address=dict(shipping_address or {}),
                buyer=dict(buyer or {}),
                total_price=float(total_price),
                payment_info=dict(payment_info or {}),
            )
            requests[line["shop_id"]] = request
        request.lines.append(line)

    return requests
