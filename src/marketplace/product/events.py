"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from marketplace.domain import marketplace


@marketplace.event(part_of="Product")
class ProductCreated:
    """A shop listed a new product."""

    __version__ = 1

    product_id: Identifier(required=True)
    shop_id: Identifier(required=True)
    name: String(required=True)
    price: Float(required=True)
    stock: Integer(required=True)
    created_at: DateTime(required=True)


@marketplace.event(part_of="Product")
class ProductArchived:
    """The owning shop withdrew the product from sale."""

    __version__ = 1

    product_id: Identifier(required=True)
    shop_id: Identifier(required=True)
    archived_at: DateTime(required=True)


@marketplace.event(part_of="Product")
class StockRestored:
    """Units of a refunded order went back into stock."""

    __version__ = 1

    product_id: Identifier(required=True)
    order_id: Identifier(required=True)
    quantity: Integer(required=True)
    previous_stock: Integer(required=True)
    new_stock: Integer(required=True)
    new_sold_out: Integer(required=True)
    restored_at: DateTime(required=True)


@marketplace.event(part_of="Product")
class ProductReviewed:
    """A buyer rated the product after delivery."""

    __version__ = 1

    product_id: Identifier(required=True)
    order_id: Identifier(required=True)
    user_id: Identifier(required=True)
    rating: Integer(required=True)
    average_rating: Float(required=True)
    reviewed_at: DateTime(required=True)
