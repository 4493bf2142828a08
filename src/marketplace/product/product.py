"""Product aggregate root with its Review entity.

Products hold the stock that checkout consumes and refunds give back.
Removing a product archives it; orders keep referring to it.
"""

import json
from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String, Text

from marketplace.domain import marketplace


@marketplace.entity(part_of="Product")
class Review:
    """One buyer's rating of the product; a buyer has at most one."""

    user_id: Identifier(required=True)
    user_name: String(max_length=255)
    rating: Integer(required=True, min_value=1, max_value=5)
    comment: Text()
    order_id: Identifier()
    created_at: DateTime()


@marketplace.aggregate
class Product:
    """Product aggregate root."""

    shop_id: Identifier(required=True)
    name: String(required=True, max_length=255)
    description: Text()
    category: String(max_length=100)
    price: Float(required=True, min_value=0.0)
    stock: Integer(default=0, min_value=0)
    sold_out: Integer(default=0)
    images: Text()  # JSON: list of {public_id, url}
    reviews: HasMany(Review)
    ratings: Float(default=0.0)
    is_active: Boolean(default=True)
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def create(cls, shop_id, name, price, stock=0, description=None, category=None, images=None):
        from marketplace.product.events import ProductCreated

        now = datetime.now(UTC)
        product = cls(
            shop_id=shop_id,
            name=name,
            description=description,
            category=category,
            price=price,
            stock=stock,
            sold_out=0,
            images=json.dumps(images or []),
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=str(product.id),
                shop_id=str(shop_id),
                name=name,
                price=price,
                stock=stock,
                created_at=now,
            )
        )
        return product

    @property
    def image_list(self) -> list[dict]:
        return json.loads(self.images) if self.images else []

    def archive(self):
        from marketplace.product.events import ProductArchived

        if not self.is_active:
            return

        now = datetime.now(UTC)
        self.is_active = False
        self.updated_at = now
        self.raise_(
            ProductArchived(
                product_id=str(self.id),
                shop_id=str(self.shop_id),
                archived_at=now,
            )
        )

    def restore_stock(self, quantity, order_id):
        """Put the units of a refunded order back: stock up, sold count down."""
        from marketplace.product.events import StockRestored

        if quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})

        now = datetime.now(UTC)
        previous_stock = self.stock or 0
        self.stock = previous_stock + quantity
        self.sold_out = (self.sold_out or 0) - quantity
        self.updated_at = now

        self.raise_(
            StockRestored(
                product_id=str(self.id),
                order_id=str(order_id),
                quantity=quantity,
                previous_stock=previous_stock,
                new_stock=self.stock,
                new_sold_out=self.sold_out,
                restored_at=now,
            )
        )

    def review(self, user_id, order_id, rating, comment=None, user_name=None):
        """Add the buyer's review, or replace the one they already left."""
        from marketplace.product.events import ProductReviewed

        now = datetime.now(UTC)
        existing = next((r for r in (self.reviews or []) if str(r.user_id) == str(user_id)), None)
        if existing:
            existing.rating = rating
            existing.comment = comment
            existing.user_name = user_name
        else:
            self.add_reviews(
                Review(
                    user_id=user_id,
                    user_name=user_name,
                    rating=rating,
                    comment=comment,
                    order_id=order_id,
                    created_at=now,
                )
            )

        self.ratings = round(sum(r.rating for r in self.reviews) / len(self.reviews), 2)
        self.updated_at = now

        self.raise_(
            ProductReviewed(
                product_id=str(self.id),
                order_id=str(order_id),
                user_id=str(user_id),
                rating=rating,
                average_rating=self.ratings,
                reviewed_at=now,
            )
        )
