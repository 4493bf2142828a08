"""Repository for the Product aggregate."""

from protean.exceptions import ObjectNotFoundError

from marketplace.domain import marketplace
from marketplace.errors import ProductNotFound
from marketplace.product.product import Product


@marketplace.repository(part_of=Product)
class ProductRepository:
    def get_product(self, product_id) -> Product:
        try:
            return self.get(product_id)
        except ObjectNotFoundError:
            raise ProductNotFound(f"Product {product_id} not found") from None

    def for_shop(self, shop_id) -> list[Product]:
        """Active products of a shop."""
        return self._dao.query.filter(shop_id=str(shop_id), is_active=True).order_by("-created_at").limit(None).all().items

    def all_products(self) -> list[Product]:
        """Every active product, newest first."""
        return self._dao.query.filter(is_active=True).order_by("-created_at").limit(None).all().items
