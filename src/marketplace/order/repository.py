"""Repository for the Order aggregate."""

from protean.exceptions import ObjectNotFoundError

from marketplace.domain import marketplace
from marketplace.errors import OrderNotFound
from marketplace.order.order import Order


@marketplace.repository(part_of=Order)
class OrderRepository:
    """Order lookups used by the API; every listing is newest first."""

    def get_order(self, order_id) -> Order:
        try:
            return self.get(order_id)
        except ObjectNotFoundError:
            raise OrderNotFound(f"Order {order_id} not found") from None

    def for_buyer(self, buyer_id) -> list[Order]:
        return self._dao.query.filter(buyer_id=str(buyer_id)).order_by("-created_at").limit(None).all().items

    def for_shop(self, shop_id) -> list[Order]:
        return self._dao.query.filter(shop_id=str(shop_id)).order_by("-created_at").limit(None).all().items

    def all_orders(self) -> list[Order]:
        return self._dao.query.order_by("-created_at").limit(None).all().items
