"""Listings return every matching record, not just the first page."""

from protean import current_domain

from marketplace.order.order import Order
from marketplace.product.product import Product
from marketplace.withdrawal.withdrawal import Withdrawal

COUNT = 105


def _add_orders(buyer_id="user-001", shop_id="shop-001"):
    repo = current_domain.repository_for(Order)
    for _ in range(COUNT):
        repo.add(
            Order.create(
                shop_id=shop_id,
                buyer_id=buyer_id,
                lines=[{"product_id": "prod-001", "quantity": 1, "unit_price": 10.0, "shop_id": shop_id}],
                shipping_address={"address1": "12 MG Road", "city": "Bengaluru", "country": "IN", "zip_code": "560001"},
                total_price=10.0,
            )
        )


class TestOrderListings:
    def test_buyer_shop_and_admin_listings_are_complete(self):
        _add_orders()

        repo = current_domain.repository_for(Order)
        assert len(repo.for_buyer("user-001")) == COUNT
        assert len(repo.for_shop("shop-001")) == COUNT
        assert len(repo.all_orders()) == COUNT


class TestWithdrawalListings:
    def test_seller_and_admin_listings_are_complete(self):
        repo = current_domain.repository_for(Withdrawal)
        for _ in range(COUNT):
            repo.add(Withdrawal.request(seller_id="shop-001", amount=10.0))

        assert len(repo.for_seller("shop-001")) == COUNT
        assert len(repo.all_withdrawals()) == COUNT


class TestProductListings:
    def test_shop_and_catalogue_listings_are_complete(self):
        repo = current_domain.repository_for(Product)
        for n in range(COUNT):
            repo.add(Product.create(shop_id="shop-001", name=f"Kurta {n}", price=250.0, stock=1))

        assert len(repo.for_shop("shop-001")) == COUNT
        assert len(repo.all_products()) == COUNT
