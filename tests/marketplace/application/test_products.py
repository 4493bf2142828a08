"""Application tests for product listing, removal and buyer reviews."""

import json

import pytest
from protean import current_domain
from protean.exceptions import ValidationError

from marketplace.errors import ProductNotFound, SellerNotFound, Unauthorized, UpstreamFailure
from marketplace.media import get_media_store
from marketplace.order.fulfillment import UpdateOrderStatus
from marketplace.order.order import Order
from marketplace.order.placement import PlaceOrders
from marketplace.product.creation import CreateProduct
from marketplace.product.product import Product
from marketplace.product.removal import DeleteProduct
from marketplace.product.review import SubmitReview
from marketplace.shop.registration import RegisterShop


def _register_shop():
    return current_domain.process(
        RegisterShop(name="Kirana Store", email="owner@kirana.example"),
        asynchronous=False,
    )


def _create_product(shop_id, images=("data:image/png;base64,AAAA",), actor_id=None, stock=10):
    return current_domain.process(
        CreateProduct(
            shop_id=shop_id,
            name="Cotton Kurta",
            price=250.0,
            stock=stock,
            images=json.dumps(list(images)),
            actor_id=actor_id or shop_id,
            actor_role="seller",
        ),
        asynchronous=False,
    )


def _delivered_order(shop_id, product_id):
    order_id = current_domain.process(
        PlaceOrders(
            cart=json.dumps([{"product_id": product_id, "shop_id": shop_id, "quantity": 1, "unit_price": 250.0}]),
            shipping_address=json.dumps(
                {"address1": "12 MG Road", "city": "Bengaluru", "country": "IN", "zip_code": "560001"}
            ),
            buyer=json.dumps({"id": "user-001"}),
            total_price=250.0,
            actor_id="user-001",
            actor_role="user",
        ),
        asynchronous=False,
    )[0]
    current_domain.process(
        UpdateOrderStatus(order_id=order_id, status="Delivered", actor_id=shop_id, actor_role="seller"),
        asynchronous=False,
    )
    return order_id


def _review(product_id, order_id, rating=4, actor_id="user-001"):
    current_domain.process(
        SubmitReview(
            product_id=product_id,
            order_id=order_id,
            rating=rating,
            comment="Good fit",
            user_name="Asha",
            actor_id=actor_id,
            actor_role="user",
        ),
        asynchronous=False,
    )


class TestCreateProduct:
    def test_images_are_uploaded(self):
        shop_id = _register_shop()
        product_id = _create_product(shop_id)

        product = current_domain.repository_for(Product).get(product_id)
        assert product.stock == 10
        assert len(product.image_list) == 1
        public_id = product.image_list[0]["public_id"]
        assert public_id.startswith("products/")
        assert public_id in get_media_store().assets

    def test_unregistered_shop(self):
        with pytest.raises(SellerNotFound):
            _create_product("shop-ghost")

    def test_media_failure_creates_nothing(self):
        shop_id = _register_shop()
        get_media_store().configure(should_succeed=False)

        with pytest.raises(UpstreamFailure):
            _create_product(shop_id)
        assert current_domain.repository_for(Product).for_shop(shop_id) == []

    def test_other_seller_cannot_list_for_the_shop(self):
        shop_id = _register_shop()
        with pytest.raises(Unauthorized):
            _create_product(shop_id, actor_id="shop-other")


class TestDeleteProduct:
    def test_delete_archives_and_destroys_images(self):
        shop_id = _register_shop()
        product_id = _create_product(shop_id)
        public_id = current_domain.repository_for(Product).get(product_id).image_list[0]["public_id"]

        current_domain.process(
            DeleteProduct(product_id=product_id, actor_id=shop_id, actor_role="seller"),
            asynchronous=False,
        )

        repo = current_domain.repository_for(Product)
        assert repo.get(product_id).is_active is False
        assert repo.for_shop(shop_id) == []
        assert public_id in get_media_store().destroyed

    def test_unknown_product(self):
        with pytest.raises(ProductNotFound):
            current_domain.process(
                DeleteProduct(product_id="missing", actor_id="admin-001", actor_role="admin"),
                asynchronous=False,
            )


class TestReviews:
    def test_review_rates_product_and_flags_line(self):
        shop_id = _register_shop()
        product_id = _create_product(shop_id)
        order_id = _delivered_order(shop_id, product_id)

        _review(product_id, order_id, rating=4)

        product = current_domain.repository_for(Product).get(product_id)
        assert product.ratings == 4.0
        assert product.reviews[0].user_name == "Asha"
        order = current_domain.repository_for(Order).get(order_id)
        assert order.line_for(product_id).is_reviewed is True

    def test_review_before_delivery_refused(self):
        shop_id = _register_shop()
        product_id = _create_product(shop_id)
        order_id = current_domain.process(
            PlaceOrders(
                cart=json.dumps([{"product_id": product_id, "shop_id": shop_id, "quantity": 1, "unit_price": 250.0}]),
                shipping_address=json.dumps(
                    {"address1": "12 MG Road", "city": "Bengaluru", "country": "IN", "zip_code": "560001"}
                ),
                buyer=json.dumps({"id": "user-001"}),
                total_price=250.0,
                actor_id="user-001",
                actor_role="user",
            ),
            asynchronous=False,
        )[0]

        with pytest.raises(ValidationError):
            _review(product_id, order_id)
        assert current_domain.repository_for(Product).get(product_id).ratings == 0.0

    def test_only_the_buyer_reviews(self):
        shop_id = _register_shop()
        product_id = _create_product(shop_id)
        order_id = _delivered_order(shop_id, product_id)

        with pytest.raises(Unauthorized):
            _review(product_id, order_id, actor_id="user-999")
