"""Shared BDD fixtures and step definitions for the marketplace."""

import json

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

from marketplace.errors import InsufficientBalance
from marketplace.order.fulfillment import UpdateOrderStatus
from marketplace.order.order import Order
from marketplace.order.placement import PlaceOrders
from marketplace.shop.lookup import load_shop
from marketplace.shop.registration import RegisterShop
from marketplace.withdrawal.request import RequestWithdrawal


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def buyer_id():
    return "user-001"


@pytest.fixture()
def error():
    """Container for the failure raised by a When step."""
    return {"exc": None}


def _place_order(shop_id, buyer_id, amount):
    return current_domain.process(
        PlaceOrders(
            cart=json.dumps([{"product_id": "prod-001", "shop_id": shop_id, "quantity": 1, "unit_price": amount}]),
            shipping_address=json.dumps(
                {"address1": "12 MG Road", "city": "Bengaluru", "country": "IN", "zip_code": "560001"}
            ),
            buyer=json.dumps({"id": buyer_id}),
            total_price=amount,
            actor_id=buyer_id,
            actor_role="user",
        ),
        asynchronous=False,
    )[0]


def _register_shop():
    return current_domain.process(
        RegisterShop(name="Kirana Store", email="owner@kirana.example"),
        asynchronous=False,
    )


def _deliver_order(order_id, shop_id):
    current_domain.process(
        UpdateOrderStatus(order_id=order_id, status="Delivered", actor_id=shop_id, actor_role="seller"),
        asynchronous=False,
    )


@pytest.fixture()
def deliver_to_shop(buyer_id):
    """Place a one-line order of ``amount`` with the shop and deliver it."""

    def _deliver(shop_id, amount):
        _deliver_order(_place_order(shop_id, buyer_id, amount), shop_id)

    return _deliver


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a registered shop", target_fixture="shop_id")
def registered_shop():
    return _register_shop()


@given(parsers.cfparse("a registered shop with a balance of {amount:f}"), target_fixture="shop_id")
def shop_with_balance(deliver_to_shop, amount):
    shop_id = _register_shop()
    # Delivery credits the order total less the 10% platform charge
    deliver_to_shop(shop_id, round(amount / 0.9, 2))
    return shop_id


@given(parsers.cfparse("the seller requested a withdrawal of {amount:f}"), target_fixture="withdrawal_id")
def requested_withdrawal(shop_id, amount):
    return current_domain.process(
        RequestWithdrawal(amount=amount, actor_id=shop_id, actor_role="seller"),
        asynchronous=False,
    )


@given("a new order", target_fixture="order")
def new_order(buyer_id):
    order = Order.create(
        shop_id="shop-001",
        buyer_id=buyer_id,
        lines=[{"product_id": "prod-001", "quantity": 1, "unit_price": 500.0, "shop_id": "shop-001"}],
        shipping_address={"address1": "12 MG Road", "city": "Bengaluru", "country": "IN", "zip_code": "560001"},
        total_price=500.0,
    )
    order._events.clear()
    return order


@given("the order was delivered", target_fixture="order")
def delivered_order(order):
    order.deliver()
    order._events.clear()
    return order


@given("the refund was approved", target_fixture="order")
def refunded_order(order):
    order.request_refund()
    order.approve_refund()
    order._events.clear()
    return order


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the shop balance is {amount:f}"))
def shop_balance_is(shop_id, amount):
    assert load_shop(shop_id).available_balance == amount


@then(parsers.cfparse("the shop has {count:d} transaction"))
def shop_transaction_count(shop_id, count):
    assert len(load_shop(shop_id).transactions or []) == count


@then("the withdrawal fails with insufficient balance")
def withdrawal_insufficient(error):
    assert isinstance(error["exc"], InsufficientBalance)


@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(order, status):
    assert order.status == status


@then("the order action fails with a validation error")
def order_action_fails(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then(parsers.cfparse("a {event_type} order event is raised"))
def order_event_raised(order, event_type):
    assert any(
        type(e).__name__ == event_type for e in order._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in order._events]}"
