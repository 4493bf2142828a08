"""Integration tests for the event-sourced shop ledger: event store
round-trips and replay.
"""

import json

from protean import current_domain

from marketplace.order.fulfillment import UpdateOrderStatus
from marketplace.order.placement import PlaceOrders
from marketplace.shop.registration import RegisterShop
from marketplace.shop.shop import Shop
from marketplace.withdrawal.request import RequestWithdrawal
from marketplace.withdrawal.resolution import ResolveWithdrawal


def _register_shop():
    return current_domain.process(
        RegisterShop(name="Kirana Store", email="owner@kirana.example"),
        asynchronous=False,
    )


def _deliver(shop_id, amount):
    order_id = current_domain.process(
        PlaceOrders(
            cart=json.dumps([{"product_id": "p1", "shop_id": shop_id, "quantity": 1, "unit_price": amount}]),
            shipping_address=json.dumps(
                {"address1": "12 MG Road", "city": "Bengaluru", "country": "IN", "zip_code": "560001"}
            ),
            buyer=json.dumps({"id": "user-001"}),
            total_price=amount,
            actor_id="user-001",
            actor_role="user",
        ),
        asynchronous=False,
    )[0]
    current_domain.process(
        UpdateOrderStatus(order_id=order_id, status="Delivered", actor_id=shop_id, actor_role="seller"),
        asynchronous=False,
    )


class TestEventStorePersistence:
    def test_registration_stored(self):
        shop_id = _register_shop()

        messages = current_domain.event_store.store.read(f"marketplace::shop-{shop_id}")
        assert len(messages) == 1
        assert messages[0].metadata.headers.type == "Marketplace.ShopRegistered.v1"

    def test_ledger_movements_accumulate(self):
        shop_id = _register_shop()
        _deliver(shop_id, 1000.0)
        withdrawal_id = current_domain.process(
            RequestWithdrawal(amount=500.0, actor_id=shop_id, actor_role="seller"),
            asynchronous=False,
        )
        current_domain.process(
            ResolveWithdrawal(
                withdrawal_id=withdrawal_id,
                seller_id=shop_id,
                status="Rejected",
                actor_id="admin-001",
                actor_role="admin",
            ),
            asynchronous=False,
        )

        messages = current_domain.event_store.store.read(f"marketplace::shop-{shop_id}")
        types = [m.metadata.headers.type for m in messages]
        assert types == [
            "Marketplace.ShopRegistered.v1",
            "Marketplace.ProceedsCredited.v1",
            "Marketplace.WithdrawalReserved.v1",
            "Marketplace.WithdrawalReleased.v1",
            "Marketplace.TransactionRecorded.v1",
        ]


class TestReplay:
    def test_replayed_balance_matches(self):
        shop_id = _register_shop()
        _deliver(shop_id, 1000.0)
        _deliver(shop_id, 333.33)
        current_domain.process(
            RequestWithdrawal(amount=250.0, actor_id=shop_id, actor_role="seller"),
            asynchronous=False,
        )

        shop = current_domain.repository_for(Shop).get(shop_id)
        # 900.00 + 300.00 - 250.00
        assert shop.available_balance == 950.0
        assert shop.name == "Kirana Store"

    def test_replayed_transactions_match(self):
        shop_id = _register_shop()
        _deliver(shop_id, 1000.0)
        withdrawal_id = current_domain.process(
            RequestWithdrawal(amount=900.0, actor_id=shop_id, actor_role="seller"),
            asynchronous=False,
        )
        current_domain.process(
            ResolveWithdrawal(withdrawal_id=withdrawal_id, seller_id=shop_id, actor_id="admin-001", actor_role="admin"),
            asynchronous=False,
        )

        shop = current_domain.repository_for(Shop).get(shop_id)
        assert shop.available_balance == 0.0
        assert len(shop.transactions) == 1
        assert shop.transactions[0].final_amount == 738.0

