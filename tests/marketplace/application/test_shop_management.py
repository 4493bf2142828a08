"""Application tests for shop registration and payout method management."""

import json

import pytest
from protean import current_domain

from marketplace.errors import SellerNotFound, Unauthorized
from marketplace.shop.lookup import load_shop
from marketplace.shop.payout_method import RemovePayoutMethod, UpdatePayoutMethod
from marketplace.shop.registration import RegisterShop

PAYOUT = {"bankName": "SBI", "bankAccountNumber": "0001", "bankIfscCode": "SBIN0000001"}


def _register_shop():
    return current_domain.process(
        RegisterShop(name="Kirana Store", email="owner@kirana.example"),
        asynchronous=False,
    )


def _update(shop_id, actor_id=None, actor_role="seller", method=PAYOUT):
    current_domain.process(
        UpdatePayoutMethod(
            shop_id=shop_id,
            withdraw_method=json.dumps(method),
            actor_id=actor_id or shop_id,
            actor_role=actor_role,
        ),
        asynchronous=False,
    )


class TestRegisterShop:
    def test_registered_shop_can_be_loaded(self):
        shop_id = _register_shop()
        shop = load_shop(shop_id)
        assert shop.name == "Kirana Store"
        assert shop.email == "owner@kirana.example"
        assert shop.available_balance == 0.0

    def test_unknown_shop(self):
        with pytest.raises(SellerNotFound):
            load_shop("shop-ghost")


class TestPayoutMethod:
    def test_update(self):
        shop_id = _register_shop()
        _update(shop_id)
        assert load_shop(shop_id).payout_method == PAYOUT

    def test_replace(self):
        shop_id = _register_shop()
        _update(shop_id)
        _update(shop_id, method={"upiId": "kirana@upi"})
        assert load_shop(shop_id).payout_method == {"upiId": "kirana@upi"}

    def test_remove(self):
        shop_id = _register_shop()
        _update(shop_id)

        current_domain.process(
            RemovePayoutMethod(shop_id=shop_id, actor_id=shop_id, actor_role="seller"),
            asynchronous=False,
        )
        assert load_shop(shop_id).payout_method is None

    def test_other_seller_cannot_update(self):
        shop_id = _register_shop()
        with pytest.raises(Unauthorized):
            _update(shop_id, actor_id="shop-other")
        assert load_shop(shop_id).payout_method is None
