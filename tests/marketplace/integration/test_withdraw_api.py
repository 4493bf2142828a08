"""Integration tests for the withdrawal endpoints via TestClient."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean import current_domain

from marketplace.api.errors import register_error_handlers
from marketplace.api.shops import shop_router
from marketplace.api.withdrawals import withdraw_router
from marketplace.shop.lookup import load_shop
from marketplace.shop.shop import Shop

ADMIN = {"X-Actor-Id": "admin-001", "X-Actor-Role": "admin"}


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(withdraw_router)
    app.include_router(shop_router)
    register_error_handlers(app)
    return TestClient(app)


@pytest.fixture()
def shop_id():
    shop = Shop.register(name="Kirana Store", email="owner@kirana.example")
    shop.credit_proceeds(order_id="ord-001", order_total=1000.0, service_charge=0.0, amount=1000.0)
    current_domain.repository_for(Shop).add(shop)
    return str(shop.id)


@pytest.fixture()
def seller(shop_id):
    return {"X-Actor-Id": shop_id, "X-Actor-Role": "seller"}


class TestCreateWithdrawRequest:
    def test_create(self, client, shop_id, seller):
        client.put(
            "/shop/update-payment-methods",
            json={"withdrawMethod": {"bankName": "SBI", "bankAccountNumber": "0001"}},
            headers=seller,
        )

        response = client.post("/withdraw/create-withdraw-request", json={"amount": 1000}, headers=seller)
        assert response.status_code == 201

        withdraw = response.json()["withdraw"]
        assert withdraw["grossAmount"] == 1000.0
        assert withdraw["serviceCharge"] == 180.0
        assert withdraw["amount"] == 820.0
        assert withdraw["status"] == "Processing"
        assert withdraw["payoutDestination"]["bankName"] == "SBI"
        assert load_shop(shop_id).available_balance == 0.0

    def test_insufficient_balance(self, client, shop_id, seller):
        response = client.post("/withdraw/create-withdraw-request", json={"amount": 1500}, headers=seller)
        assert response.status_code == 400
        assert response.json()["success"] is False
        assert "Insufficient balance" in response.json()["message"]
        assert load_shop(shop_id).available_balance == 1000.0

    def test_non_numeric_amount(self, client, seller):
        response = client.post("/withdraw/create-withdraw-request", json={"amount": "lots"}, headers=seller)
        assert response.status_code == 400

    def test_unknown_seller(self, client):
        response = client.post(
            "/withdraw/create-withdraw-request",
            json={"amount": 10},
            headers={"X-Actor-Id": "shop-ghost", "X-Actor-Role": "seller"},
        )
        assert response.status_code == 404


class TestResolveWithdrawRequest:
    def _request(self, client, seller, amount=1000):
        return client.post("/withdraw/create-withdraw-request", json={"amount": amount}, headers=seller).json()[
            "withdraw"
        ]["id"]

    def test_admin_approves(self, client, shop_id, seller):
        withdrawal_id = self._request(client, seller)

        response = client.put(
            f"/withdraw/update-withdraw-request/{withdrawal_id}",
            json={"sellerId": shop_id},
            headers=ADMIN,
        )
        assert response.status_code == 200
        data = response.json()
        assert data["withdraw"]["status"] == "Succeeded"
        assert data["finalAmount"] == 820.0
        assert data["serviceCharge"] == 180.0

        shop = client.get(f"/shop/get-shop-info/{shop_id}").json()["shop"]
        assert shop["availableBalance"] == 0.0
        assert len(shop["transactions"]) == 1
        assert shop["transactions"][0]["finalAmount"] == 820.0

    def test_admin_rejects(self, client, shop_id, seller):
        withdrawal_id = self._request(client, seller, amount=400)

        response = client.put(
            f"/withdraw/update-withdraw-request/{withdrawal_id}",
            json={"sellerId": shop_id, "status": "Rejected"},
            headers=ADMIN,
        )
        assert response.status_code == 200
        assert load_shop(shop_id).available_balance == 1000.0

    def test_seller_cannot_resolve(self, client, shop_id, seller):
        withdrawal_id = self._request(client, seller)
        response = client.put(
            f"/withdraw/update-withdraw-request/{withdrawal_id}",
            json={"sellerId": shop_id},
            headers=seller,
        )
        assert response.status_code == 403

    def test_unknown_withdrawal(self, client, shop_id):
        response = client.put("/withdraw/update-withdraw-request/missing", json={"sellerId": shop_id}, headers=ADMIN)
        assert response.status_code == 404


class TestWithdrawListings:
    def test_listings(self, client, shop_id, seller):
        client.post("/withdraw/create-withdraw-request", json={"amount": 100}, headers=seller)
        client.post("/withdraw/create-withdraw-request", json={"amount": 200}, headers=seller)

        response = client.get("/withdraw/get-all-withdraw-request", headers=ADMIN)
        assert response.status_code == 200
        assert len(response.json()["withdraws"]) == 2

        response = client.get(f"/withdraw/get-seller-withdraw-request/{shop_id}", headers=seller)
        assert len(response.json()["withdraws"]) == 2

        assert client.get("/withdraw/get-all-withdraw-request", headers=seller).status_code == 403
