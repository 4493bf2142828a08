"""Application tests for seller mail sent on withdrawal events."""

from protean import current_domain

from marketplace.notifications import get_mailer
from marketplace.shop.lookup import load_shop
from marketplace.shop.shop import Shop
from marketplace.withdrawal.request import RequestWithdrawal
from marketplace.withdrawal.resolution import ResolveWithdrawal


def _shop_with_balance(balance=1000.0):
    shop = Shop.register(name="Kirana Store", email="owner@kirana.example")
    shop.credit_proceeds(order_id="ord-001", order_total=balance, service_charge=0.0, amount=balance)
    current_domain.repository_for(Shop).add(shop)
    return str(shop.id)


def _request(shop_id, amount):
    return current_domain.process(
        RequestWithdrawal(amount=amount, actor_id=shop_id, actor_role="seller"),
        asynchronous=False,
    )


def _resolve(withdrawal_id, shop_id, status=None):
    current_domain.process(
        ResolveWithdrawal(
            withdrawal_id=withdrawal_id,
            seller_id=shop_id,
            status=status,
            actor_id="admin-001",
            actor_role="admin",
        ),
        asynchronous=False,
    )


class TestWithdrawRequestMail:
    def test_seller_is_told_the_net_amount(self):
        shop_id = _shop_with_balance()
        _request(shop_id, 1000.0)

        sent = get_mailer().outbox
        assert len(sent) == 1
        assert sent[0].to == "owner@kirana.example"
        assert sent[0].subject == "Withdraw Request"
        assert "₹820.00" in sent[0].body
        assert "₹180.00" in sent[0].body


class TestResolutionMail:
    def test_payment_confirmation(self):
        shop_id = _shop_with_balance()
        withdrawal_id = _request(shop_id, 1000.0)
        _resolve(withdrawal_id, shop_id)

        assert get_mailer().outbox[-1].subject == "Payment Confirmation"

    def test_rejection_notice(self):
        shop_id = _shop_with_balance()
        withdrawal_id = _request(shop_id, 1000.0)
        _resolve(withdrawal_id, shop_id, status="Rejected")

        assert get_mailer().outbox[-1].subject == "Withdraw Rejected"


class TestMailFailure:
    def test_failed_mail_does_not_undo_the_withdrawal(self):
        shop_id = _shop_with_balance()
        get_mailer().fail_with("Mail server unavailable")

        _request(shop_id, 400.0)

        assert get_mailer().outbox == []
        assert load_shop(shop_id).available_balance == 600.0
