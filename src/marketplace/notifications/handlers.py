"""Seller notifications for withdrawal events.

Runs after the withdrawal is committed. Mail delivery is best-effort: a
failed send is logged and never undoes the withdrawal.
"""

import structlog
from protean.utils.mixins import handle

from marketplace.domain import marketplace
from marketplace.errors import SellerNotFound, UpstreamFailure
from marketplace.notifications import get_mailer
from marketplace.notifications.templates import PaymentConfirmationTemplate, WithdrawRequestTemplate
from marketplace.shop.lookup import load_shop
from marketplace.withdrawal.events import WithdrawalRequested, WithdrawalResolved
from marketplace.withdrawal.withdrawal import Withdrawal

logger = structlog.get_logger(__name__)


def _notify_seller(seller_id: str, template, context: dict) -> None:
    try:
        shop = load_shop(seller_id)
        rendered = template.render({"name": shop.name, **context})
        message_id = get_mailer().send_mail(shop.email, rendered["subject"], rendered["body"])
    except (SellerNotFound, UpstreamFailure) as exc:
        logger.warning("seller_notification_failed", seller_id=seller_id, error=exc.message)
        return

    logger.info("seller_notified", seller_id=seller_id, subject=rendered["subject"], message_id=message_id)


@marketplace.event_handler(part_of=Withdrawal)
class WithdrawalNotifications:
    @handle(WithdrawalRequested)
    def on_withdrawal_requested(self, event: WithdrawalRequested) -> None:
        _notify_seller(
            str(event.seller_id),
            WithdrawRequestTemplate,
            {
                "gross_amount": event.gross_amount,
                "service_charge": event.service_charge,
                "amount": event.amount,
            },
        )

    @handle(WithdrawalResolved)
    def on_withdrawal_resolved(self, event: WithdrawalResolved) -> None:
        _notify_seller(
            str(event.seller_id),
            PaymentConfirmationTemplate,
            {
                "status": event.status,
                "gross_amount": event.gross_amount,
                "amount": event.amount,
            },
        )
