"""Repository for the Withdrawal aggregate."""

from protean.exceptions import ObjectNotFoundError

from marketplace.domain import marketplace
from marketplace.errors import WithdrawNotFound
from marketplace.withdrawal.withdrawal import Withdrawal


@marketplace.repository(part_of=Withdrawal)
class WithdrawalRepository:
    def get_withdrawal(self, withdrawal_id) -> Withdrawal:
        try:
            return self.get(withdrawal_id)
        except ObjectNotFoundError:
            raise WithdrawNotFound(f"Withdraw request {withdrawal_id} not found") from None

    def for_seller(self, seller_id) -> list[Withdrawal]:
        return self._dao.query.filter(seller_id=str(seller_id)).order_by("-created_at").limit(None).all().items

    def all_withdrawals(self) -> list[Withdrawal]:
        return self._dao.query.order_by("-created_at").limit(None).all().items
