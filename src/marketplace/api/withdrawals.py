"""FastAPI routes for seller withdrawals."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from marketplace.api.actors import current_actor
from marketplace.api.schemas import (
    CreateWithdrawRequest,
    ResolvedWithdrawResponse,
    ResolveWithdrawRequest,
    WithdrawOut,
    WithdrawResponse,
    WithdrawsResponse,
)
from marketplace.shared.actors import Actor, require_admin, require_shop_owner
from marketplace.withdrawal.request import RequestWithdrawal
from marketplace.withdrawal.resolution import ResolveWithdrawal
from marketplace.withdrawal.withdrawal import Withdrawal

withdraw_router = APIRouter(prefix="/withdraw", tags=["withdrawals"])


@withdraw_router.post("/create-withdraw-request", status_code=201, response_model=WithdrawResponse)
async def create_withdraw_request(
    body: CreateWithdrawRequest, actor: Actor = Depends(current_actor)
) -> WithdrawResponse:
    command = RequestWithdrawal(
        amount=body.amount,
        seller_id=body.seller_id,
        actor_id=actor.id,
        actor_role=actor.role,
    )
    withdrawal_id = current_domain.process(command, asynchronous=False)

    withdrawal = current_domain.repository_for(Withdrawal).get_withdrawal(withdrawal_id)
    return WithdrawResponse(withdraw=WithdrawOut.from_withdrawal(withdrawal))


@withdraw_router.put("/update-withdraw-request/{withdrawal_id}", response_model=ResolvedWithdrawResponse)
async def update_withdraw_request(
    withdrawal_id: str, body: ResolveWithdrawRequest, actor: Actor = Depends(current_actor)
) -> ResolvedWithdrawResponse:
    command = ResolveWithdrawal(
        withdrawal_id=withdrawal_id,
        seller_id=body.seller_id,
        status=body.status,
        actor_id=actor.id,
        actor_role=actor.role,
    )
    current_domain.process(command, asynchronous=False)

    withdrawal = current_domain.repository_for(Withdrawal).get_withdrawal(withdrawal_id)
    return ResolvedWithdrawResponse(
        withdraw=WithdrawOut.from_withdrawal(withdrawal),
        final_amount=withdrawal.amount,
        service_charge=withdrawal.service_charge,
    )


@withdraw_router.get("/get-all-withdraw-request", response_model=WithdrawsResponse)
async def all_withdraw_requests(actor: Actor = Depends(current_actor)) -> WithdrawsResponse:
    require_admin(actor)
    withdrawals = current_domain.repository_for(Withdrawal).all_withdrawals()
    return WithdrawsResponse(withdraws=[WithdrawOut.from_withdrawal(w) for w in withdrawals])


@withdraw_router.get("/get-seller-withdraw-request/{seller_id}", response_model=WithdrawsResponse)
async def seller_withdraw_requests(seller_id: str, actor: Actor = Depends(current_actor)) -> WithdrawsResponse:
    require_shop_owner(actor, seller_id)
    withdrawals = current_domain.repository_for(Withdrawal).for_seller(seller_id)
    return WithdrawsResponse(withdraws=[WithdrawOut.from_withdrawal(w) for w in withdrawals])
