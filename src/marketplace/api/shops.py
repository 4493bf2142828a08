"""FastAPI routes for shops and their payout method."""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from marketplace.api.actors import current_actor
from marketplace.api.schemas import CreateShopRequest, ShopOut, ShopResponse, UpdatePayoutMethodRequest
from marketplace.shared.actors import Actor
from marketplace.shop.lookup import load_shop
from marketplace.shop.payout_method import RemovePayoutMethod, UpdatePayoutMethod
from marketplace.shop.registration import RegisterShop

shop_router = APIRouter(prefix="/shop", tags=["shops"])


@shop_router.post("/create-shop", status_code=201, response_model=ShopResponse)
async def create_shop(body: CreateShopRequest) -> ShopResponse:
    shop_id = current_domain.process(RegisterShop(name=body.name, email=body.email), asynchronous=False)
    return ShopResponse(shop=ShopOut.from_shop(load_shop(shop_id)))


@shop_router.get("/get-shop-info/{shop_id}", response_model=ShopResponse)
async def get_shop_info(shop_id: str) -> ShopResponse:
    return ShopResponse(shop=ShopOut.from_shop(load_shop(shop_id)))


@shop_router.put("/update-payment-methods", response_model=ShopResponse)
async def update_payment_methods(
    body: UpdatePayoutMethodRequest, actor: Actor = Depends(current_actor)
) -> ShopResponse:
    command = UpdatePayoutMethod(
        shop_id=actor.id,
        withdraw_method=json.dumps(body.withdraw_method),
        actor_id=actor.id,
        actor_role=actor.role,
    )
    current_domain.process(command, asynchronous=False)
    return ShopResponse(shop=ShopOut.from_shop(load_shop(actor.id)))


@shop_router.delete("/delete-withdraw-method", response_model=ShopResponse)
async def delete_withdraw_method(actor: Actor = Depends(current_actor)) -> ShopResponse:
    command = RemovePayoutMethod(shop_id=actor.id, actor_id=actor.id, actor_role=actor.role)
    current_domain.process(command, asynchronous=False)
    return ShopResponse(shop=ShopOut.from_shop(load_shop(actor.id)))
