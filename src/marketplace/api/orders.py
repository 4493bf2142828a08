"""FastAPI routes for orders: checkout, fulfillment, refunds and invoices."""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from marketplace.api.actors import current_actor
from marketplace.api.schemas import (
    CreateOrderRequest,
    InvoiceOut,
    InvoiceResponse,
    MessageResponse,
    OrderOut,
    OrderResponse,
    OrdersResponse,
    RefundStatusRequest,
    UpdateOrderStatusRequest,
)
from marketplace.order.fulfillment import UpdateOrderStatus
from marketplace.order.invoice import build_invoice
from marketplace.order.order import Order
from marketplace.order.placement import PlaceOrders
from marketplace.order.refunds import ApproveRefund, RequestRefund
from marketplace.shared.actors import Actor, require_admin, require_buyer, require_shop_owner

order_router = APIRouter(prefix="/order", tags=["orders"])


def _order_response(order_id: str, message: str | None = None) -> OrderResponse:
    order = current_domain.repository_for(Order).get_order(order_id)
    return OrderResponse(order=OrderOut.from_order(order), message=message)


@order_router.post("/create-order", status_code=201, response_model=OrdersResponse)
async def create_order(body: CreateOrderRequest, actor: Actor = Depends(current_actor)) -> OrdersResponse:
    command = PlaceOrders(
        cart=json.dumps([line.model_dump() for line in body.cart]),
        shipping_address=json.dumps(body.shipping_address.model_dump()),
        buyer=json.dumps(body.user.model_dump()),
        total_price=body.total_price,
        payment_info=json.dumps(body.payment_info.to_domain()) if body.payment_info else None,
        actor_id=actor.id,
        actor_role=actor.role,
    )
    order_ids = current_domain.process(command, asynchronous=False)

    repo = current_domain.repository_for(Order)
    return OrdersResponse(orders=[OrderOut.from_order(repo.get_order(order_id)) for order_id in order_ids])


@order_router.put("/update-order-status/{order_id}", response_model=OrderResponse)
async def update_order_status(
    order_id: str, body: UpdateOrderStatusRequest, actor: Actor = Depends(current_actor)
) -> OrderResponse:
    command = UpdateOrderStatus(
        order_id=order_id,
        status=body.status,
        courier=body.courier,
        tracking_id=body.tracking_id,
        actor_id=actor.id,
        actor_role=actor.role,
    )
    current_domain.process(command, asynchronous=False)
    return _order_response(order_id)


@order_router.put("/order-refund/{order_id}", response_model=OrderResponse)
async def request_refund(order_id: str, body: RefundStatusRequest, actor: Actor = Depends(current_actor)) -> OrderResponse:
    command = RequestRefund(order_id=order_id, status=body.status, actor_id=actor.id, actor_role=actor.role)
    current_domain.process(command, asynchronous=False)
    return _order_response(order_id, message="Order Refund Request successfully!")


@order_router.put("/order-refund-success/{order_id}", response_model=MessageResponse)
async def approve_refund(
    order_id: str, body: RefundStatusRequest, actor: Actor = Depends(current_actor)
) -> MessageResponse:
    command = ApproveRefund(order_id=order_id, status=body.status, actor_id=actor.id, actor_role=actor.role)
    current_domain.process(command, asynchronous=False)
    return MessageResponse(message="Order Refund successful!")


@order_router.get("/download-invoice/{order_id}", response_model=InvoiceResponse)
async def download_invoice(order_id: str, actor: Actor = Depends(current_actor)) -> InvoiceResponse:
    order = current_domain.repository_for(Order).get_order(order_id)
    return InvoiceResponse(invoice=InvoiceOut.model_validate(build_invoice(order, actor)))


@order_router.get("/get-all-orders/{user_id}", response_model=OrdersResponse)
async def buyer_orders(user_id: str, actor: Actor = Depends(current_actor)) -> OrdersResponse:
    require_buyer(actor, user_id)
    orders = current_domain.repository_for(Order).for_buyer(user_id)
    return OrdersResponse(orders=[OrderOut.from_order(order) for order in orders])


@order_router.get("/get-seller-all-orders/{shop_id}", response_model=OrdersResponse)
async def shop_orders(shop_id: str, actor: Actor = Depends(current_actor)) -> OrdersResponse:
    require_shop_owner(actor, shop_id)
    orders = current_domain.repository_for(Order).for_shop(shop_id)
    return OrdersResponse(orders=[OrderOut.from_order(order) for order in orders])


@order_router.get("/admin-all-orders", response_model=OrdersResponse)
async def all_orders(actor: Actor = Depends(current_actor)) -> OrdersResponse:
    require_admin(actor)
    orders = current_domain.repository_for(Order).all_orders()
    return OrdersResponse(orders=[OrderOut.from_order(order) for order in orders])
