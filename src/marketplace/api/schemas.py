"""Pydantic request/response schemas for the marketplace API.

These are external contracts, separate from the internal Protean commands.
Field names travel as camelCase on the wire; snake_case is accepted on
input as well.
"""

import json
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class ShippingAddressSchema(CamelModel):
    address1: str
    address2: str | None = None
    city: str
    country: str
    zip_code: str


class BuyerSchema(CamelModel):
    id: str
    name: str | None = None
    email: str | None = None


class PaymentInfoSchema(CamelModel):
    id: str | None = None
    status: str | None = None
    type: str | None = None

    def to_domain(self) -> dict:
        return {"payment_id": self.id, "status": self.status, "payment_type": self.type}


class CartLineSchema(CamelModel):
    product_id: str
    quantity: int
    unit_price: float
    shop_id: str | None = None
    selected_size: str | None = None
    selected_color: str | None = None


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class CreateOrderRequest(CamelModel):
    cart: list[CartLineSchema]
    shipping_address: ShippingAddressSchema
    user: BuyerSchema
    total_price: float
    payment_info: PaymentInfoSchema | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "cart": [
                        {"productId": "prod-001", "quantity": 2, "unitPrice": 250.0, "shopId": "shop-001"},
                        {"productId": "prod-002", "quantity": 1, "unitPrice": 500.0, "shopId": "shop-002"},
                    ],
                    "shippingAddress": {
                        "address1": "12 MG Road",
                        "city": "Bengaluru",
                        "country": "IN",
                        "zipCode": "560001",
                    },
                    "user": {"id": "user-001", "name": "Asha", "email": "asha@example.com"},
                    "totalPrice": 1000.0,
                    "paymentInfo": {"id": "pi_123", "status": "succeeded", "type": "card"},
                }
            ]
        },
    )


class UpdateOrderStatusRequest(CamelModel):
    status: str
    tracking_id: str | None = None
    courier: str | None = None


class RefundStatusRequest(CamelModel):
    status: str


class CreateWithdrawRequest(CamelModel):
    amount: float
    seller_id: str | None = None


class ResolveWithdrawRequest(CamelModel):
    seller_id: str
    status: str | None = None


class CreateShopRequest(CamelModel):
    name: str
    email: str


class UpdatePayoutMethodRequest(CamelModel):
    withdraw_method: dict


class CreateProductRequest(CamelModel):
    shop_id: str
    name: str
    description: str | None = None
    category: str | None = None
    price: float = Field(ge=0)
    stock: int = Field(ge=0, default=0)
    images: list[str] | str | None = None


class ReviewRequest(CamelModel):
    product_id: str
    order_id: str
    rating: int = Field(ge=1, le=5)
    comment: str | None = None
    user_name: str | None = None


class PaymentProcessRequest(CamelModel):
    amount: float = Field(gt=0)
    currency: str = "INR"


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class MessageResponse(CamelModel):
    success: bool = True
    message: str


class CartLineOut(CamelModel):
    product_id: str
    quantity: int
    unit_price: float
    shop_id: str
    selected_size: str | None = None
    selected_color: str | None = None
    is_reviewed: bool = False
    tracking_id: str | None = None


class OrderOut(CamelModel):
    id: str
    shop_id: str
    user: BuyerSchema
    cart: list[CartLineOut]
    shipping_address: ShippingAddressSchema | None = None
    total_price: float
    subtotal: float
    payment_info: PaymentInfoSchema | None = None
    status: str
    tracking_id: str | None = None
    courier: str | None = None
    paid_at: datetime | None = None
    delivered_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_order(cls, order) -> "OrderOut":
        address = order.shipping_address
        payment = order.payment_info
        return cls(
            id=str(order.id),
            shop_id=str(order.shop_id),
            user=BuyerSchema(
                id=str(order.buyer_id),
                name=order.buyer.name if order.buyer else None,
                email=order.buyer.email if order.buyer else None,
            ),
            cart=[
                CartLineOut(
                    product_id=str(line.product_id),
                    quantity=line.quantity,
                    unit_price=line.unit_price,
                    shop_id=str(line.shop_id),
                    selected_size=line.selected_size,
                    selected_color=line.selected_color,
                    is_reviewed=bool(line.is_reviewed),
                    tracking_id=line.tracking_id,
                )
                for line in order.cart
            ],
            shipping_address=ShippingAddressSchema(
                address1=address.address1,
                address2=address.address2,
                city=address.city,
                country=address.country,
                zip_code=address.zip_code,
            )
            if address
            else None,
            total_price=order.total_price,
            subtotal=order.subtotal,
            payment_info=PaymentInfoSchema(id=payment.payment_id, status=payment.status, type=payment.payment_type)
            if payment
            else None,
            status=order.status,
            tracking_id=order.tracking_id,
            courier=order.courier,
            paid_at=order.paid_at,
            delivered_at=order.delivered_at,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class OrdersResponse(CamelModel):
    success: bool = True
    orders: list[OrderOut]


class OrderResponse(CamelModel):
    success: bool = True
    order: OrderOut
    message: str | None = None


class InvoiceLineOut(CamelModel):
    product_id: str
    quantity: int
    unit_price: float
    line_total: float
    selected_size: str | None = None
    selected_color: str | None = None


class InvoiceOut(CamelModel):
    invoice_number: str
    order_id: str
    shop_id: str
    buyer: BuyerSchema
    shipping_address: ShippingAddressSchema | None = None
    lines: list[InvoiceLineOut]
    subtotal: float
    total_price: float
    payment_status: str | None = None
    status: str
    created_at: str | None = None
    delivered_at: str | None = None


class InvoiceResponse(CamelModel):
    success: bool = True
    invoice: InvoiceOut


class WithdrawOut(CamelModel):
    id: str
    seller_id: str
    gross_amount: float
    service_charge: float
    amount: float
    payout_destination: dict | None = None
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    resolved_at: datetime | None = None

    @classmethod
    def from_withdrawal(cls, withdrawal) -> "WithdrawOut":
        return cls(
            id=str(withdrawal.id),
            seller_id=str(withdrawal.seller_id),
            gross_amount=withdrawal.gross_amount,
            service_charge=withdrawal.service_charge,
            amount=withdrawal.amount,
            payout_destination=json.loads(withdrawal.payout_destination) if withdrawal.payout_destination else None,
            status=withdrawal.status,
            created_at=withdrawal.created_at,
            updated_at=withdrawal.updated_at,
            resolved_at=withdrawal.resolved_at,
        )


class WithdrawResponse(CamelModel):
    success: bool = True
    withdraw: WithdrawOut


class ResolvedWithdrawResponse(CamelModel):
    success: bool = True
    withdraw: WithdrawOut
    final_amount: float
    service_charge: float


class WithdrawsResponse(CamelModel):
    success: bool = True
    withdraws: list[WithdrawOut]


class TransactionOut(CamelModel):
    id: str
    withdrawal_id: str
    amount: float
    service_charge: float
    final_amount: float
    payout_destination: dict | None = None
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ShopOut(CamelModel):
    id: str
    name: str
    email: str
    withdraw_method: dict | None = None
    available_balance: float
    transactions: list[TransactionOut] = []
    created_at: datetime | None = None

    @classmethod
    def from_shop(cls, shop) -> "ShopOut":
        return cls(
            id=str(shop.id),
            name=shop.name,
            email=shop.email,
            withdraw_method=shop.payout_method,
            available_balance=shop.available_balance or 0.0,
            transactions=[
                TransactionOut(
                    id=str(t.id),
                    withdrawal_id=str(t.withdrawal_id),
                    amount=t.amount,
                    service_charge=t.service_charge,
                    final_amount=t.final_amount,
                    payout_destination=json.loads(t.payout_destination) if t.payout_destination else None,
                    status=t.status,
                    created_at=t.created_at,
                    updated_at=t.updated_at,
                )
                for t in (shop.transactions or [])
            ],
            created_at=shop.created_at,
        )


class ShopResponse(CamelModel):
    success: bool = True
    shop: ShopOut


class ImageOut(CamelModel):
    public_id: str
    url: str


class ProductOut(CamelModel):
    id: str
    shop_id: str
    name: str
    description: str | None = None
    category: str | None = None
    price: float
    stock: int
    sold_out: int
    images: list[ImageOut] = []
    ratings: float = 0.0
    is_active: bool = True
    created_at: datetime | None = None

    @classmethod
    def from_product(cls, product) -> "ProductOut":
        return cls(
            id=str(product.id),
            shop_id=str(product.shop_id),
            name=product.name,
            description=product.description,
            category=product.category,
            price=product.price,
            stock=product.stock or 0,
            sold_out=product.sold_out or 0,
            images=[ImageOut(**image) for image in product.image_list],
            ratings=product.ratings or 0.0,
            is_active=bool(product.is_active),
            created_at=product.created_at,
        )


class ProductResponse(CamelModel):
    success: bool = True
    product: ProductOut


class ProductsResponse(CamelModel):
    success: bool = True
    products: list[ProductOut]


class PaymentIntentResponse(CamelModel):
    success: bool = True
    intent_id: str
    client_secret: str
    amount: int
    currency: str
