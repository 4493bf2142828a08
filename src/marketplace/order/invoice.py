"""Invoice summary of an order, for its buyer or its shop."""

from marketplace.order.order import Order
from marketplace.shared.actors import Actor, require_party


def build_invoice(order: Order, actor: Actor) -> dict:
    require_party(actor, order.buyer_id, order.shop_id)

    address = order.shipping_address
    payment = order.payment_info
    return {
        "invoice_number": f"INV-{str(order.id)[:8].upper()}",
        "order_id": str(order.id),
        "shop_id": str(order.shop_id),
        "buyer": {
            "id": str(order.buyer_id),
            "name": order.buyer.name if order.buyer else None,
            "email": order.buyer.email if order.buyer else None,
        },
        "shipping_address": {
            "address1": address.address1,
            "address2": address.address2,
            "city": address.city,
            "country": address.country,
            "zip_code": address.zip_code,
        }
        if address
        else None,
        "lines": [
            {
                "product_id": str(line.product_id),
                "quantity": line.quantity,
                "unit_price": line.unit_price,
                "line_total": round(line.unit_price * line.quantity, 2),
                "selected_size": line.selected_size,
                "selected_color": line.selected_color,
            }
            for line in order.cart
        ],
        "subtotal": order.subtotal,
        "total_price": order.total_price,
        "payment_status": payment.status if payment else None,
        "status": order.status,
        "created_at": order.created_at.isoformat() if order.created_at else None,
        "delivered_at": order.delivered_at.isoformat() if order.delivered_at else None,
    }
