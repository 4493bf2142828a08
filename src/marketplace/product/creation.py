"""Product creation: command and handler."""

import json

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.media import get_media_store
from marketplace.product.product import Product
from marketplace.shared.actors import Actor, require_shop_owner
from marketplace.shop.lookup import load_shop

PRODUCT_FOLDER = "products"


@marketplace.command(part_of="Product")
class CreateProduct:
    shop_id: Identifier(required=True)
    name: String(required=True, max_length=255)
    description: Text()
    category: String(max_length=100)
    price: Float(required=True, min_value=0.0)
    stock: Integer(default=0, min_value=0)
    images: Text()  # JSON: list of image payloads (data URIs or URLs)
    actor_id: Identifier(required=True)
    actor_role: String(required=True, max_length=20)


@marketplace.command_handler(part_of=Product)
class CreateProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        require_shop_owner(Actor.from_command(command), command.shop_id)
        load_shop(command.shop_id)

        payloads = json.loads(command.images) if command.images else []
        if isinstance(payloads, str):
            payloads = [payloads]

        store = get_media_store()
        images = [store.upload(payload, folder=PRODUCT_FOLDER).to_dict() for payload in payloads]

        product = Product.create(
            shop_id=command.shop_id,
            name=command.name,
            description=command.description,
            category=command.category,
            price=command.price,
            stock=command.stock or 0,
            images=images,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)
