"""Product removal: archives the product and destroys its stored images."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.media import get_media_store
from marketplace.product.product import Product
from marketplace.shared.actors import Actor, require_shop_owner


@marketplace.command(part_of="Product")
class DeleteProduct:
    product_id: Identifier(required=True)
    actor_id: Identifier(required=True)
    actor_role: String(required=True, max_length=20)


@marketplace.command_handler(part_of=Product)
class DeleteProductHandler:
    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_product(command.product_id)
        require_shop_owner(Actor.from_command(command), product.shop_id)

        store = get_media_store()
        for image in product.image_list:
            store.destroy(image["public_id"])

        product.archive()
        repo.add(product)
