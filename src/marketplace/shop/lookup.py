from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from marketplace.errors import SellerNotFound
from marketplace.shop.shop import Shop


def load_shop(shop_id) -> Shop:
    """Load a shop's ledger from its event stream."""
    try:
        return current_domain.repository_for(Shop).get(str(shop_id))
    except ObjectNotFoundError:
        raise SellerNotFound(f"Seller {shop_id} not found") from None
