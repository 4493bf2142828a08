"""Acting identity passed explicitly into every marketplace operation.

Authentication itself happens outside the domain; handlers receive the
resulting identity on the command (``actor_id`` / ``actor_role``) and check
their precondition with the helpers below.
"""

from dataclasses import dataclass
from enum import Enum

from marketplace.errors import Unauthorized


class ActorRole(Enum):
    USER = "user"
    SELLER = "seller"
    ADMIN = "admin"


@dataclass(frozen=True)
class Actor:
    id: str
    role: str

    @classmethod
    def from_command(cls, command) -> "Actor":
        return cls(id=str(command.actor_id), role=command.actor_role)

    @property
    def is_admin(self) -> bool:
        return self.role == ActorRole.ADMIN.value

    def is_seller_of(self, shop_id) -> bool:
        return self.role == ActorRole.SELLER.value and self.id == str(shop_id)

    def is_user(self, user_id) -> bool:
        return self.role == ActorRole.USER.value and self.id == str(user_id)


def require_admin(actor: Actor) -> None:
    if not actor.is_admin:
        raise Unauthorized("Admin access required")


def require_shop_owner(actor: Actor, shop_id) -> None:
    if not (actor.is_admin or actor.is_seller_of(shop_id)):
        raise Unauthorized("Only the owning shop can perform this action")


def require_buyer(actor: Actor, buyer_id) -> None:
    if not (actor.is_admin or actor.is_user(buyer_id)):
        raise Unauthorized("Only the buyer can perform this action")


def require_party(actor: Actor, buyer_id, shop_id) -> None:
    """The buyer, the owning shop or an admin."""
    if not (actor.is_admin or actor.is_user(buyer_id) or actor.is_seller_of(shop_id)):
        raise Unauthorized("Unauthorized access")
