"""FastAPI routes for products and reviews."""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from marketplace.api.actors import current_actor
from marketplace.api.schemas import (
    CreateProductRequest,
    MessageResponse,
    ProductOut,
    ProductResponse,
    ProductsResponse,
    ReviewRequest,
)
from marketplace.product.creation import CreateProduct
from marketplace.product.product import Product
from marketplace.product.removal import DeleteProduct
from marketplace.product.review import SubmitReview
from marketplace.shared.actors import Actor

product_router = APIRouter(prefix="/product", tags=["products"])


@product_router.post("/create-product", status_code=201, response_model=ProductResponse)
async def create_product(body: CreateProductRequest, actor: Actor = Depends(current_actor)) -> ProductResponse:
    images = [body.images] if isinstance(body.images, str) else body.images or []
    command = CreateProduct(
        shop_id=body.shop_id,
        name=body.name,
        description=body.description,
        category=body.category,
        price=body.price,
        stock=body.stock,
        images=json.dumps(images),
        actor_id=actor.id,
        actor_role=actor.role,
    )
    product_id = current_domain.process(command, asynchronous=False)

    product = current_domain.repository_for(Product).get_product(product_id)
    return ProductResponse(product=ProductOut.from_product(product))


@product_router.get("/get-all-products-shop/{shop_id}", response_model=ProductsResponse)
async def shop_products(shop_id: str) -> ProductsResponse:
    products = current_domain.repository_for(Product).for_shop(shop_id)
    return ProductsResponse(products=[ProductOut.from_product(p) for p in products])


@product_router.get("/get-all-products", response_model=ProductsResponse)
async def all_products() -> ProductsResponse:
    products = current_domain.repository_for(Product).all_products()
    return ProductsResponse(products=[ProductOut.from_product(p) for p in products])


@product_router.delete("/delete-shop-product/{product_id}", response_model=MessageResponse)
async def delete_shop_product(product_id: str, actor: Actor = Depends(current_actor)) -> MessageResponse:
    command = DeleteProduct(product_id=product_id, actor_id=actor.id, actor_role=actor.role)
    current_domain.process(command, asynchronous=False)
    return MessageResponse(message="Product Deleted successfully!")


@product_router.put("/create-new-review", response_model=MessageResponse)
async def create_new_review(body: ReviewRequest, actor: Actor = Depends(current_actor)) -> MessageResponse:
    command = SubmitReview(
        product_id=body.product_id,
        order_id=body.order_id,
        rating=body.rating,
        comment=body.comment,
        user_name=body.user_name,
        actor_id=actor.id,
        actor_role=actor.role,
    )
    current_domain.process(command, asynchronous=False)
    return MessageResponse(message="Reviewed successfully!")
