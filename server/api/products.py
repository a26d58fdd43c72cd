# server/api/products.py

import logging
from pydantic import BaseModel
from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from api.auth import get_current_user
from core.errors import Forbidden, InternalError, NotFound, Unauthenticated
from core.security import Identity
from core.store import CatalogStore, get_store


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["products"])

PRODUCT_NOT_FOUND = "Product not found"


# -------------------------------
# Schemas
# -------------------------------

class ProductOut(BaseModel):
    id: int
    name: str
    imageLink: str | None = None
    description: str | None = None
    price: float
    userId: int


class NewProduct(BaseModel):
    productName: str
    imageLink: str | None = None
    description: str | None = None
    price: float


class ProductUpdate(BaseModel):
    """Fields left out of the body, or sent as null, keep their stored value."""
    name: str | None = None
    imageLink: str | None = None
    description: str | None = None
    price: float | None = None


class ProductCreated(BaseModel):
    message: str
    product: ProductOut


# Request keys -> Product columns
UPDATE_COLUMNS = {
    "name": "name",
    "imageLink": "image_link",
    "description": "description",
    "price": "price",
}


def _store_failure(store: CatalogStore, action: str):
    store.db.rollback()
    logger.exception("Error %s", action)
    return InternalError()


# -------------------------------
# Public Endpoints
# -------------------------------

@router.get("/products", response_model=list[ProductOut])
def list_products(store: CatalogStore = Depends(get_store)):
    try:
        products = store.list_products()
    except SQLAlchemyError:
        raise _store_failure(store, "fetching products")
    return [product.to_dict() for product in products]


@router.get("/products/{product_id}", response_model=ProductOut)
def get_product(product_id: int, store: CatalogStore = Depends(get_store)):
    try:
        product = store.get_product(product_id)
    except SQLAlchemyError:
        raise _store_failure(store, f"fetching product {product_id}")
    if not product:
        raise NotFound(PRODUCT_NOT_FOUND)
    return product.to_dict()


# -------------------------------
# Owner Endpoints
# -------------------------------

@router.post("/addProduct", status_code=status.HTTP_201_CREATED, response_model=ProductCreated)
def add_product(
    req: NewProduct,
    user: Identity = Depends(get_current_user),
    store: CatalogStore = Depends(get_store),
):
    try:
        if store.get_user(user.user_id) is None:
            raise Unauthenticated()
        product = store.create_product(
            owner_id=user.user_id,
            name=req.productName,
            image_link=req.imageLink,
            description=req.description,
            price=req.price,
        )
    except SQLAlchemyError:
        raise _store_failure(store, "adding product")

    logger.info("User %s added product %s", user.user_id, product.id)
    return {"message": "Product added successfully", "product": product.to_dict()}


@router.delete("/deleteProduct/{product_id}")
def delete_product(
    product_id: int,
    user: Identity = Depends(get_current_user),
    store: CatalogStore = Depends(get_store),
):
    try:
        product = store.get_product(product_id)
        if not product:
            raise NotFound(PRODUCT_NOT_FOUND)
        if product.user_id != user.user_id:
            logger.warning("User %s denied delete of product %s", user.user_id, product_id)
            raise Forbidden("Forbidden: You are not authorized to delete this product")
        deleted = store.delete_product_if_owner(product_id, user.user_id)
    except SQLAlchemyError:
        raise _store_failure(store, f"deleting product {product_id}")

    if not deleted:
        raise NotFound(PRODUCT_NOT_FOUND)

    logger.info("User %s deleted product %s", user.user_id, product_id)
    return {"message": "Product deleted successfully"}


@router.put("/products/{product_id}", response_model=ProductOut)
def update_product(
    product_id: int,
    req: ProductUpdate,
    user: Identity = Depends(get_current_user),
    store: CatalogStore = Depends(get_store),
):
    changes = {
        UPDATE_COLUMNS[key]: value
        for key, value in req.model_dump(exclude_unset=True, exclude_none=True).items()
    }

    try:
        product = store.get_product(product_id)
        if not product:
            raise NotFound(PRODUCT_NOT_FOUND)
        if product.user_id != user.user_id:
            logger.warning("User %s denied edit of product %s", user.user_id, product_id)
            raise Forbidden("Forbidden: You are not authorized to edit this product")
        updated = store.update_product_if_owner(product_id, user.user_id, changes)
    except SQLAlchemyError:
        raise _store_failure(store, f"updating product {product_id}")

    if updated is None:
        raise NotFound(PRODUCT_NOT_FOUND)

    logger.info("User %s updated product %s", user.user_id, product_id)
    return updated.to_dict()
