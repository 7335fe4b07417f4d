"""Product catalog endpoints: public reads, admin-only writes."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from storefront.api.v1.auth import require_admin
from storefront.core.database import get_db
from storefront.schemas.auth import CurrentAccount, MessageResponse
from storefront.schemas.products import (
    ProductCreate,
    ProductOut,
    ProductsListResponse,
    ProductUpdate,
)
from storefront.services import products
from storefront.services.errors import ServiceError

router = APIRouter()


@router.get("", response_model=ProductsListResponse)
def list_products(db: Annotated[Session, Depends(get_db)]) -> ProductsListResponse:
    return ProductsListResponse(
        products=[ProductOut.model_validate(p) for p in products.list_products(db)]
    )


@router.get("/{product_id}", response_model=ProductOut)
def get_product(
    product_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> ProductOut:
    try:
        product = products.get_product(db, product_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return ProductOut.model_validate(product)


@router.post("", response_model=ProductOut, status_code=status.HTTP_201_CREATED)
def create_product(
    body: ProductCreate,
    _admin: Annotated[CurrentAccount, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> ProductOut:
    return ProductOut.model_validate(products.create_product(db, body))


@router.put("/{product_id}", response_model=MessageResponse)
def update_product(
    product_id: int,
    body: ProductUpdate,
    _admin: Annotated[CurrentAccount, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Update only the fields present in the body (admin only)."""
    try:
        products.update_product(db, product_id, body)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return MessageResponse(message="Product updated")


@router.delete("/{product_id}", response_model=MessageResponse)
def delete_product(
    product_id: int,
    _admin: Annotated[CurrentAccount, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    try:
        products.delete_product(db, product_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return MessageResponse(message="Product deleted")
