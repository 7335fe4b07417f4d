"""Product catalog CRUD."""

import logging

from sqlalchemy.orm import Session

from storefront.models import Product
from storefront.schemas.products import ProductCreate, ProductUpdate
from storefront.services.errors import NotFoundError

logger = logging.getLogger(__name__)


def list_products(db: Session) -> list[Product]:
    return db.query(Product).order_by(Product.id).all()


def get_product(db: Session, product_id: int) -> Product:
    """Return the product or raise NotFoundError."""
    product = db.get(Product, product_id)
    if product is None:
        raise NotFoundError("Product not found")
    return product


def create_product(db: Session, body: ProductCreate) -> Product:
    product = Product(**body.model_dump())
    db.add(product)
    db.commit()
    db.refresh(product)
    logger.info("Product created: id=%s", product.id)
    return product


def update_product(db: Session, product_id: int, changes: ProductUpdate) -> Product:
    """Apply only the fields the client sent; explicit nulls for required columns are ignored."""
    product = get_product(db, product_id)
    for field, value in changes.model_dump(exclude_unset=True).items():
        if value is None and field in ("name", "price", "stock"):
            continue
        setattr(product, field, value)
    db.commit()
    db.refresh(product)
    logger.info("Product updated: id=%s", product.id)
    return product


def delete_product(db: Session, product_id: int) -> None:
    product = get_product(db, product_id)
    db.delete(product)
    db.commit()
    logger.info("Product deleted: id=%s", product_id)
