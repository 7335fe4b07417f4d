"""ORM model for catalog products."""

from sqlalchemy import Column, DateTime, Integer, Numeric, String, Text, func

from storefront.models.base import Base


class Product(Base):
    """Product listed in the store. Readable by anyone; mutated by admins only."""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    price = Column(Numeric(12, 2, asdecimal=False), nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    image_url = Column(String(2048), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
