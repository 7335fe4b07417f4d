"""Request/response schemas for the product catalog."""

from pydantic import BaseModel, Field


class ProductCreate(BaseModel):
    """Body for product creation (admin only)."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    price: float = Field(..., ge=0)
    stock: int = Field(default=0, ge=0)
    image_url: str | None = Field(default=None, max_length=2048)


class ProductUpdate(BaseModel):
    """Partial update; only fields that are set change. stock may be set to 0."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    stock: int | None = Field(default=None, ge=0)
    image_url: str | None = Field(default=None, max_length=2048)


class ProductOut(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    name: str
    description: str | None
    price: float
    stock: int
    image_url: str | None


class ProductsListResponse(BaseModel):
    products: list[ProductOut]
