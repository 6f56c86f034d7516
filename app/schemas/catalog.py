from typing import List, Literal, Optional
from pydantic import BaseModel, Field, HttpUrl


class ProductQuery(BaseModel):
    category: Optional[str] = None
    min_price: Optional[int] = Field(default=None, ge=0)
    max_price: Optional[int] = Field(default=None, ge=0)
    search: Optional[str] = None
    sort_by: Literal["created_at", "price", "rating", "name"] = "created_at"
    sort_order: Literal["asc", "desc"] = "desc"
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)


class ProductCreateRequest(BaseModel):
    name: str = Field(min_length=1)
    slug: str = Field(min_length=1)
    description: Optional[str] = None
    price: int = Field(gt=0)
    original_price: Optional[int] = Field(default=None, gt=0)
    image: HttpUrl
    images: List[HttpUrl] = Field(default_factory=list)
    category: str = Field(min_length=1)
    in_stock: bool = True
    stock_quantity: int = Field(default=0, ge=0)


class ProductUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    slug: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    price: Optional[int] = Field(default=None, gt=0)
    original_price: Optional[int] = Field(default=None, gt=0)
    image: Optional[HttpUrl] = None
    images: Optional[List[HttpUrl]] = None
    category: Optional[str] = Field(default=None, min_length=1)
    in_stock: Optional[bool] = None
    stock_quantity: Optional[int] = Field(default=None, ge=0)


class ReviewRequest(BaseModel):
    product_id: int
    rating: int = Field(ge=1, le=5)
    comment: Optional[str] = Field(default=None, max_length=2000)
