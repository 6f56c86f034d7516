from typing import List, Optional
from pydantic import BaseModel, ConfigDict


class Product(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    name: str
    price: int
    original_price: Optional[int] = None
    image: Optional[str] = None
    images: List[str] = []
    description: Optional[str] = None
    category: Optional[str] = None
    rating: Optional[float] = None
    in_stock: bool = True
    stock_quantity: Optional[int] = None


class CartLine(Product):
    quantity: int
    # Set once the backend has a row for this line; None means pending sync
    cart_item_id: Optional[int] = None


class WishlistEntry(Product):
    wishlist_item_id: Optional[int] = None


class SessionUser(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    email: str
    name: Optional[str] = None
    role: str = "customer"
