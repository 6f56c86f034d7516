from typing import Optional
from pydantic import BaseModel, Field


class PlaceOrderRequest(BaseModel):
    address_id: int
    payment_method: str = Field(min_length=1)
    payment_id: Optional[str] = None
    notes: Optional[str] = Field(default=None, max_length=1000)
