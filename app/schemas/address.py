from typing import Optional
from pydantic import BaseModel, Field


class AddressRequest(BaseModel):
    full_name: str = Field(min_length=2)
    phone: str = Field(min_length=10)
    address_line1: str = Field(min_length=5)
    address_line2: Optional[str] = None
    city: str = Field(min_length=2)
    state: str = Field(min_length=2)
    postal_code: str = Field(min_length=5)
    country: str = "India"
    is_default: bool = False


class AddressUpdateRequest(BaseModel):
    full_name: Optional[str] = Field(default=None, min_length=2)
    phone: Optional[str] = Field(default=None, min_length=10)
    address_line1: Optional[str] = Field(default=None, min_length=5)
    address_line2: Optional[str] = None
    city: Optional[str] = Field(default=None, min_length=2)
    state: Optional[str] = Field(default=None, min_length=2)
    postal_code: Optional[str] = Field(default=None, min_length=5)
    country: Optional[str] = None
    is_default: Optional[bool] = None
