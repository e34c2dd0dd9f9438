from pydantic import BaseModel, Field
from typing import Optional


class AddCartSchema(BaseModel):
    itemId: str
    size: Optional[str] = None


class UpdateCartSchema(BaseModel):
    itemId: str
    size: Optional[str] = None
    quantity: int = Field(..., ge=0)


__all__ = ["AddCartSchema", "UpdateCartSchema"]
