from pydantic import BaseModel, EmailStr
from typing import List


class StockLevelsSchema(BaseModel):
    productIds: List[str]


class StockAlertSchema(BaseModel):
    productId: str
    email: EmailStr


__all__ = ["StockLevelsSchema", "StockAlertSchema"]
