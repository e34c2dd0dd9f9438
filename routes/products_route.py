from typing import Optional
from fastapi import APIRouter
from schemas.product_schemas import StockAlertSchema, StockLevelsSchema
from services.products_service import list_products, get_stock_levels, subscribe_stock_alert


router = APIRouter(prefix="/product")


@router.get("/list")
async def get_products(search: Optional[str] = None):
    # all products, or the ones matching the search
    products = await list_products(search)
    return {"status": "success", "products": products}


@router.post("/stock-levels")
async def stock_levels(data: StockLevelsSchema):
    # current stock for each requested product
    levels = await get_stock_levels(data.productIds)
    return {"status": "success", "stockLevels": levels}


@router.post("/stock-alert")
async def stock_alert(data: StockAlertSchema):
    # remembers who to tell once the product is back in stock
    if await subscribe_stock_alert(data.productId, data.email):
        return {"status": "success", "message": "Subscribed to stock alert"}
    return {"status": "failure", "message": "Unable to subscribe"}
