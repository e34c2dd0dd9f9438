import logging
from datetime import datetime, timezone
from typing import List, Optional
from bson import ObjectId
from fastapi import HTTPException
from microservices.product_microservice import match_products, stringify_id, to_object_ids
from mongomanager import product_collection, stock_alert_collection

logger = logging.getLogger(__name__)


async def list_products(search: Optional[str] = None):
    products = await product_collection.find({}).to_list(None)
    products = [stringify_id(product) for product in products]
    if search:
        products = match_products(search, products)
    return products


async def get_stock_levels(product_ids: List[str]):
    # {id: {"stock": int or {size: int}}}; unknown ids are left out
    object_ids = to_object_ids(product_ids)
    if not object_ids:
        return {}
    products = await product_collection.find({"_id": {"$in": object_ids}}, {"_id": 1, "stock": 1}).to_list(None)
    return {str(product["_id"]): {"stock": product.get("stock", 0)} for product in products}


async def subscribe_stock_alert(product_id: str, email: str):
    if not ObjectId.is_valid(product_id):
        raise HTTPException(status_code=400, detail="Invalid product id")
    product = await product_collection.find_one({"_id": ObjectId(product_id)}, {"_id": 1})
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    try:
        await stock_alert_collection.update_one(
            {"productId": product_id, "email": email},
            {
                "$set": {
                    "productId": product_id,
                    "email": email,
                    "notified": False,
                    "createdAt": datetime.now(timezone.utc),
                }
            },
            upsert=True  # one subscription per product and email
        )
        return True
    except Exception:
        logger.exception("Error saving stock alert for %s", product_id)
        return False
