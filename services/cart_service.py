import logging
from bson import ObjectId
from fastapi import HTTPException
from mongomanager import users_collection
from storefront.cart_store import CartStore
from storefront.errors import ValidationError

logger = logging.getLogger(__name__)


async def find_user(user_id: str):
    if not ObjectId.is_valid(user_id):
        raise HTTPException(status_code=400, detail="Invalid user id")
    user = await users_collection.find_one({"_id": ObjectId(user_id)})
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


async def get_user_cart(user_id: str):
    user = await find_user(user_id)
    # reading through the store drops malformed entries before they reach the client
    return CartStore(user.get("cartData") or {}).to_raw()


async def save_cart(user_id: str, cart: CartStore):
    try:
        await users_collection.update_one({"_id": ObjectId(user_id)}, {"$set": {"cartData": cart.to_raw()}})
        return True
    except Exception:
        logger.exception("Error saving cart for user %s", user_id)
        return False


async def add_to_cart(user_id: str, req):
    # adds a new item to cart or increment an existing item
    user = await find_user(user_id)
    cart = CartStore(user.get("cartData") or {})
    try:
        cart.increment(req.itemId, req.size)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return await save_cart(user_id, cart)


async def update_cart(user_id: str, req):
    # overwrites a quantity, 0 removes the size (and the product once it has none left)
    user = await find_user(user_id)
    cart = CartStore(user.get("cartData") or {})
    try:
        cart.set_quantity(req.itemId, req.size, req.quantity)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return await save_cart(user_id, cart)
