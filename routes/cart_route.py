from fastapi import APIRouter, Depends

from microservices.auth_microservice import get_current_user_id
from schemas.cart_schemas import AddCartSchema, UpdateCartSchema
from services.cart_service import get_user_cart, add_to_cart, update_cart

router = APIRouter(prefix="/cart")


@router.post("/get")
async def get_cart(user_id: str = Depends(get_current_user_id)):
    # get cart from user db
    cart = await get_user_cart(user_id)
    return {"status": "success", "cartData": cart}


@router.post("/add")
async def add_cart_item(req: AddCartSchema, user_id: str = Depends(get_current_user_id)):
    # adds one of the item (in the given size) to the cart
    if await add_to_cart(user_id, req):
        return {"status": "success", "message": "Added To Cart"}
    return {"status": "failure", "message": "Item was not added"}


@router.post("/update")
async def update_cart_item(req: UpdateCartSchema, user_id: str = Depends(get_current_user_id)):
    # sets the item quantity, 0 removes it
    if await update_cart(user_id, req):
        return {"status": "success", "message": "Cart Updated"}
    return {"status": "failure", "message": "Cart was not updated"}
