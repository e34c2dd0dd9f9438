from typing import Optional
from fastapi import APIRouter
from services.filter_service import list_filters, get_dynamic_filters

router = APIRouter(prefix="/filter")


@router.get("")
async def get_filters():
    filters = await list_filters()
    return {"status": "success", "filters": filters}


@router.get("/dynamic")
async def dynamic_filters(category: Optional[str] = None):
    # filters that apply to the category, ready to render
    filters = await get_dynamic_filters(category)
    return {"status": "success", "filters": filters}
