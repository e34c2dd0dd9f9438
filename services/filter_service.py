import logging
from typing import Optional
from pydantic import ValidationError as SchemaError
from microservices.product_microservice import stringify_id
from mongomanager import filter_collection
from storefront.filters import filter_panel
from storefront.models import FilterDefinition

logger = logging.getLogger(__name__)


async def list_filters():
    filters = await filter_collection.find({"isActive": {"$ne": False}}).to_list(None)
    return [stringify_id(f) for f in filters]


def parse_filters(documents):
    definitions = []
    for document in documents:
        try:
            definitions.append(FilterDefinition.model_validate(document))
        except SchemaError as e:
            logger.warning("Skipping unreadable filter %s: %s", document.get("_id"), e)
    return definitions


async def get_dynamic_filters(category: Optional[str] = None):
    # filters for the category (or only global ones), ordered, inactive values removed
    definitions = parse_filters(await list_filters())
    categories = [category] if category else []
    return [
        definition.model_copy(update={"values": values}).model_dump(by_alias=True)
        for definition, values in filter_panel(definitions, categories)
    ]
