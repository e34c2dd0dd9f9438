from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# a flat count, or a count per size label
StockRecord = Union[int, Dict[str, int]]

GLOBAL_SCOPE = "global"
CATEGORY_SCOPE = "category-specific"
SINGLE_SELECT = "single-select"
MULTI_SELECT = "multi-select"


def stock_for(record, size: Optional[str] = None) -> int:
    # a flat record has no per-size figure, a sized record no flat one
    if size:
        if isinstance(record, dict):
            return record.get(size, 0) or 0
        return 0
    return record if isinstance(record, int) and not isinstance(record, bool) else 0


def normalize_string(value) -> str:
    return value.strip().lower() if isinstance(value, str) else ""


def normalize_array(values) -> List[str]:
    if not isinstance(values, list):
        return []
    return [item for item in (normalize_string(v) for v in values) if item]


class Product(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(alias="_id")
    name: str = ""
    price: float = 0
    has_size: bool = Field(False, alias="hasSize")
    sizes: List[str] = []
    stock: StockRecord = 0
    gender: str = ""
    category: str = ""
    sub_category: str = Field("", alias="subCategory")
    occasion: List[str] = []
    type: List[str] = []
    filter_tags: List[str] = Field([], alias="filterTags")

    @field_validator("gender", "category", "sub_category", mode="before")
    @classmethod
    def _normalize_string(cls, value):
        return normalize_string(value)

    @field_validator("occasion", "type", "filter_tags", mode="before")
    @classmethod
    def _normalize_array(cls, value):
        return normalize_array(value)

    @field_validator("stock", mode="before")
    @classmethod
    def _default_stock(cls, value):
        return 0 if value is None else value

    def stock_for(self, size: Optional[str] = None) -> int:
        # cached figure, used when the live lookup fails
        return stock_for(self.stock, size)


class FilterValue(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    value: str
    display_name: str = Field("", alias="displayName")
    is_active: bool = Field(True, alias="isActive")
    color_code: Optional[str] = Field(None, alias="colorCode")


class FilterDefinition(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = Field(None, alias="_id")
    name: str
    display_name: str = Field("", alias="displayName")
    description: Optional[str] = None
    scope: str = Field(GLOBAL_SCOPE, alias="type")
    applicable_categories: List[str] = Field([], alias="applicableCategories")
    filter_type: str = Field(MULTI_SELECT, alias="filterType")
    values: List[FilterValue] = []
    is_active: bool = Field(True, alias="isActive")

    @property
    def is_multi_select(self) -> bool:
        return self.filter_type != SINGLE_SELECT

    def active_values(self) -> List[FilterValue]:
        return [v for v in self.values if v.is_active]


__all__ = ["StockRecord", "Product", "FilterValue", "FilterDefinition",
           "GLOBAL_SCOPE", "CATEGORY_SCOPE", "SINGLE_SELECT", "MULTI_SELECT",
           "normalize_string", "normalize_array", "stock_for"]
