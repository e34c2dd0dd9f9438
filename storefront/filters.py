"""Which filters the catalogue panel shows, and how a click changes the selection.

Selections are always ``{filter_name: [value, ...]}``, lists even for
single-select filters, which is the shape the backend accepts.
"""
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from storefront.models import CATEGORY_SCOPE, GLOBAL_SCOPE, FilterDefinition, FilterValue

SelectedFilters = Dict[str, List[str]]

FILTER_PRIORITY = {
    "color": 1,
    "material": 2,
    "occasion": 3,
    "type": 4,
    "size": 5,
}
UNLISTED_PRIORITY = 99

# rendered by the caller ahead of the dynamic filters
BUILTIN_FILTERS = ("category", "gender")

FILTER_KEYS = ("gender", "occasion", "type", "category", "color", "material", "size")


def capitalize_category(category: str) -> str:
    category = category.strip().lower()
    return category[:1].upper() + category[1:]


def _in_scope(definition, categories):
    if definition.scope == GLOBAL_SCOPE:
        return True
    if definition.scope == CATEGORY_SCOPE:
        return any(capitalize_category(c) in definition.applicable_categories for c in categories)
    return False


def applicable_filters(all_filters: Iterable[FilterDefinition],
                       selected_categories: Optional[Sequence[str]]) -> List[FilterDefinition]:
    categories = [c for c in (selected_categories or []) if c]
    if not categories:
        resolved = [f for f in all_filters if f.scope == GLOBAL_SCOPE]
    else:
        resolved = [f for f in all_filters if _in_scope(f, categories)]
    resolved = [f for f in resolved if f.name.lower() not in BUILTIN_FILTERS]
    # sorted() is stable, unlisted names keep their incoming order
    return sorted(resolved, key=lambda f: FILTER_PRIORITY.get(f.name.lower(), UNLISTED_PRIORITY))


def filter_panel(all_filters: Iterable[FilterDefinition],
                 selected_categories: Optional[Sequence[str]]) -> List[Tuple[FilterDefinition, List[FilterValue]]]:
    """Applicable filters paired with their active values; empty ones are left out."""
    panel = []
    for definition in applicable_filters(all_filters, selected_categories):
        values = definition.active_values()
        if values:
            panel.append((definition, values))
    return panel


def is_multi_select(all_filters: Iterable[FilterDefinition], filter_name: str) -> bool:
    for definition in all_filters:
        if definition.name == filter_name:
            return definition.is_multi_select
    return True


def toggle_value(selected: Mapping[str, Sequence[str]], filter_name: str, value: str,
                 checked: bool, is_multi_select: bool) -> SelectedFilters:
    new_selected = {name: list(values) for name, values in selected.items()}
    current = new_selected.get(filter_name, [])

    if not is_multi_select:
        new_selected[filter_name] = [value] if checked else []
    elif checked:
        new_selected[filter_name] = current if value in current else current + [value]
    else:
        new_selected[filter_name] = [item for item in current if item != value]
    return new_selected


def clear_all(selected: Optional[Mapping[str, Sequence[str]]] = None) -> SelectedFilters:
    cleared = {name: [] for name in FILTER_KEYS}
    for name in selected or {}:
        cleared[name] = []
    return cleared


__all__ = ["SelectedFilters", "FILTER_PRIORITY", "BUILTIN_FILTERS", "FILTER_KEYS",
           "applicable_filters", "filter_panel", "is_multi_select", "toggle_value",
           "clear_all", "capitalize_category"]
