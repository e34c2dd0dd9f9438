import pytest

from storefront.filters import (applicable_filters, clear_all, filter_panel, is_multi_select,
                                toggle_value, FILTER_KEYS)
from storefront.models import FilterDefinition


def make_filter(name, scope="global", categories=(), filter_type="multi-select", values=("a", "b")):
    return FilterDefinition.model_validate({
        "name": name,
        "displayName": name.title(),
        "type": scope,
        "applicableCategories": list(categories),
        "filterType": filter_type,
        "values": [{"value": v, "displayName": v.upper()} for v in values],
    })


@pytest.fixture
def all_filters():
    return [
        make_filter("occasion"),
        make_filter("brand"),
        make_filter("size", scope="category-specific", categories=["Shirts", "Pants"],
                    filter_type="single-select"),
        make_filter("gender"),
        make_filter("material"),
        make_filter("fabric", scope="category-specific", categories=["Sarees"]),
        make_filter("color"),
        make_filter("legacy", scope="seasonal"),
    ]


def names(filters):
    return [f.name for f in filters]


class TestApplicableFilters:
    def test_nothing_in_nothing_out(self):
        assert applicable_filters([], []) == []

    def test_no_category_gives_global_filters_in_priority_order(self, all_filters):
        assert names(applicable_filters(all_filters, [])) == ["color", "material", "occasion", "brand"]

    def test_category_adds_matching_category_filters(self, all_filters):
        assert names(applicable_filters(all_filters, ["shirts"])) == [
            "color", "material", "occasion", "size", "brand"]

    def test_category_comparison_is_case_normalized(self, all_filters):
        assert "size" in names(applicable_filters(all_filters, ["PANTS"]))
        assert "fabric" in names(applicable_filters(all_filters, ["sarees", "kurtis"]))

    def test_non_matching_category_keeps_only_global(self, all_filters):
        assert names(applicable_filters(all_filters, ["kurtis"])) == [
            "color", "material", "occasion", "brand"]

    def test_unlisted_names_keep_incoming_order(self):
        filters = [make_filter("zeta"), make_filter("alpha"), make_filter("color")]

        assert names(applicable_filters(filters, None)) == ["color", "zeta", "alpha"]

    def test_builtin_sections_are_excluded(self):
        filters = [make_filter("Category"), make_filter("gender"), make_filter("type")]

        assert names(applicable_filters(filters, [])) == ["type"]


class TestFilterPanel:
    def test_only_active_values_are_shown(self):
        color = FilterDefinition.model_validate({
            "name": "color",
            "type": "global",
            "values": [
                {"value": "red", "displayName": "Red", "isActive": True, "colorCode": "#ff0000"},
                {"value": "teal", "displayName": "Teal", "isActive": False},
            ],
        })

        [(definition, values)] = filter_panel([color], [])

        assert definition.name == "color"
        assert [v.value for v in values] == ["red"]
        assert values[0].color_code == "#ff0000"

    def test_filters_without_active_values_contribute_nothing(self):
        empty = make_filter("material", values=())

        assert filter_panel([empty, make_filter("color")], []) == [
            (make_filter("color"), make_filter("color").values)]


class TestToggleValue:
    def test_single_select_check_gives_singleton(self):
        selected = {"size": ["M", "L"]}

        assert toggle_value(selected, "size", "S", True, False) == {"size": ["S"]}
        assert toggle_value({}, "size", "S", True, False) == {"size": ["S"]}

    def test_single_select_uncheck_gives_empty(self):
        assert toggle_value({"size": ["M"]}, "size", "L", False, False) == {"size": []}

    def test_multi_select_appends_once(self):
        selected = toggle_value({}, "color", "red", True, True)
        selected = toggle_value(selected, "color", "blue", True, True)
        selected = toggle_value(selected, "color", "red", True, True)

        assert selected == {"color": ["red", "blue"]}

    def test_multi_select_uncheck_removes_every_occurrence(self):
        assert toggle_value({"color": ["red", "blue", "red"]}, "color", "red", False, True) == {
            "color": ["blue"]}

    def test_unchecking_absent_value_is_a_no_op(self):
        selected = {"color": ["blue"], "size": ["M"]}

        assert toggle_value(selected, "color", "red", False, True) == selected

    def test_input_is_not_mutated(self):
        selected = {"color": ["blue"]}

        toggle_value(selected, "color", "red", True, True)
        toggle_value(selected, "color", "blue", False, True)

        assert selected == {"color": ["blue"]}


def test_clear_all_resets_every_key():
    cleared = clear_all({"color": ["red"], "fabric": ["silk"]})

    assert cleared["fabric"] == []
    assert all(cleared[key] == [] for key in FILTER_KEYS)


def test_unknown_filters_are_multi_select(all_filters):
    assert is_multi_select(all_filters, "size") is False
    assert is_multi_select(all_filters, "color") is True
    assert is_multi_select(all_filters, "unheard-of") is True
