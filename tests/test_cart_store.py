import pytest

from storefront.cart_store import CartStore, SizedLine, UnsizedLine, coerce_quantity
from storefront.errors import ValidationError


class TestReplace:
    def test_reads_sized_and_unsized_lines(self):
        cart = CartStore({"p1": {"M": 2, "L": 1}, "p2": {"quantity": 3}, "p3": 4})

        assert cart.get("p1") == SizedLine({"M": 2, "L": 1})
        assert cart.get("p2") == UnsizedLine(3)
        assert cart.get("p3") == UnsizedLine(4)

    def test_drops_malformed_and_empty_entries(self):
        cart = CartStore({
            "p1": {"M": "lots", "L": 1},
            "p2": {"quantity": None},
            "p3": {"S": 0},
            "p4": -2,
        })

        assert cart.to_raw() == {"p1": {"L": 1}}

    def test_replaces_previous_contents(self):
        cart = CartStore({"p1": {"M": 1}})
        cart.replace({"p2": {"quantity": 1}})

        assert "p1" not in cart
        assert cart.to_raw() == {"p2": {"quantity": 1}}

    def test_non_mapping_payload_empties_cart(self):
        cart = CartStore({"p1": {"M": 1}})
        cart.replace(["p1"])

        assert len(cart) == 0


class TestQuantities:
    def test_quantity_per_size_and_summed(self):
        cart = CartStore({"p1": {"M": 2, "L": 1}})

        assert cart.quantity("p1", "M") == 2
        assert cart.quantity("p1", "XL") == 0
        assert cart.quantity("p1") == 3
        assert cart.quantity("missing") == 0

    def test_increment_creates_lines(self):
        cart = CartStore()

        assert cart.increment("p1", "M") == 1
        assert cart.increment("p1", "M") == 2
        assert cart.increment("p2") == 1
        assert cart.to_raw() == {"p1": {"M": 2}, "p2": {"quantity": 1}}

    def test_increment_size_on_unsized_line_is_rejected(self):
        cart = CartStore({"p2": {"quantity": 1}})

        with pytest.raises(ValidationError):
            cart.increment("p2", "M")
        assert cart.quantity("p2") == 1

    def test_set_zero_removes_size_then_product(self):
        cart = CartStore({"p1": {"M": 2, "L": 1}})

        cart.set_quantity("p1", "M", 0)
        assert cart.to_raw() == {"p1": {"L": 1}}

        cart.set_quantity("p1", "L", 0)
        assert cart.to_raw() == {}

    def test_set_zero_without_size_removes_product(self):
        cart = CartStore({"p1": {"M": 2}, "p2": {"quantity": 1}})

        cart.set_quantity("p1", None, 0)

        assert cart.to_raw() == {"p2": {"quantity": 1}}

    def test_set_positive_overwrites(self):
        cart = CartStore({"p1": {"M": 2}, "p2": {"quantity": 1}})

        cart.set_quantity("p1", "M", 7)
        cart.set_quantity("p2", None, 5)

        assert cart.to_raw() == {"p1": {"M": 7}, "p2": {"quantity": 5}}

    def test_negative_quantity_is_rejected(self):
        cart = CartStore({"p2": {"quantity": 1}})

        with pytest.raises(ValidationError):
            cart.set_quantity("p2", None, -1)

    @pytest.mark.parametrize("quantity", [2.5, True, "many", None])
    def test_non_whole_quantity_is_rejected(self, quantity):
        cart = CartStore({"p1": {"M": 2}, "p2": {"quantity": 1}})

        with pytest.raises(ValidationError):
            cart.set_quantity("p2", None, quantity)
        with pytest.raises(ValidationError):
            cart.set_quantity("p1", "M", quantity)
        assert cart.to_raw() == {"p1": {"M": 2}, "p2": {"quantity": 1}}

    def test_whole_number_strings_and_floats_are_stored_as_int(self):
        cart = CartStore({"p2": {"quantity": 1}})

        assert cart.set_quantity("p2", None, "3") == 3
        assert cart.get("p2") == UnsizedLine(3)
        assert cart.set_quantity("p2", None, 4.0) == 4
        assert isinstance(cart.get("p2").quantity, int)

    def test_removing_size_from_unsized_line_is_rejected(self):
        cart = CartStore({"p2": {"quantity": 2}})

        with pytest.raises(ValidationError):
            cart.set_quantity("p2", "M", 0)
        with pytest.raises(ValidationError):
            cart.remove("p2", "M")
        assert cart.to_raw() == {"p2": {"quantity": 2}}


@pytest.mark.parametrize("value,expected", [
    (3, 3), (2.0, 2), ("4", 4), (True, None), (-1, None), ("x", None), (None, None), (1.5, None),
])
def test_coerce_quantity(value, expected):
    assert coerce_quantity(value) == expected
