"""In-memory cart: product id -> cart line.

The backend stores a cart as ``{product_id: {size: qty}}`` for sized products
and ``{product_id: {"quantity": qty}}`` for the rest. That shape is read once,
in :meth:`CartStore.replace`, into :class:`SizedLine` / :class:`UnsizedLine`
so nothing past this module has to guess which one it holds.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple, Union

from storefront.errors import ValidationError

logger = logging.getLogger(__name__)

QUANTITY_KEY = "quantity"


@dataclass
class UnsizedLine:
    quantity: int = 0

    def items(self) -> List[Tuple[str, int]]:
        return [(QUANTITY_KEY, self.quantity)]

    def to_raw(self):
        return {QUANTITY_KEY: self.quantity}


@dataclass
class SizedLine:
    sizes: Dict[str, int] = field(default_factory=dict)

    def items(self) -> List[Tuple[str, int]]:
        return list(self.sizes.items())

    def to_raw(self):
        return dict(self.sizes)


CartLine = Union[SizedLine, UnsizedLine]


def coerce_quantity(value) -> Optional[int]:
    # None means the value is not a usable quantity
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        quantity = value
    elif isinstance(value, float) and value.is_integer():
        quantity = int(value)
    elif isinstance(value, str) and value.strip().isdigit():
        quantity = int(value.strip())
    else:
        return None
    return quantity if quantity >= 0 else None


def parse_line(product_id: str, raw) -> Optional[CartLine]:
    if isinstance(raw, dict) and set(raw) == {QUANTITY_KEY}:
        raw = raw[QUANTITY_KEY]
    if not isinstance(raw, dict):
        quantity = coerce_quantity(raw)
        if quantity is None:
            logger.warning("Dropping malformed cart entry %s: %r", product_id, raw)
            return None
        return UnsizedLine(quantity) if quantity > 0 else None

    sizes = {}
    for size, value in raw.items():
        quantity = coerce_quantity(value)
        if quantity is None:
            logger.warning("Dropping malformed cart entry %s[%s]: %r", product_id, size, value)
            continue
        if quantity > 0:
            sizes[str(size)] = quantity
    return SizedLine(sizes) if sizes else None


class CartStore:
    def __init__(self, raw=None):
        self._lines: Dict[str, CartLine] = {}
        if raw:
            self.replace(raw)

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[Tuple[str, CartLine]]:
        return iter(list(self._lines.items()))

    def __contains__(self, product_id) -> bool:
        return product_id in self._lines

    def get(self, product_id: str) -> Optional[CartLine]:
        return self._lines.get(product_id)

    def quantity(self, product_id: str, size: Optional[str] = None) -> int:
        line = self._lines.get(product_id)
        if line is None:
            return 0
        if isinstance(line, SizedLine):
            if size:
                return line.sizes.get(size, 0)
            return sum(line.sizes.values())
        return line.quantity

    def _sized(self, product_id):
        line = self._lines.get(product_id)
        if line is None:
            line = self._lines[product_id] = SizedLine()
        elif not isinstance(line, SizedLine):
            raise ValidationError(f"Product {product_id} is not sold by size")
        return line

    def _unsized(self, product_id):
        line = self._lines.get(product_id)
        if line is None:
            line = self._lines[product_id] = UnsizedLine()
        elif not isinstance(line, UnsizedLine):
            raise ValidationError("Select Product Size")
        return line

    def increment(self, product_id: str, size: Optional[str] = None) -> int:
        if size:
            line = self._sized(product_id)
            line.sizes[size] = line.sizes.get(size, 0) + 1
            return line.sizes[size]
        line = self._unsized(product_id)
        line.quantity += 1
        return line.quantity

    def set_quantity(self, product_id: str, size: Optional[str], quantity) -> int:
        checked = coerce_quantity(quantity)
        if checked is None:
            raise ValidationError("Quantity must be a whole number, zero or more")
        if checked == 0:
            self.remove(product_id, size)
        elif size:
            self._sized(product_id).sizes[size] = checked
        else:
            self._unsized(product_id).quantity = checked
        return checked

    def remove(self, product_id: str, size: Optional[str] = None) -> None:
        line = self._lines.get(product_id)
        if line is None:
            return
        if not size:
            del self._lines[product_id]
        elif isinstance(line, SizedLine):
            line.sizes.pop(size, None)
            if not line.sizes:
                del self._lines[product_id]
        else:
            raise ValidationError(f"Product {product_id} is not sold by size")

    def replace(self, raw) -> None:
        """Swap the whole cart for ``raw`` (the backend's authoritative copy)."""
        self._lines = {}
        if not raw:
            return
        if not isinstance(raw, dict):
            logger.warning("Ignoring cart payload of type %s", type(raw).__name__)
            return
        for product_id, value in raw.items():
            line = parse_line(product_id, value)
            if line is not None:
                self._lines[str(product_id)] = line

    def clear(self) -> None:
        self._lines = {}

    def to_raw(self) -> Dict[str, dict]:
        return {product_id: line.to_raw() for product_id, line in self._lines.items()}


__all__ = ["CartStore", "CartLine", "SizedLine", "UnsizedLine", "QUANTITY_KEY",
           "coerce_quantity", "parse_line"]
