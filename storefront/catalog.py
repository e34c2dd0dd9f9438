from typing import Dict, Iterable, Iterator, List, Optional

from storefront.models import Product, StockRecord


class Catalog:
    """Read-only product list used for prices and as the stock fallback."""

    def __init__(self, products: Optional[Iterable[Product]] = None):
        self._products: List[Product] = list(products or [])

    def __len__(self) -> int:
        return len(self._products)

    def __iter__(self) -> Iterator[Product]:
        return iter(self._products)

    @property
    def products(self) -> List[Product]:
        return list(self._products)

    def ids(self) -> List[str]:
        return [p.id for p in self._products]

    def find(self, product_id: str) -> Optional[Product]:
        for product in self._products:
            if product.id == product_id:
                return product
        return None

    def replace(self, products: Iterable[Product]) -> None:
        self._products = list(products)

    def overlay_stock(self, records: Dict[str, StockRecord]) -> int:
        # only the stock field changes; products missing from records keep theirs
        updated = 0
        products = []
        for product in self._products:
            if product.id in records:
                product = product.model_copy(update={"stock": records[product.id]})
                updated += 1
            products.append(product)
        self._products = products
        return updated


__all__ = ["Catalog"]
