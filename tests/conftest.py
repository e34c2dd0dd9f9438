import pytest
from unittest.mock import AsyncMock, Mock

from storefront.cart_store import CartStore
from storefront.catalog import Catalog
from storefront.models import Product
from storefront.notifications import Notifier
from storefront.reconciler import CartReconciler


@pytest.fixture
def shirt() -> Product:
    """Sized product: stock is tracked per size"""
    return Product(id="p1", name="Linen Shirt", price=100, hasSize=True,
                   sizes=["M", "L"], stock={"M": 2, "L": 1})


@pytest.fixture
def mug() -> Product:
    """Product without sizes: a single stock figure"""
    return Product(id="p2", name="Clay Mug", price=25, stock=3)


@pytest.fixture
def catalog(shirt: Product, mug: Product) -> Catalog:
    return Catalog([shirt, mug])


@pytest.fixture
def oracle() -> Mock:
    oracle = Mock()
    oracle.batch_stock = AsyncMock(return_value={"p1": {"M": 2, "L": 1}, "p2": 3})
    return oracle


@pytest.fixture
def persistence() -> Mock:
    """Remote cart copy; signed out unless a test flips ``authenticated``"""
    persistence = Mock()
    persistence.authenticated = False
    persistence.add = AsyncMock(return_value=None)
    persistence.update = AsyncMock(return_value=None)
    persistence.fetch = AsyncMock(return_value={})
    return persistence


@pytest.fixture
def notifier() -> Notifier:
    return Notifier()


@pytest.fixture
async def reconciler(catalog, oracle, persistence, notifier):
    reconciler = CartReconciler(CartStore(), catalog, oracle, notifier,
                                persistence=persistence, refresh_interval=3600)
    yield reconciler
    await reconciler.aclose()
