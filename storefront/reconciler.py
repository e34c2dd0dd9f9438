"""Stock-aware cart mutations.

Every add is checked against live stock before it touches the cart. Signed-in
sessions mirror mutations to the backend; a failed remote call is reported
but never rolls back the local change. While the cart holds anything, stock
figures in the catalogue are refreshed in the background.
"""
import asyncio
import logging
from typing import Optional

from config import settings
from storefront.cart_store import CartStore
from storefront.catalog import Catalog
from storefront.clients import CartPersistence, StockOracle
from storefront.errors import (NotFound, OutOfStock, QuantityExceeded, RemoteSyncFailure,
                               StorefrontError, ValidationError)
from storefront.models import Product, stock_for
from storefront.notifications import OUT_OF_STOCK_STYLE, Notifier

logger = logging.getLogger(__name__)


class CartReconciler:
    def __init__(self, cart: CartStore, catalog: Catalog, oracle: StockOracle,
                 notifier: Notifier, persistence: Optional[CartPersistence] = None,
                 refresh_interval: Optional[float] = None):
        self.cart = cart
        self.catalog = catalog
        self.oracle = oracle
        self.notifier = notifier
        self.persistence = persistence
        self.refresh_interval = (settings.stock_refresh_interval
                                 if refresh_interval is None else refresh_interval)
        self._refresh_task: Optional[asyncio.Task] = None
        self._refresh_key = None

    @property
    def authenticated(self) -> bool:
        return self.persistence is not None and self.persistence.authenticated

    @property
    def refreshing(self) -> bool:
        return self._refresh_task is not None and not self._refresh_task.done()

    async def get_real_time_stock(self, product_id: str, size: Optional[str] = None) -> int:
        try:
            records = await self.oracle.batch_stock([product_id])
        except RemoteSyncFailure as e:
            logger.warning("Live stock lookup for %s failed, using cached figure: %s", product_id, e)
        else:
            if product_id in records:
                return stock_for(records[product_id], size)
            logger.warning("No live stock for %s, using cached figure", product_id)
        product = self.catalog.find(product_id)
        if product is None:
            return 0
        return product.stock_for(size)

    async def validate_add(self, product: Optional[Product], size: Optional[str] = None) -> int:
        """Raise the reason ``product`` cannot go into the cart, else return live stock."""
        if product is None:
            raise NotFound("Product not found")
        if product.has_size and not size:
            raise ValidationError("Select Product Size")
        size = size if product.has_size else None
        available = await self.get_real_time_stock(product.id, size)
        in_cart = self.cart.quantity(product.id, size)
        if available <= 0:
            raise OutOfStock(product.id, size)
        if in_cart >= available:
            raise QuantityExceeded(available, in_cart)
        return available

    async def add(self, product: Optional[Product], size: Optional[str] = None) -> bool:
        try:
            await self.validate_add(product, size)
            size = size if product.has_size else None
            self.cart.increment(product.id, size)
        except OutOfStock as e:
            self.notifier.error(str(e), style=OUT_OF_STOCK_STYLE)
            return False
        except StorefrontError as e:
            self.notifier.error(str(e))
            return False

        self.notifier.success("Product added to cart!")
        self.schedule_refresh()

        if self.authenticated:
            try:
                await self.persistence.add(product.id, size)
                # TODO: drop the full refetch once /cart/add answers with the updated line
                self.cart.replace(await self.persistence.fetch())
            except RemoteSyncFailure as e:
                self.notifier.error(str(e))
            self.schedule_refresh()
        return True

    async def set_quantity(self, product_id: str, size: Optional[str], quantity: int) -> None:
        try:
            quantity = self.cart.set_quantity(product_id, size, quantity)
        except ValidationError as e:
            self.notifier.error(str(e))
            return
        self.schedule_refresh()

        if self.authenticated:
            try:
                await self.persistence.update(product_id, size, quantity)
            except RemoteSyncFailure as e:
                self.notifier.error(str(e))

    def replace_cart(self, raw) -> None:
        self.cart.replace(raw)
        self.schedule_refresh()

    def get_cart_count(self) -> int:
        total = 0
        for product_id, line in self.cart:
            for key, quantity in line.items():
                try:
                    if quantity > 0:
                        total += quantity
                except TypeError:
                    logger.warning("Skipping malformed cart entry %s[%s]: %r", product_id, key, quantity)
        return total

    def get_cart_amount(self) -> float:
        total = 0
        for product_id, line in self.cart:
            product = self.catalog.find(product_id)
            if product is None:
                logger.warning("Product not found for cart item: %s", product_id)
                continue
            for key, quantity in line.items():
                try:
                    if quantity > 0:
                        total += product.price * quantity
                except TypeError:
                    logger.warning("Skipping malformed cart entry %s[%s]: %r", product_id, key, quantity)
        return total

    async def refresh_product_stock(self) -> int:
        """Overlay fresh stock onto the catalogue; returns how many products changed."""
        product_ids = self.catalog.ids()
        if not product_ids:
            return 0
        try:
            records = await self.oracle.batch_stock(product_ids)
        except RemoteSyncFailure as e:
            logger.warning("Error refreshing product stock: %s", e)
            return 0
        return self.catalog.overlay_stock(records)

    async def _refresh_loop(self) -> None:
        while True:
            await asyncio.sleep(self.refresh_interval)
            await self.refresh_product_stock()

    def schedule_refresh(self) -> None:
        # one task per (cart occupied, catalogue size); anything else restarts or stops it
        occupied = len(self.cart) > 0
        if not occupied:
            self._stop_refresh()
            return
        key = (occupied, len(self.catalog))
        if self.refreshing and key == self._refresh_key:
            return
        self._stop_refresh()
        self._refresh_key = key
        self._refresh_task = asyncio.get_running_loop().create_task(self._refresh_loop())

    def _stop_refresh(self):
        task = self._refresh_task
        self._refresh_task = None
        self._refresh_key = None
        if task is not None and not task.done():
            task.cancel()
        return task

    async def aclose(self) -> None:
        task = self._stop_refresh()
        if task is not None:
            await asyncio.gather(task, return_exceptions=True)


__all__ = ["CartReconciler"]
