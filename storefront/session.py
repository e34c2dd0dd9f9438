import logging
from typing import List, Optional

import httpx

from config import settings
from storefront import filters
from storefront.cart_store import CartStore
from storefront.catalog import Catalog
from storefront.clients import (CartPersistence, CatalogClient, FilterClient, StockAlertClient,
                                StockOracle)
from storefront.errors import RemoteSyncFailure
from storefront.models import FilterDefinition
from storefront.notifications import Notifier
from storefront.reconciler import CartReconciler

logger = logging.getLogger(__name__)


class ShopSession:
    """Everything one shopper's storefront needs, owned in one place.

    Use it as an async context manager: entering opens the HTTP client,
    leaving stops the stock refresh and closes the client.
    """

    def __init__(self, backend_url: Optional[str] = None, http: Optional[httpx.AsyncClient] = None,
                 refresh_interval: Optional[float] = None):
        self.backend_url = backend_url or settings.backend_url
        self.http = http or httpx.AsyncClient(base_url=self.backend_url, timeout=settings.http_timeout)
        self.currency = settings.currency
        self.delivery_fee = settings.delivery_fee

        self.notifier = Notifier()
        self.catalog = Catalog()
        self.cart = CartStore()
        self.persistence = CartPersistence(self.http)
        self.catalog_client = CatalogClient(self.http)
        self.filter_client = FilterClient(self.http)
        self.stock_alerts = StockAlertClient(self.http)
        self.reconciler = CartReconciler(self.cart, self.catalog, StockOracle(self.http),
                                         self.notifier, persistence=self.persistence,
                                         refresh_interval=refresh_interval)

        self.filters: List[FilterDefinition] = []
        self.selected_filters = filters.clear_all()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self) -> None:
        await self.reconciler.aclose()
        await self.http.aclose()

    @property
    def token(self) -> Optional[str]:
        return self.persistence.token

    async def load_products(self, search: Optional[str] = None) -> bool:
        try:
            products = await self.catalog_client.list_products(search)
        except RemoteSyncFailure as e:
            self.notifier.error(str(e))
            return False
        self.catalog.replace(products)
        logger.info("Products loaded: %d", len(products))
        self.reconciler.schedule_refresh()
        return True

    async def login(self, token: str) -> bool:
        self.persistence.token = token
        return await self.sync_cart()

    async def sync_cart(self) -> bool:
        """Replace the local cart with the backend's copy."""
        if not self.persistence.authenticated:
            return False
        try:
            raw = await self.persistence.fetch()
        except RemoteSyncFailure as e:
            self.notifier.error(str(e))
            return False
        self.reconciler.replace_cart(raw)
        return True

    async def logout(self) -> None:
        self.persistence.token = None
        self.reconciler.replace_cart({})
        await self.reconciler.aclose()

    # cart

    async def add_to_cart(self, product_id: str, size: Optional[str] = None) -> bool:
        return await self.reconciler.add(self.catalog.find(product_id), size)

    async def update_quantity(self, product_id: str, size: Optional[str], quantity: int) -> None:
        await self.reconciler.set_quantity(product_id, size, quantity)

    def get_cart_count(self) -> int:
        return self.reconciler.get_cart_count()

    def get_cart_amount(self) -> float:
        return self.reconciler.get_cart_amount()

    def get_cart_total(self) -> float:
        amount = self.get_cart_amount()
        return amount + self.delivery_fee if amount > 0 else 0

    async def subscribe_stock_alert(self, product_id: str, email: str) -> bool:
        try:
            await self.stock_alerts.subscribe(product_id, email)
        except RemoteSyncFailure as e:
            self.notifier.error(str(e))
            return False
        self.notifier.success("You'll be notified when back in stock!")
        return True

    # filters

    async def fetch_filters(self) -> Optional[List[FilterDefinition]]:
        try:
            self.filters = await self.filter_client.list_filters()
        except RemoteSyncFailure as e:
            logger.error("Error fetching managed filters: %s", e)
            return None
        return self.filters

    async def fetch_dynamic_filters(self, category: Optional[str] = None) -> Optional[List[FilterDefinition]]:
        try:
            return await self.filter_client.dynamic_filters(category)
        except RemoteSyncFailure as e:
            logger.error("Error fetching filters: %s", e)
            return None

    def applicable_filters(self):
        return filters.filter_panel(self.filters, self.selected_filters.get("category"))

    def toggle_filter(self, filter_name: str, value: str, checked: bool) -> filters.SelectedFilters:
        self.selected_filters = filters.toggle_value(
            self.selected_filters, filter_name, value, checked,
            filters.is_multi_select(self.filters, filter_name))
        return self.selected_filters

    def clear_filters(self) -> filters.SelectedFilters:
        self.selected_filters = filters.clear_all(self.selected_filters)
        return self.selected_filters


__all__ = ["ShopSession"]
