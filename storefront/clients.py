"""httpx clients for the backend the storefront talks to.

Every failure (transport error, non-2xx answer, a body that is not the
``{"status": "success", ...}`` envelope, or a payload of the wrong shape)
surfaces as :class:`RemoteSyncFailure`.
"""
import logging
from typing import Dict, Iterable, List, Optional

import httpx
from pydantic import ValidationError as SchemaError

from storefront.cart_store import coerce_quantity
from storefront.errors import RemoteSyncFailure
from storefront.models import FilterDefinition, Product, StockRecord

logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = body.get("message") or body.get("detail")
        if isinstance(message, str):
            return message
    return f"Request failed with status code {response.status_code}"


async def _request(http: httpx.AsyncClient, method: str, path: str, **kwargs) -> dict:
    try:
        response = await http.request(method, path, **kwargs)
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPStatusError as e:
        raise RemoteSyncFailure(_error_message(e.response)) from e
    except httpx.HTTPError as e:
        raise RemoteSyncFailure(str(e) or type(e).__name__) from e
    except ValueError as e:
        raise RemoteSyncFailure(f"{method} {path} returned invalid JSON") from e
    if not isinstance(data, dict):
        raise RemoteSyncFailure(f"{method} {path} returned an unexpected body")
    if data.get("status") != "success":
        raise RemoteSyncFailure(data.get("message") or f"{method} {path} was not successful")
    return data


def parse_stock_record(record) -> Optional[StockRecord]:
    if isinstance(record, dict):
        sizes = {}
        for size, value in record.items():
            quantity = coerce_quantity(value)
            if quantity is not None:
                sizes[str(size)] = quantity
        return sizes
    return coerce_quantity(record)


class StockOracle:
    def __init__(self, http: httpx.AsyncClient):
        self.http = http

    async def batch_stock(self, product_ids: Iterable[str]) -> Dict[str, StockRecord]:
        data = await _request(self.http, "POST", "/product/stock-levels",
                              json={"productIds": list(product_ids)})
        levels = data.get("stockLevels")
        if not isinstance(levels, dict):
            raise RemoteSyncFailure("Stock levels missing from response")
        records = {}
        for product_id, entry in levels.items():
            record = parse_stock_record(entry.get("stock") if isinstance(entry, dict) else None)
            if record is None:
                logger.warning("Ignoring malformed stock record for %s: %r", product_id, entry)
                continue
            records[product_id] = record
        return records


class CartPersistence:
    """Remote copy of the cart, only used while a session token is set."""

    def __init__(self, http: httpx.AsyncClient, token: Optional[str] = None):
        self.http = http
        self.token = token

    @property
    def authenticated(self) -> bool:
        return bool(self.token)

    def _headers(self):
        return {"token": self.token or ""}

    async def add(self, item_id: str, size: Optional[str] = None) -> None:
        await _request(self.http, "POST", "/cart/add",
                       json={"itemId": item_id, "size": size}, headers=self._headers())

    async def update(self, item_id: str, size: Optional[str], quantity: int) -> None:
        await _request(self.http, "POST", "/cart/update",
                       json={"itemId": item_id, "size": size, "quantity": quantity},
                       headers=self._headers())

    async def fetch(self) -> dict:
        data = await _request(self.http, "POST", "/cart/get", json={}, headers=self._headers())
        cart = data.get("cartData")
        if cart is None:
            return {}
        if not isinstance(cart, dict):
            raise RemoteSyncFailure("Cart data missing from response")
        return cart


class CatalogClient:
    def __init__(self, http: httpx.AsyncClient):
        self.http = http

    async def list_products(self, search: Optional[str] = None) -> List[Product]:
        params = {"search": search} if search else None
        data = await _request(self.http, "GET", "/product/list", params=params)
        products = []
        for raw in data.get("products") or []:
            try:
                products.append(Product.model_validate(raw))
            except SchemaError as e:
                logger.warning("Skipping unreadable product %r: %s", raw, e)
        return products


class FilterClient:
    def __init__(self, http: httpx.AsyncClient):
        self.http = http

    @staticmethod
    def _parse(data):
        try:
            return [FilterDefinition.model_validate(raw) for raw in data.get("filters") or []]
        except SchemaError as e:
            raise RemoteSyncFailure(f"Unreadable filter definitions: {e}") from e

    async def list_filters(self) -> List[FilterDefinition]:
        return self._parse(await _request(self.http, "GET", "/filter"))

    async def dynamic_filters(self, category: Optional[str] = None) -> List[FilterDefinition]:
        params = {"category": category} if category else None
        return self._parse(await _request(self.http, "GET", "/filter/dynamic", params=params))


class StockAlertClient:
    def __init__(self, http: httpx.AsyncClient):
        self.http = http

    async def subscribe(self, product_id: str, email: str) -> None:
        await _request(self.http, "POST", "/product/stock-alert",
                       json={"productId": product_id, "email": email})


__all__ = ["StockOracle", "CartPersistence", "CatalogClient", "FilterClient",
           "StockAlertClient", "parse_stock_record"]
