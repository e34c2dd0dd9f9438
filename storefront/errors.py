class StorefrontError(Exception):
    """Base class for every failure the storefront reports to the shopper."""


class ValidationError(StorefrontError):
    pass


class NotFound(StorefrontError):
    pass


class OutOfStock(StorefrontError):
    def __init__(self, product_id: str, size=None):
        self.product_id = product_id
        self.size = size
        super().__init__("Out of stock")


class QuantityExceeded(StorefrontError):
    def __init__(self, available: int, in_cart: int):
        self.available = available
        self.in_cart = in_cart
        super().__init__(
            f"Cannot add more. Only {available} available, {in_cart} already in cart.")


class RemoteSyncFailure(StorefrontError):
    """A call to the backend failed or answered with something unusable."""


__all__ = ["StorefrontError", "ValidationError", "NotFound", "OutOfStock",
           "QuantityExceeded", "RemoteSyncFailure"]
