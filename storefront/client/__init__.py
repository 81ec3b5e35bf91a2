from storefront.client.api import ApiClient
from storefront.client.errors import ApiError, LoginRequired, NetworkError, SessionExpired
from storefront.client.session import StoreSession, cart_count, cart_total
from storefront.client.storage import LocalStore
from storefront.client.sync import CartSyncer

__all__ = [
    "ApiClient",
    "ApiError",
    "CartSyncer",
    "LocalStore",
    "LoginRequired",
    "NetworkError",
    "SessionExpired",
    "StoreSession",
    "cart_count",
    "cart_total",
]
