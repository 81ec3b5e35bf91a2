from typing import Dict, List, Optional
from storefront.client.api import ApiClient
from storefront.client.errors import ApiError, LoginRequired, NetworkError, SessionExpired
from storefront.client.storage import LocalStore
from storefront.client.sync import CartSyncer, DEFAULT_SYNC_DELAY


def cart_count(cart_items: Dict[str, int]) -> int:
    if not isinstance(cart_items, dict):
        return 0
    return sum(quantity or 0 for quantity in cart_items.values())


def cart_total(cart_items: Dict[str, int], products: List[dict]) -> float:
    """Offer price (falling back to list price) times quantity; products not in the catalog are skipped."""
    by_id = {product.get("_id"): product for product in products if product}
    total = 0.0
    for product_id, quantity in (cart_items or {}).items():
        product = by_id.get(product_id)
        if not product or quantity <= 0:
            continue
        price = product.get("offerPrice") or product.get("price") or 0
        total += price * quantity
    return round(total, 2)


class StoreSession:
    """
    Client-side auth and cart state for one shopper.

    The cached user and cart are served immediately from the local store and
    reconciled with the backend when fetch_user() runs. Cart edits are applied
    locally first, persisted to the store, and pushed to the backend through a
    debounced CartSyncer.
    """

    def __init__(self, base_url: str, store: Optional[LocalStore] = None, api: Optional[ApiClient] = None,
                 session=None, sync_delay: float = DEFAULT_SYNC_DELAY):
        self.store = store or LocalStore()
        self.api = api or ApiClient(base_url, self.store, session=session)
        self.user: Optional[dict] = self._load_cached_user()
        self.cart_items: Dict[str, int] = self._load_cached_cart()
        self.products: List[dict] = []
        self.is_seller = False
        self.initialized = False
        self.last_error: Optional[str] = None
        self._syncer = CartSyncer(self._push_cart, delay=sync_delay)

    # --- local cache ---

    def _load_cached_user(self) -> Optional[dict]:
        user = self.store.get("user")
        # A user without a token is stale
        if user and self.store.get("token"):
            return user
        return None

    def _load_cached_cart(self) -> Dict[str, int]:
        cart = self.store.get("cartItems")
        return dict(cart) if isinstance(cart, dict) else {}

    def _set_user(self, user: Optional[dict]):
        self.user = user
        if user:
            self.store.set("user", user)
        else:
            self.store.remove("user")

    def _set_cart(self, cart_items: Dict[str, int], sync: bool = True):
        self.cart_items = cart_items
        self.store.set("cartItems", cart_items)
        if sync and self.user:
            self._syncer.schedule(cart_items)

    def _adopt_session(self, data: dict):
        if data.get("token"):
            self.store.set("token", data["token"])
        if data.get("refreshToken"):
            self.store.set("refreshToken", data["refreshToken"])
        user = data.get("user") or {}
        self._set_user(user)
        if isinstance(user.get("cartItems"), dict):
            self._set_cart(dict(user["cartItems"]), sync=False)

    def _drop_session(self):
        self.store.remove("token", "refreshToken", "user")
        self.user = None
        self.is_seller = False

    # --- auth ---

    def fetch_user(self) -> Optional[dict]:
        if not self.store.get("token"):
            self._set_user(None)
            return None

        revision = self._syncer.revision
        try:
            data = self.api.get("/api/user/isauth")
        except NetworkError as e:
            # Offline: keep serving the cached user and cart
            print(f"[LOG] Auth check failed, keeping cached session: {e}")
            return self.user
        except ApiError as e:
            if e.status_code == 401:
                print(f"[LOG] Stored session rejected: {e.message}")
                self._drop_session()
                return None
            print(f"[ERROR] Auth check failed: {e.message}")
            return self.user

        if not data.get("success"):
            self._drop_session()
            return None

        user = data["user"]
        self._set_user(user)
        # The server copy is only adopted when no local edit is queued, in flight,
        # or landed while the auth check was running
        stale = self._syncer.pending or self._syncer.revision != revision
        if isinstance(user.get("cartItems"), dict) and not stale:
            self._set_cart(dict(user["cartItems"]), sync=False)
        return user

    def login(self, credentials: dict) -> bool:
        try:
            data = self.api.post("/api/user/login", json=credentials, auth=False)
        except (ApiError, NetworkError) as e:
            self.last_error = getattr(e, "message", None) or "Login failed"
            print(f"[ERROR] Login failed: {self.last_error}")
            return False

        self._adopt_session(data)
        self.last_error = None
        return True

    def register(self, user_data: dict) -> bool:
        """Create the account; the session returned by the server signs the user in."""
        try:
            data = self.api.post("/api/user/register", json=user_data, auth=False)
        except (ApiError, NetworkError) as e:
            self.last_error = getattr(e, "message", None) or "Registration failed"
            print(f"[ERROR] Registration failed: {self.last_error}")
            return False

        if not data.get("token"):
            return self.login({"email": user_data.get("email"), "password": user_data.get("password")})
        self._adopt_session(data)
        self.last_error = None
        return True

    def logout(self):
        self._syncer.flush()
        try:
            self.api.get("/api/user/logout")
        except (ApiError, NetworkError) as e:
            print(f"[LOG] Logout request failed (ignored): {e}")

        self._syncer.cancel()
        self._drop_session()
        self.store.remove("cartItems")
        self.cart_items = {}

    def seller_login(self, email: str, password: str) -> bool:
        try:
            data = self.api.post("/api/seller/login", json={"email": email, "password": password}, auth=False)
        except (ApiError, NetworkError) as e:
            self.last_error = getattr(e, "message", None) or "Login failed"
            return False
        self.store.set("sellerToken", data["token"])
        self.is_seller = True
        return True

    def fetch_seller(self) -> bool:
        token = self.store.get("sellerToken")
        if not token:
            self.is_seller = False
            return False
        try:
            data = self.api.get("/api/seller/isauth", token=token)
            self.is_seller = bool(data.get("success"))
        except (ApiError, NetworkError):
            self.is_seller = False
        return self.is_seller

    # --- cart ---

    def add_to_cart(self, item_id: str):
        if not self.user:
            raise LoginRequired("Please login to add items")
        cart = dict(self.cart_items)
        cart[item_id] = cart.get(item_id, 0) + 1
        self._set_cart(cart)

    def update_cart(self, item_id: str, quantity: int):
        if not self.user:
            return
        cart = dict(self.cart_items)
        if quantity <= 0:
            cart.pop(item_id, None)
        else:
            cart[item_id] = quantity
        self._set_cart(cart)

    def remove_from_cart(self, item_id: str):
        if not self.user:
            return
        cart = dict(self.cart_items)
        cart.pop(item_id, None)
        self._set_cart(cart)

    def clear_cart(self):
        self._set_cart({})

    def get_count(self) -> int:
        return cart_count(self.cart_items)

    def get_total(self) -> float:
        return cart_total(self.cart_items, self.products)

    def _push_cart(self, cart_items: Dict[str, int]):
        user = self.user
        if not user or not user.get("_id"):
            return
        try:
            self.api.post("/api/cart/update", json={"userId": user["_id"], "cartItems": cart_items})
        except SessionExpired:
            self._drop_session()
            raise

    def flush(self) -> bool:
        return self._syncer.flush()

    # --- catalog ---

    def fetch_products(self) -> List[dict]:
        try:
            data = self.api.get("/api/product/list", auth=False)
        except (ApiError, NetworkError) as e:
            print(f"[ERROR] Fetch products failed: {e}")
            return self.products
        if data.get("success"):
            self.products = data.get("products", [])
        return self.products

    def initialize(self):
        """Reconcile the cached session and load the catalog; runs once."""
        if self.initialized:
            return
        self.fetch_user()
        self.fetch_products()
        if self.store.get("sellerToken"):
            self.fetch_seller()
        self.initialized = True

    def close(self):
        self._syncer.flush()
        self._syncer.cancel()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
