import threading
from typing import Callable, Dict, Optional
from storefront.client.errors import ApiError, NetworkError

DEFAULT_SYNC_DELAY = 1.0


class CartSyncer:
    """
    Debounces cart writes to the backend.

    Every schedule() replaces the pending cart and restarts the timer, so a
    burst of edits produces one request carrying the last cart. Pushes are
    serialised; failures are logged and dropped, the local cart stays as is.
    """

    def __init__(self, push: Callable[[Dict[str, int]], None], delay: float = DEFAULT_SYNC_DELAY):
        self._push = push
        self.delay = delay
        self._lock = threading.Lock()
        self._push_lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._pending: Optional[Dict[str, int]] = None
        self._inflight = 0
        # Bumped on every edit and every finished push
        self._revision = 0

    @property
    def pending(self) -> bool:
        """True while a cart is waiting for the timer or still on its way to the server."""
        with self._lock:
            return self._pending is not None or self._inflight > 0

    @property
    def revision(self) -> int:
        with self._lock:
            return self._revision

    def schedule(self, cart: Dict[str, int]):
        with self._lock:
            self._pending = dict(cart)
            self._revision += 1
            if self._timer:
                self._timer.cancel()
            self._timer = threading.Timer(self.delay, self.flush)
            self._timer.daemon = True
            self._timer.start()

    def flush(self) -> bool:
        """Push the pending cart now. Returns True when a push succeeded."""
        with self._lock:
            cart, self._pending = self._pending, None
            if self._timer:
                self._timer.cancel()
                self._timer = None
            if cart is None:
                return False
            self._inflight += 1

        try:
            with self._push_lock:
                try:
                    self._push(cart)
                except (ApiError, NetworkError) as e:
                    print(f"[ERROR] Cart sync failed: {e}")
                    return False
            return True
        finally:
            with self._lock:
                self._inflight -= 1
                self._revision += 1

    def cancel(self):
        with self._lock:
            self._pending = None
            if self._timer:
                self._timer.cancel()
                self._timer = None
