import threading
import requests
from typing import Optional
from storefront.client.errors import ApiError, NetworkError, SessionExpired
from storefront.client.storage import LocalStore

REFRESH_PATH = "/api/user/refresh"
DEFAULT_TIMEOUT = 10


class ApiClient:
    """
    HTTP client for the storefront API.

    Attaches the stored access token as a bearer header. A 401 triggers one
    refresh attempt with the stored refresh token and a single retry of the
    original request; when the refresh is refused the stored tokens are
    dropped and SessionExpired is raised.
    """

    def __init__(self, base_url: str, store: LocalStore, session=None, timeout: float = DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.store = store
        self.session = session or requests.Session()
        self.timeout = timeout
        self._refresh_lock = threading.Lock()

    def get(self, path: str, **kwargs) -> dict:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, json: Optional[dict] = None, **kwargs) -> dict:
        return self.request("POST", path, json=json, **kwargs)

    def request(self, method: str, path: str, json: Optional[dict] = None, auth: bool = True,
                token: Optional[str] = None, retry: bool = True) -> dict:
        # An explicit token (e.g. the seller's) is never refreshed
        stored_token = None
        if auth and token is None:
            stored_token = self.store.get("token")
        bearer = token or stored_token

        headers = {"Accept": "application/json"}
        if auth and bearer:
            headers["Authorization"] = f"Bearer {bearer}"

        try:
            response = self.session.request(
                method, f"{self.base_url}{path}", json=json, headers=headers, timeout=self.timeout
            )
        except requests.RequestException as e:
            raise NetworkError(f"{method} {path} failed: {e}") from e

        if response.status_code == 401 and retry and stored_token and path != REFRESH_PATH:
            if self.refresh(stale_token=stored_token):
                return self.request(method, path, json=json, auth=auth, retry=False)

        return self._parse(response)

    def refresh(self, stale_token: Optional[str] = None) -> bool:
        """Swap the stored refresh token for new tokens. False when there is nothing to refresh with."""
        with self._refresh_lock:
            current = self.store.get("token")
            if stale_token and current and current != stale_token:
                # Another thread already refreshed while we waited
                return True

            refresh_token = self.store.get("refreshToken")
            if not refresh_token:
                return False

            try:
                data = self.request("POST", REFRESH_PATH, json={"refreshToken": refresh_token}, auth=False, retry=False)
            except ApiError as e:
                print(f"[LOG] Refresh refused ({e.status_code}): {e.message}")
                self.store.remove("token", "refreshToken")
                raise SessionExpired()

            self.store.set("token", data["token"])
            self.store.set("refreshToken", data["refreshToken"])
            return True

    @staticmethod
    def _parse(response) -> dict:
        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {"payload": data}

        if not 200 <= response.status_code < 300:
            message = data.get("message") or f"HTTP {response.status_code}"
            raise ApiError(response.status_code, message, data)
        return data
