class ApiError(Exception):
    """Non-2xx answer from the storefront API."""

    def __init__(self, status_code: int, message: str, payload: dict = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.payload = payload or {}


class SessionExpired(ApiError):
    """The access token was rejected and could not be refreshed."""

    def __init__(self, message: str = "Session expired. Please login again."):
        super().__init__(401, message)


class NetworkError(Exception):
    """The API could not be reached."""


class LoginRequired(Exception):
    """A cart action was attempted without a signed-in user."""
