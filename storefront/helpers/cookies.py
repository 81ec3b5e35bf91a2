from fastapi import Response
from storefront import config


def cookie_options() -> dict:
    """Cookie attributes shared by set and clear; a browser only drops a cookie when these match."""
    return {
        "httponly": True,
        "secure": config.IS_PRODUCTION,
        "samesite": "none" if config.IS_PRODUCTION else "lax",
        "path": "/",
    }


def set_auth_cookie(response: Response, name: str, value: str, max_age: int):
    response.set_cookie(name, value, max_age=max_age, **cookie_options())


def clear_auth_cookie(response: Response, name: str):
    response.delete_cookie(name, **cookie_options())


def access_max_age() -> int:
    return config.ACCESS_TOKEN_EXPIRE_MINUTES * 60


def refresh_max_age() -> int:
    return config.REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60
