from mongoengine import connect
import certifi
from storefront import config


def init_db(**overrides):
    """Open the default mongoengine connection. Keyword arguments override the defaults."""
    settings = {
        "db": config.DB_NAME,
        "host": config.DB_HOST,
        "alias": "default",
    }
    if config.DB_HOST.startswith("mongodb+srv://") or "tls=true" in config.DB_HOST:
        settings["tlsCAFile"] = certifi.where()
    settings.update(overrides)
    print(f"[LOG] Connecting to MongoDB database '{settings['db']}'")
    return connect(**settings)
