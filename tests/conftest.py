import os

# Settings are read at import time, so they must exist before the app is imported
os.environ["ACCESS_TOKEN_SECRET"] = "test-access-secret"
os.environ["REFRESH_TOKEN_SECRET"] = "test-refresh-secret"
os.environ["JWT_ALGORITHM"] = "HS256"
os.environ["ENVIRONMENT"] = "development"
os.environ["ALLOWED_ORIGINS"] = "http://localhost:5173,https://shop.example.com/"
os.environ["SELLER_EMAIL"] = "seller@example.com"
os.environ["SELLER_PASSWORD"] = "seller-pass"
os.environ["TAX_RATE"] = "0.02"
os.environ["DB_HOST"] = "mongodb://localhost:27017"
os.environ["DB_NAME"] = "storefront_test"

import mongomock
import pytest
from fastapi.testclient import TestClient
from mongoengine import disconnect

from main import app
from storefront.database import init_db
from storefront.models import Address, Order, Product, User


@pytest.fixture(autouse=True)
def mongo():
    disconnect(alias="default")
    init_db(mongo_client_class=mongomock.MongoClient)
    yield
    for model in (User, Product, Address, Order):
        model.drop_collection()
    disconnect(alias="default")


@pytest.fixture
def client():
    # Not entered as a context manager: the startup hook would open a real connection
    return TestClient(app)


@pytest.fixture
def user_payload():
    return {
        "name": "Asha Rao",
        "email": "asha@example.com",
        "password": "s3cret-pass",
        "username": "asha",
    }


@pytest.fixture
def registered(client, user_payload):
    response = client.post("/api/user/register", json=user_payload)
    assert response.status_code == 201
    client.cookies.clear()
    return response.json()


@pytest.fixture
def auth_headers(registered):
    return {"Authorization": f"Bearer {registered['token']}"}


@pytest.fixture
def seller_headers(client):
    response = client.post("/api/seller/login", json={"email": "seller@example.com", "password": "seller-pass"})
    assert response.status_code == 200
    client.cookies.clear()
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def make_product():
    def _make(name="Apple", price=12.0, offer_price=10.0, in_stock=True, category="Fruits"):
        product = Product(
            name=name,
            description=["Fresh"],
            price=price,
            offerPrice=offer_price,
            category=category,
            image=["https://img.example.com/apple.png"],
            inStock=in_stock,
        )
        product.save()
        return product
    return _make
