"""
Server-side cart persistence, addresses and cash-on-delivery orders.
"""
import pytest

from storefront.models import User

ADDRESS = {
    "firstName": "Asha",
    "lastName": "Rao",
    "email": "asha@example.com",
    "street": "12 MG Road",
    "city": "Pune",
    "state": "MH",
    "zipcode": "411001",
    "country": "India",
    "phone": "+919800000000",
}


@pytest.fixture
def address_id(client, auth_headers):
    response = client.post("/api/address/add", json={"address": ADDRESS}, headers=auth_headers)
    assert response.status_code == 201
    return response.json()["address"]["_id"]


class TestCart:

    def test_update_replaces_cart(self, client, auth_headers, registered):
        cart = {"65a1b2c3d4e5f60718293a4b": 2, "65a1b2c3d4e5f60718293a4c": 1}
        response = client.post("/api/cart/update", json={"cartItems": cart}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["cartItems"] == cart

        response = client.post("/api/cart/update", json={"cartItems": {"65a1b2c3d4e5f60718293a4c": 4}}, headers=auth_headers)
        assert response.json()["cartItems"] == {"65a1b2c3d4e5f60718293a4c": 4}

        user = User.objects(email="asha@example.com").first()
        assert dict(user.cartItems) == {"65a1b2c3d4e5f60718293a4c": 4}

    def test_zero_quantities_dropped(self, client, auth_headers):
        cart = {"65a1b2c3d4e5f60718293a4b": 0, "65a1b2c3d4e5f60718293a4c": 3, "65a1b2c3d4e5f60718293a4d": -1}
        response = client.post("/api/cart/update", json={"cartItems": cart}, headers=auth_headers)
        assert response.json()["cartItems"] == {"65a1b2c3d4e5f60718293a4c": 3}

    def test_invalid_product_key(self, client, auth_headers):
        response = client.post("/api/cart/update", json={"cartItems": {"apple": 1}}, headers=auth_headers)
        assert response.status_code == 400

    def test_body_user_id_is_ignored(self, client, auth_headers, registered):
        response = client.post(
            "/api/cart/update",
            json={"userId": "65a1b2c3d4e5f60718293aaa", "cartItems": {"65a1b2c3d4e5f60718293a4b": 1}},
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert client.get("/api/cart", headers=auth_headers).json()["cartItems"] == {"65a1b2c3d4e5f60718293a4b": 1}

    def test_update_requires_auth(self, client):
        response = client.post("/api/cart/update", json={"cartItems": {}})
        assert response.status_code == 401


class TestAddress:

    def test_add_and_get(self, client, auth_headers, address_id):
        addresses = client.get("/api/address/get", headers=auth_headers).json()["addresses"]
        assert [a["_id"] for a in addresses] == [address_id]
        assert addresses[0]["city"] == "Pune"

    def test_invalid_email(self, client, auth_headers):
        response = client.post("/api/address/add", json={"address": dict(ADDRESS, email="nope")}, headers=auth_headers)
        assert response.status_code == 400


class TestOrders:

    def test_cod_order(self, client, auth_headers, address_id, make_product):
        apple = make_product(offer_price=10.0)
        pear = make_product(name="Pear", offer_price=2.5)
        client.post("/api/cart/update", json={"cartItems": {str(apple.id): 3}}, headers=auth_headers)

        response = client.post(
            "/api/order/cod",
            json={"items": [{"product": str(apple.id), "quantity": 3}, {"product": str(pear.id), "quantity": 2}],
                  "address": address_id},
            headers=auth_headers,
        )

        assert response.status_code == 201
        order = response.json()["order"]
        # (30 + 5) * 1.02
        assert order["amount"] == 35.7
        assert order["paymentType"] == "COD"
        assert order["isPaid"] is False
        assert order["status"] == "Order Placed"

        assert client.get("/api/cart", headers=auth_headers).json()["cartItems"] == {}

    def test_cod_order_invalid_data(self, client, auth_headers, address_id):
        response = client.post("/api/order/cod", json={"items": [], "address": address_id}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid data"

    def test_cod_order_foreign_address(self, client, auth_headers, make_product):
        apple = make_product()
        response = client.post(
            "/api/order/cod",
            json={"items": [{"product": str(apple.id), "quantity": 1}], "address": "65a1b2c3d4e5f60718293a4b"},
            headers=auth_headers,
        )
        assert response.status_code == 404

    def test_cod_order_out_of_stock(self, client, auth_headers, address_id, make_product):
        apple = make_product(in_stock=False)
        response = client.post(
            "/api/order/cod",
            json={"items": [{"product": str(apple.id), "quantity": 1}], "address": address_id},
            headers=auth_headers,
        )
        assert response.status_code == 400

    def test_user_and_seller_listings(self, client, auth_headers, seller_headers, address_id, make_product):
        apple = make_product()
        client.post(
            "/api/order/cod",
            json={"items": [{"product": str(apple.id), "quantity": 1}], "address": address_id},
            headers=auth_headers,
        )

        orders = client.get("/api/order/user", headers=auth_headers).json()["orders"]
        assert len(orders) == 1
        assert orders[0]["items"][0]["product"]["name"] == "Apple"
        assert orders[0]["address"]["city"] == "Pune"

        assert client.get("/api/order/seller", headers=auth_headers).status_code == 401
        seller_orders = client.get("/api/order/seller", headers=seller_headers).json()["orders"]
        assert len(seller_orders) == 1
