"""
Cross-origin behaviour: credentialed responses name the exact origin,
unknown origins are refused.
"""
from storefront.cors import build_allowlist, is_allowed_origin, normalize_origin

LOCAL = "http://localhost:5173"
PROD = "https://shop.example.com"


def test_trailing_slash_is_normalized():
    assert normalize_origin("https://shop.example.com/") == PROD
    assert build_allowlist([PROD, PROD + "/", "", LOCAL]) == [PROD, LOCAL]


def test_missing_origin_is_allowed():
    assert is_allowed_origin(None, [LOCAL])
    assert is_allowed_origin("", [LOCAL])
    assert not is_allowed_origin("https://evil.example.com", [LOCAL])


def test_allowed_origin_gets_credentialed_headers(client):
    response = client.get("/api/health", headers={"Origin": LOCAL})

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == LOCAL
    assert response.headers["access-control-allow-credentials"] == "true"
    assert response.json()["origin"] == LOCAL


def test_origin_configured_with_trailing_slash(client):
    response = client.get("/api/health", headers={"Origin": PROD})
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == PROD


def test_unknown_origin_is_rejected(client):
    response = client.get("/api/health", headers={"Origin": "https://evil.example.com"})

    assert response.status_code == 403
    data = response.json()
    assert data["success"] is False
    assert data["message"] == "CORS: Origin not allowed"
    assert LOCAL in data["allowedOrigins"]
    assert "access-control-allow-origin" not in response.headers


def test_preflight_for_allowed_origin(client):
    response = client.options(
        "/api/cart/update",
        headers={
            "Origin": LOCAL,
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type, Authorization",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == LOCAL
    assert response.headers["access-control-allow-credentials"] == "true"
    assert "POST" in response.headers["access-control-allow-methods"]


def test_preflight_for_unknown_origin(client):
    response = client.options(
        "/api/cart/update",
        headers={"Origin": "https://evil.example.com", "Access-Control-Request-Method": "POST"},
    )
    assert response.status_code == 403


def test_test_cors_endpoint_lists_allowlist(client):
    response = client.get("/api/test-cors", headers={"Origin": LOCAL})
    assert response.json()["allowedOrigins"] == [LOCAL, PROD]


def test_root_banner(client):
    data = client.get("/").json()
    assert data["success"] is True
    assert data["message"] == "E-commerce API is running"
    assert data["cors"] == [LOCAL, PROD]


def test_allowed_origin_with_trailing_slash_gets_headers(client):
    response = client.get("/api/health", headers={"Origin": PROD + "/"})
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == PROD + "/"
    assert response.headers["access-control-allow-credentials"] == "true"


def test_server_error_keeps_cors_headers(client, make_product, monkeypatch):
    make_product()

    def broken(document, exclude=()):
        raise RuntimeError("boom")

    monkeypatch.setattr("storefront.routers.product.to_dict", broken)
    response = client.get("/api/product/list", headers={"Origin": LOCAL})

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Server error"}
    assert response.headers["access-control-allow-origin"] == LOCAL
    assert response.headers["access-control-allow-credentials"] == "true"
