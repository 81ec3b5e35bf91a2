import hmac
from fastapi import APIRouter, Depends, HTTPException, Response, status
from storefront import auth, config, schemas
from storefront.helpers.cookies import set_auth_cookie, clear_auth_cookie, access_max_age

router = APIRouter(prefix="/api/seller", tags=["Seller"])


@router.post("/login")
def seller_login(data: schemas.SellerLogin, response: Response):
    """Seller dashboard login against the credentials configured in the environment."""
    if not config.SELLER_EMAIL or not config.SELLER_PASSWORD:
        print("[ERROR] SELLER_EMAIL / SELLER_PASSWORD not configured.")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Seller login is not configured")

    if not data.email or not data.password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email and password required")

    email_ok = hmac.compare_digest(data.email.strip().lower().encode(), config.SELLER_EMAIL.lower().encode())
    password_ok = hmac.compare_digest(data.password.encode(), config.SELLER_PASSWORD.encode())
    if not (email_ok and password_ok):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid credentials")

    token = auth.create_access_token(auth.seller_claims())
    set_auth_cookie(response, auth.SELLER_COOKIE, token, access_max_age())
    return {"success": True, "message": "Logged in", "token": token}


@router.get("/isauth")
def seller_is_auth(seller: dict = Depends(auth.get_current_seller)):
    return {"success": True, "seller": {"email": seller.get("email")}}


@router.get("/logout")
def seller_logout(response: Response):
    clear_auth_cookie(response, auth.SELLER_COOKIE)
    return {"success": True, "message": "Logged out successfully"}
