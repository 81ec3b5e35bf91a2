from fastapi import APIRouter, Body, Depends, HTTPException, Request, Response, status
from jose import JWTError
from bson import ObjectId
from mongoengine.errors import NotUniqueError
from mongoengine.queryset.visitor import Q
from typing import Optional
from storefront import auth, schemas
from storefront.models import User
from storefront.helpers.cookies import set_auth_cookie, clear_auth_cookie, access_max_age, refresh_max_age
from storefront.helpers.serialize import user_to_dict

router = APIRouter(prefix="/api/user", tags=["User"])


def issue_session(response: Response, user: User) -> dict:
    """Mint an access/refresh pair and mirror it into httpOnly cookies for browser clients."""
    claims = auth.token_claims(user)
    access_token = auth.create_access_token(claims)
    refresh_token = auth.create_refresh_token(claims)

    set_auth_cookie(response, auth.ACCESS_COOKIE, access_token, access_max_age())
    set_auth_cookie(response, auth.REFRESH_COOKIE, refresh_token, refresh_max_age())

    return {"token": access_token, "refreshToken": refresh_token}


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register_user(data: schemas.UserRegister, response: Response):
    if not (data.name and data.email and data.password and data.username):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="All fields are required")

    email = data.email.strip().lower()
    username = data.username.strip()

    if User.objects(Q(email=email) | Q(username=username)).first():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User already exists")

    new_user = User(
        name=data.name.strip(),
        email=email,
        username=username,
        password_hash=auth.hash_password(data.password),
    )
    try:
        new_user.save()
    except NotUniqueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User already exists")

    print(f"[LOG] Registered user {new_user.email}")
    tokens = issue_session(response, new_user)

    return {
        "success": True,
        "message": "Registration successful",
        **tokens,
        "user": user_to_dict(new_user),
    }


@router.post("/login")
def login_user(data: schemas.UserLogin, response: Response):
    if not data.email or not data.password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email and password required")

    user = User.objects(email=data.email.strip().lower()).first()

    # Same message for unknown email and wrong password
    if not user or not auth.verify_password(data.password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid credentials")

    tokens = issue_session(response, user)

    return {
        "success": True,
        "message": "Login successful",
        **tokens,
        "user": user_to_dict(user),
    }


@router.get("/isauth")
def is_auth(user: User = Depends(auth.get_current_user)):
    return {"success": True, "user": user_to_dict(user)}


@router.post("/refresh")
def refresh_session(
    request: Request,
    response: Response,
    data: Optional[schemas.RefreshRequest] = Body(None),
):
    """
    Trades a refresh token (body or cookie) for a fresh access/refresh pair.
    The refresh token is rotated on every call.
    """
    refresh_token = (data.refreshToken if data else None) or request.cookies.get(auth.REFRESH_COOKIE)
    if not refresh_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Refresh token missing")

    try:
        payload = auth.decode_refresh_token(refresh_token)
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid refresh token")

    user_id = payload.get("id")
    user = User.objects(id=ObjectId(user_id)).first() if user_id and ObjectId.is_valid(user_id) else None
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")

    tokens = issue_session(response, user)
    return {"success": True, "message": "Token refreshed", **tokens}


@router.get("/logout")
def logout(response: Response):
    clear_auth_cookie(response, auth.ACCESS_COOKIE)
    clear_auth_cookie(response, auth.REFRESH_COOKIE)
    return {"success": True, "message": "Logged out successfully"}
