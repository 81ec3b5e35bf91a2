import bcrypt
from bson import ObjectId
from fastapi import HTTPException, Header, Request, status
from jose import jwt, JWTError, ExpiredSignatureError
from datetime import datetime, timedelta, timezone
from typing import Optional
from storefront import config
from storefront.models import User, RoleEnum

ACCESS_COOKIE = "token"
REFRESH_COOKIE = "refreshToken"
SELLER_COOKIE = "sellerToken"


def hash_password(pw): return bcrypt.hashpw(pw.encode(), bcrypt.gensalt()).decode()

def verify_password(pw, hash): return bcrypt.checkpw(pw.encode(), hash.encode())

def create_access_token(data: dict):
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, config.ACCESS_TOKEN_SECRET, algorithm=config.ALGORITHM)

def create_refresh_token(data: dict):
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(days=config.REFRESH_TOKEN_EXPIRE_DAYS)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, config.REFRESH_TOKEN_SECRET, algorithm=config.ALGORITHM)

def decode_access_token(token):
    return jwt.decode(token, config.ACCESS_TOKEN_SECRET, algorithms=[config.ALGORITHM])

def decode_refresh_token(token):
    return jwt.decode(token, config.REFRESH_TOKEN_SECRET, algorithms=[config.ALGORITHM])


def token_claims(user: User) -> dict:
    return {
        "id": str(user.id),
        "email": user.email,
        "role": user.role,
    }


def seller_claims() -> dict:
    return {
        "id": RoleEnum.seller.value,
        "email": config.SELLER_EMAIL,
        "role": RoleEnum.seller.value,
    }


def extract_token(request: Request, authorization: Optional[str], cookie_name: str) -> Optional[str]:
    """Bearer header wins over the cookie, so non-browser clients can ignore cookies entirely."""
    if authorization and authorization.startswith("Bearer "):
        token = authorization.split(" ", 1)[1].strip()
        if token:
            return token
    return request.cookies.get(cookie_name) or None


def decode_or_401(token: str) -> dict:
    try:
        return decode_access_token(token)
    except ExpiredSignatureError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token expired")
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")


def get_current_user(request: Request, authorization: Optional[str] = Header(None)) -> User:
    """Dependency resolving the signed-in customer from the Authorization header or the `token` cookie."""
    token = extract_token(request, authorization, ACCESS_COOKIE)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")

    payload = decode_or_401(token)

    user_id = payload.get("id")
    if not user_id or not ObjectId.is_valid(user_id):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    user = User.objects(id=ObjectId(user_id)).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
    return user


def get_current_seller(request: Request, authorization: Optional[str] = Header(None)) -> dict:
    """Dependency accepting only tokens minted by the seller login."""
    token = extract_token(request, authorization, SELLER_COOKIE)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authorized")

    payload = decode_or_401(token)
    if payload.get("role") != RoleEnum.seller.value:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authorized")
    return payload
