from pydantic import BaseModel, EmailStr, Field
from typing import Dict, List, Optional


class UserRegister(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    username: Optional[str] = None


class UserLogin(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class RefreshRequest(BaseModel):
    refreshToken: Optional[str] = None


class SellerLogin(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class ProductCreate(BaseModel):
    name: str
    description: List[str] = []
    price: float = Field(..., ge=0)
    offerPrice: float = Field(..., ge=0)
    category: str
    image: List[str] = []
    inStock: bool = True


class ProductIdRequest(BaseModel):
    id: str


class StockUpdate(BaseModel):
    id: str
    inStock: bool


class CartUpdate(BaseModel):
    cartItems: Dict[str, int]
    # Sent by older clients; the token decides whose cart is written
    userId: Optional[str] = None


class AddressIn(BaseModel):
    firstName: str
    lastName: str
    email: EmailStr
    street: str
    city: str
    state: str
    zipcode: str
    country: str
    phone: str


class AddressRequest(BaseModel):
    address: AddressIn


class OrderItemIn(BaseModel):
    product: str
    quantity: int = Field(..., gt=0)


class OrderCreate(BaseModel):
    items: List[OrderItemIn] = []
    address: Optional[str] = None
