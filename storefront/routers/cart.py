from fastapi import APIRouter, Depends, HTTPException, status
from bson import ObjectId
from typing import Dict
from storefront import auth, schemas
from storefront.models import User

router = APIRouter(prefix="/api/cart", tags=["Cart"])


def clean_cart(cart_items: Dict[str, int]) -> Dict[str, int]:
    """Drop non-positive quantities; reject keys that are not product ids."""
    cleaned = {}
    for product_id, quantity in cart_items.items():
        if not ObjectId.is_valid(product_id):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid product ID: {product_id}")
        if quantity > 0:
            cleaned[product_id] = quantity
    return cleaned


@router.post("/update")
def update_cart(data: schemas.CartUpdate, user: User = Depends(auth.get_current_user)):
    """
    Replaces the signed-in user's cart with the posted mapping.
    A `userId` in the body is ignored; the token decides whose cart is written.
    """
    if data.userId and data.userId != str(user.id):
        print(f"[LOG] Ignoring cart userId {data.userId} for token user {user.id}")

    user.cartItems = clean_cart(data.cartItems)
    user.save()
    return {"success": True, "message": "Cart Updated", "cartItems": user.cartItems}


@router.get("")
def get_cart(user: User = Depends(auth.get_current_user)):
    return {"success": True, "cartItems": user.cartItems or {}}
