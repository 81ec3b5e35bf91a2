from fastapi import APIRouter, Depends, HTTPException, status
from bson import ObjectId
from mongoengine.queryset.visitor import Q
from typing import Dict, List
from storefront import auth, config, schemas
from storefront.models import Address, Order, OrderItem, Product, User
from storefront.helpers.serialize import to_dict

router = APIRouter(prefix="/api/order", tags=["Order"])


def order_amount(lines: List[tuple], tax_rate: float) -> float:
    """Subtotal of offer price x quantity, plus tax, rounded to cents."""
    subtotal = sum(product.offerPrice * quantity for product, quantity in lines)
    return round(subtotal + subtotal * tax_rate, 2)


def expand_orders(orders) -> List[dict]:
    """Replace product and address ids with the documents they point at."""
    orders = list(orders)
    product_ids = {ObjectId(item.product) for order in orders for item in order.items if ObjectId.is_valid(item.product)}
    address_ids = {ObjectId(order.address) for order in orders if ObjectId.is_valid(order.address)}

    products: Dict[str, dict] = {str(p.id): to_dict(p) for p in Product.objects(id__in=list(product_ids))}
    addresses: Dict[str, dict] = {str(a.id): to_dict(a) for a in Address.objects(id__in=list(address_ids))}

    expanded = []
    for order in orders:
        data = to_dict(order)
        for item in data.get("items", []):
            item["product"] = products.get(item["product"], item["product"])
        data["address"] = addresses.get(data["address"], data["address"])
        expanded.append(data)
    return expanded


@router.post("/cod", status_code=status.HTTP_201_CREATED)
def place_order_cod(data: schemas.OrderCreate, user: User = Depends(auth.get_current_user)):
    if not data.address or not data.items:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid data")

    if not ObjectId.is_valid(data.address) or not Address.objects(id=ObjectId(data.address), userId=str(user.id)).first():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Address not found")

    lines = []
    for item in data.items:
        if not ObjectId.is_valid(item.product):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid product ID: {item.product}")
        product = Product.objects(id=ObjectId(item.product)).first()
        if not product:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Product not found: {item.product}")
        if not product.inStock:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Product out of stock: {product.name}")
        lines.append((product, item.quantity))

    order = Order(
        userId=str(user.id),
        items=[OrderItem(product=str(product.id), quantity=quantity) for product, quantity in lines],
        amount=order_amount(lines, config.TAX_RATE),
        address=data.address,
        paymentType="COD",
        isPaid=False,
    )
    order.save()

    # Ordered items leave the cart
    user.cartItems = {}
    user.save()

    print(f"[LOG] COD order {order.id} placed by {user.id} for {order.amount}")
    return {"success": True, "message": "Order Placed Successfully", "order": to_dict(order)}


@router.get("/user")
def get_user_orders(user: User = Depends(auth.get_current_user)):
    orders = Order.objects(Q(userId=str(user.id)) & (Q(paymentType="COD") | Q(isPaid=True))).order_by("-createdAt")
    return {"success": True, "orders": expand_orders(orders)}


@router.get("/seller", dependencies=[Depends(auth.get_current_seller)])
def get_all_orders():
    orders = Order.objects(Q(paymentType="COD") | Q(isPaid=True)).order_by("-createdAt")
    return {"success": True, "orders": expand_orders(orders)}
