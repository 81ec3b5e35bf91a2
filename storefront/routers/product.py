from fastapi import APIRouter, Depends, HTTPException, status
from bson import ObjectId
from storefront import auth, schemas
from storefront.models import Product
from storefront.helpers.serialize import to_dict

router = APIRouter(prefix="/api/product", tags=["Product"])


def find_product(product_id: str) -> Product:
    if not ObjectId.is_valid(product_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid product ID")
    product = Product.objects(id=ObjectId(product_id)).first()
    if not product:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return product


@router.post("/add", status_code=status.HTTP_201_CREATED, dependencies=[Depends(auth.get_current_seller)])
def add_product(data: schemas.ProductCreate):
    if data.offerPrice > data.price:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Offer price cannot exceed price")

    product = Product(**data.model_dump())
    product.save()
    print(f"[LOG] Product added: {product.id} ({product.name})")
    return {"success": True, "message": "Product Added", "product": to_dict(product)}


@router.get("/list")
def list_products():
    products = [to_dict(product) for product in Product.objects.order_by("-createdAt")]
    return {"success": True, "products": products}


@router.post("/id")
def get_product_by_body(data: schemas.ProductIdRequest):
    return {"success": True, "product": to_dict(find_product(data.id))}


@router.post("/stock", dependencies=[Depends(auth.get_current_seller)])
def change_stock(data: schemas.StockUpdate):
    product = find_product(data.id)
    product.inStock = data.inStock
    product.save()
    return {"success": True, "message": "Stock Updated", "product": to_dict(product)}


@router.get("/{product_id}")
def get_product(product_id: str):
    return {"success": True, "product": to_dict(find_product(product_id))}
