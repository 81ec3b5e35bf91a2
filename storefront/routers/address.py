from fastapi import APIRouter, Depends, status
from storefront import auth, schemas
from storefront.models import Address, User
from storefront.helpers.serialize import to_dict

router = APIRouter(prefix="/api/address", tags=["Address"])


@router.post("/add", status_code=status.HTTP_201_CREATED)
def add_address(data: schemas.AddressRequest, user: User = Depends(auth.get_current_user)):
    address = Address(userId=str(user.id), **data.address.model_dump())
    address.save()
    return {"success": True, "message": "Address added successfully", "address": to_dict(address)}


@router.get("/get")
def get_addresses(user: User = Depends(auth.get_current_user)):
    addresses = [to_dict(address) for address in Address.objects(userId=str(user.id))]
    return {"success": True, "addresses": addresses}
