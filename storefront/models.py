# models.py
from mongoengine import (
    Document,
    EmbeddedDocument,
    StringField,
    EmailField,
    IntField,
    FloatField,
    BooleanField,
    DateTimeField,
    DictField,
    ListField,
    EmbeddedDocumentField,
)
from datetime import datetime, timezone
import enum


def utcnow():
    return datetime.now(timezone.utc)


class RoleEnum(str, enum.Enum):
    customer = "customer"
    seller = "seller"


class User(Document):
    name = StringField(required=True, max_length=100)
    email = EmailField(required=True, unique=True)
    username = StringField(required=True, unique=True, max_length=50)
    password_hash = StringField(required=True)
    role = StringField(required=True, default=RoleEnum.customer.value, choices=[r.value for r in RoleEnum])
    # product id -> quantity
    cartItems = DictField(field=IntField(min_value=1), default=dict)
    createdAt = DateTimeField(default=utcnow)

    meta = {
        "collection": "users",
        "strict": False,
    }


class Product(Document):
    name = StringField(required=True, max_length=200)
    description = ListField(StringField(), default=list)
    price = FloatField(required=True, min_value=0)
    offerPrice = FloatField(required=True, min_value=0)
    image = ListField(StringField(), default=list)
    category = StringField(required=True, max_length=100)
    inStock = BooleanField(default=True)
    createdAt = DateTimeField(default=utcnow)

    meta = {
        "collection": "products",
        "ordering": ["-createdAt"],
    }


class Address(Document):
    userId = StringField(required=True)
    firstName = StringField(required=True, max_length=50)
    lastName = StringField(required=True, max_length=50)
    email = EmailField(required=True)
    street = StringField(required=True, max_length=200)
    city = StringField(required=True, max_length=50)
    state = StringField(required=True, max_length=50)
    zipcode = StringField(required=True, max_length=20)
    country = StringField(required=True, max_length=50)
    phone = StringField(required=True, max_length=20)

    meta = {
        "collection": "addresses",
    }


class OrderItem(EmbeddedDocument):
    product = StringField(required=True)
    quantity = IntField(min_value=1, required=True)


class Order(Document):
    userId = StringField(required=True)
    items = ListField(EmbeddedDocumentField(OrderItem))
    amount = FloatField(required=True, min_value=0)
    address = StringField(required=True)
    status = StringField(default="Order Placed", max_length=50)
    paymentType = StringField(required=True, choices=["COD", "Online"])
    isPaid = BooleanField(default=False)
    createdAt = DateTimeField(default=utcnow)
    updatedAt = DateTimeField(required=False, default=None)

    meta = {
        "collection": "orders",
        "ordering": ["-createdAt"],
    }
