from bson import ObjectId
from fastapi.encoders import jsonable_encoder


def to_dict(document, exclude=()):
    """Turn a mongoengine document into a JSON-safe dict keyed like the raw Mongo record (`_id` as a string)."""
    data = jsonable_encoder(document.to_mongo().to_dict(), custom_encoder={ObjectId: str})
    for field in exclude:
        data.pop(field, None)
    return data


def user_to_dict(user):
    return to_dict(user, exclude=("password_hash",))
