import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# JWT secrets and lifetimes
ACCESS_TOKEN_SECRET = os.getenv("ACCESS_TOKEN_SECRET")
REFRESH_TOKEN_SECRET = os.getenv("REFRESH_TOKEN_SECRET")
ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "15"))
REFRESH_TOKEN_EXPIRE_DAYS = int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", "7"))

if not ACCESS_TOKEN_SECRET:
    raise ValueError("ACCESS_TOKEN_SECRET environment variable not set.")
if not REFRESH_TOKEN_SECRET:
    raise ValueError("REFRESH_TOKEN_SECRET environment variable not set.")

# MongoDB
DB_HOST = os.getenv("DB_HOST", "mongodb://localhost:27017")
DB_NAME = os.getenv("DB_NAME", "storefront")

# "production" switches cookies to Secure + SameSite=None
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
IS_PRODUCTION = ENVIRONMENT == "production"

# Comma separated list of frontend origins
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv("ALLOWED_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]

# Seller dashboard credentials
SELLER_EMAIL = os.getenv("SELLER_EMAIL")
SELLER_PASSWORD = os.getenv("SELLER_PASSWORD")

# Tax added on top of the order subtotal
TAX_RATE = float(os.getenv("TAX_RATE", "0.02"))

API_VERSION = "1.0.0"
