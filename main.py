from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from mongoengine.errors import ValidationError as MongoValidationError
from mangum import Mangum
from storefront import config
from storefront.cors import configure_cors
from storefront.database import init_db
from storefront.routers import user, seller, product, cart, address, order, health_check

app = FastAPI(title="Storefront API", version=config.API_VERSION)


# Registered before CORS so it sits inside it and 500s still carry CORS headers
@app.middleware("http")
async def catch_server_errors(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception as e:
        print(f"[ERROR] Server error on {request.url.path}: {e}")
        return JSONResponse(status_code=500, content={"success": False, "message": "Server error"})


# CORS must wrap every route, including the error responses below
app.state.allowed_origins = configure_cors(app)

app.include_router(user.router)
app.include_router(seller.router)
app.include_router(product.router)
app.include_router(cart.router)
app.include_router(address.router)
app.include_router(order.router)
app.include_router(health_check.router)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return JSONResponse(status_code=400, content={"success": False, "message": message})


@app.exception_handler(MongoValidationError)
async def mongo_validation_handler(request: Request, exc: MongoValidationError):
    print(f"[ERROR] Validation error on {request.url.path}: {exc}")
    return JSONResponse(status_code=400, content={"success": False, "message": f"Validation error: {exc.message}"})


@app.on_event("startup")
def startup_event():
    init_db()
    print(f"[LOG] Environment: {config.ENVIRONMENT}")


@app.get("/")
def read_root():
    return {
        "success": True,
        "message": "E-commerce API is running",
        "version": config.API_VERSION,
        "cors": app.state.allowed_origins,
    }


handler = Mangum(app)
