from fastapi import APIRouter, Request
from datetime import datetime, timezone

router = APIRouter(prefix="/api", tags=["Health"])


@router.get("/health")
def health_check(request: Request):
    return {
        "success": True,
        "message": "Server is healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "origin": request.headers.get("origin"),
        "cors": "Enabled",
    }


@router.get("/test-cors")
def test_cors(request: Request):
    return {
        "success": True,
        "message": "CORS test successful",
        "origin": request.headers.get("origin"),
        "allowedOrigins": request.app.state.allowed_origins,
    }
