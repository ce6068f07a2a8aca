"""
SmartFit Backend - Virtual Fitting Room API
Version: 1.2.0
"""

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.exceptions import HTTPException as StarletteHTTPException

from config.settings import settings
from core.dependencies import get_storage
from core.exceptions import AuthenticationException
from core.logging import logger
from core.monitoring import capture_exception, init_sentry
from database.repository import StorageRepository

from api.endpoints.auth import router as auth_router
from api.endpoints.measurements import router as measurements_router
from api.endpoints.products import router as products_router
from api.endpoints.fit import router as fit_router
from api.endpoints.favorites import router as favorites_router
from api.endpoints.recommendations import router as recommendations_router
from api.endpoints.activity import router as activity_router


# ========== Initialize Sentry (if configured) ==========
sentry_enabled = init_sentry()
if sentry_enabled:
    logger.info("✅ Sentry error tracking enabled")
else:
    logger.info("ℹ️  Sentry not configured - running without error tracking")


# ========== Rate Limiter Initialization ==========
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)

# ========== FastAPI App Initialization ==========
app = FastAPI(
    title=settings.APP_TITLE,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION
)

# Attach limiter to app state
app.state.limiter = limiter


# ========== Exception Handlers ==========
# Every error response has the shape {"message": ...}
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(AuthenticationException)
async def authentication_exception_handler(request: Request, exc: AuthenticationException):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info(f"🚫 Invalid request to {request.url.path}: {len(exc.errors())} validation error(s)")
    return JSONResponse(status_code=400, content={"message": "Invalid request"})


@app.exception_handler(RateLimitExceeded)
async def rate_limit_exception_handler(request: Request, exc: RateLimitExceeded):
    logger.warning(f"🚫 Rate limit exceeded: {get_remote_address(request)} {request.url.path}")
    return JSONResponse(status_code=429, content={"message": f"Too many requests: {exc.detail}"})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"❌ Unhandled error on {request.method} {request.url.path}: {type(exc).__name__}: {str(exc)}")
    capture_exception(exc, path=request.url.path)
    return JSONResponse(status_code=500, content={"message": "Server error"})


# ========== CORS Middleware ==========
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ========== Security Headers Middleware ==========
@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    """
    Add security headers to all responses

    Headers added:
    - Content-Security-Policy: Prevent XSS attacks
    - X-Frame-Options: Prevent clickjacking
    - X-Content-Type-Options: Prevent MIME sniffing
    - Strict-Transport-Security: Force HTTPS (production only)
    - Referrer-Policy: Control referrer information
    - Permissions-Policy: Camera stays allowed for the measurement capture page
    """
    response = await call_next(request)

    response.headers["Content-Security-Policy"] = (
        "default-src 'self'; "
        "img-src 'self' data: https:; "
        "frame-ancestors 'none';"
    )
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["X-Content-Type-Options"] = "nosniff"

    # HSTS - only in HTTPS/production environments
    if request.url.scheme == "https" or settings.ENVIRONMENT == "production":
        response.headers["Strict-Transport-Security"] = (
            "max-age=31536000; includeSubDomains"
        )

    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    response.headers["Permissions-Policy"] = (
        "geolocation=(), microphone=(), camera=(self), payment=(), usb=()"
    )

    if "Server" in response.headers:
        del response.headers["Server"]

    return response


# ========== Request Size Limit Middleware ==========
@app.middleware("http")
async def limit_request_size(request: Request, call_next):
    """Reject oversized request bodies before they are read"""
    if request.method in ("POST", "PUT", "PATCH"):
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > settings.MAX_REQUEST_SIZE:
            logger.warning(f"🚫 Request too large: {content_length} bytes (max: {settings.MAX_REQUEST_SIZE})")
            return JSONResponse(
                status_code=413,
                content={"message": f"Request too large. Maximum size is {settings.MAX_REQUEST_SIZE} bytes"}
            )
    return await call_next(request)


# ========== Register Routers ==========
app.include_router(auth_router, prefix="/api", tags=["auth"])
app.include_router(measurements_router, prefix="/api", tags=["measurements"])
app.include_router(products_router, prefix="/api", tags=["products"])
app.include_router(fit_router, prefix="/api", tags=["fit"])
app.include_router(favorites_router, prefix="/api", tags=["favorites"])
app.include_router(recommendations_router, prefix="/api", tags=["recommendations"])
app.include_router(activity_router, prefix="/api", tags=["activity"])


# ========== Startup Event ==========
@app.on_event("startup")
async def startup_event():
    """Initialize storage on server startup"""
    logger.info(f"🚀 Starting SmartFit API ({settings.ENVIRONMENT})...")

    from database import init_storage
    init_storage()

    logger.info("✅ Startup complete")


@app.on_event("shutdown")
async def shutdown_event():
    from database.mongodb_connection import close_mongodb
    close_mongodb()


# ========== Root Endpoint ==========
@app.get("/")
async def root(storage: StorageRepository = Depends(get_storage)):
    """Root endpoint with service status"""
    return {
        "message": f"{settings.APP_TITLE} - v{settings.APP_VERSION}",
        "version": settings.APP_VERSION,
        "status": "running",
        "storage": storage.backend_name,
        "environment": settings.ENVIRONMENT
    }


# ========== Health Check Endpoint ==========
@app.get("/api/health")
async def health_check(deep: bool = False, storage: StorageRepository = Depends(get_storage)):
    """
    Health check endpoint

    Query parameters:
    - deep: If true, also collects CPU, memory and disk metrics

    Returns:
    - status: "healthy" or "degraded"
    - checks: storage reachability and (deep) system metrics
    """
    from core.health_check import get_health_check_service

    result = get_health_check_service().run(storage, include_system=deep)

    return {
        "status": result["status"],
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "checks": result["checks"],
        "check_duration_ms": result["check_duration_ms"],
        "timestamp": result["timestamp"]
    }


# ========== Main Entry Point ==========
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
