from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

# Import all models so they are registered on Base before create_all
from salonbase.models import appointment_model, service_model, token_blacklist, user_model  # noqa: F401
from salonbase.config import CORS_ORIGINS
from salonbase.database import Base, SessionLocal, engine
from salonbase.logger import get_logger
from salonbase.middleware import add_request_id_and_process_time, add_security_headers
from salonbase.rate_limiter import limiter, rate_limit_exceeded_handler
from salonbase.routes.auth_route import auth_router
from salonbase.routes.user_route import user_router
from salonbase.routes.service_route import service_router
from salonbase.routes.appointment_route import appointment_router
from salonbase.utils.token_blacklist import token_blacklist_service

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        token_blacklist_service.cleanup_expired_tokens(db)
    finally:
        db.close()
    yield
    logger.info("Application shutting down...")


app = FastAPI(
    title="SalonBase API",
    version="1.0.0",
    description="Appointment booking API for a beauty salon: accounts, service catalogue and bookings.",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept", "Authorization"],
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)
app.middleware("http")(add_security_headers)
app.middleware("http")(add_request_id_and_process_time)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail
    if exc.status_code == 404 and exc.detail == "Not Found":
        message = "Route not found"
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": message},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        errors.append(f"{field}: {error.get('msg')}" if field else error.get("msg"))
    logger.warning(f"Validation error for {request.url.path}: {errors}")
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": "Validation Error", "errors": errors},
    )


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning(f"Integrity error for {request.url.path}: {exc.orig}")
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": "Duplicate field value entered"},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error for {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"success": False, "message": "Internal Server Error"},
    )


@app.get("/api/health", status_code=200)
async def health():
    return {
        "success": True,
        "status": "OK",
        "message": "SalonBase API is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


app.include_router(auth_router, prefix="/api", tags=["Auth"])
app.include_router(user_router, prefix="/api", tags=["Users"])
app.include_router(service_router, prefix="/api", tags=["Services"])
app.include_router(appointment_router, prefix="/api", tags=["Appointments"])
