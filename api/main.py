from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
import time
from datetime import datetime

from .endpoints import text, upload, audio
from utils.config import settings, validate_config
from utils.errors import ValidationError
from utils.logging import SessionLogger, get_logger

# Initialize logger
logger = get_logger(__name__)

# Start API session only if no session exists (preserve test session when under pytest)
existing_session = SessionLogger.get_current_session()
if not existing_session:
    api_session_id = SessionLogger.start_session("api_server")
else:
    api_session_id = existing_session

if not validate_config():
    logger.warning("Starting with an invalid configuration")

app = FastAPI(
    title="Voicecraft API",
    description="API for the Voicecraft text-to-speech studio",
    version="1.0.0"
)

class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log every request with its status and processing time."""

    async def dispatch(self, request: Request, call_next):
        request_logger = get_logger("api.requests")
        client = request.client.host if request.client else None
        request_logger.log_request(request.method, request.url.path, client)

        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            processing_time = (time.perf_counter() - start_time) * 1000
            request_logger.error(f"Request error after {processing_time:.1f}ms: {request.url.path} - {str(e)}")
            raise

        processing_time = (time.perf_counter() - start_time) * 1000
        request_logger.log_response(response.status_code, processing_time)
        response.headers["X-Process-Time-Ms"] = f"{processing_time:.1f}"
        return response

if settings.REQUEST_LOGGING_ENABLED:
    app.add_middleware(RequestLoggingMiddleware)
    logger.info("Request logging middleware enabled")

# CORS middleware with production-aware configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)

if settings.is_production():
    logger.info(f"Production CORS origins: {settings.CORS_ORIGINS}")
else:
    logger.info("Development CORS: allowing all origins")

@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    """Caller mistakes are reported back with a readable reason."""
    logger.info(f"Rejected {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=400, content={"error": str(exc)})

@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Malformed payload for {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": "Invalid request payload"})

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)

# Include routers
app.include_router(text.router)
app.include_router(upload.router)
app.include_router(audio.router)

@app.get("/")
async def root():
    return {"message": "Welcome to Voicecraft API"}

@app.get("/health")
async def health_check():
    """Basic health check endpoint"""
    return {
        "status": "healthy",
        "service": "voicecraft-api",
        "version": "1.0.0",
        "environment": settings.ENVIRONMENT,
        "timestamp": datetime.now().isoformat(),
    }
