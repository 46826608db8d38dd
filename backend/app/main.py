"""
Online Auction Backend
FastAPI Application Entry Point
"""

import os
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.database import init_db, close_db

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if os.getenv("DEBUG", "true").lower() == "true" else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",") if o.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler: open the store at startup, release it at shutdown."""
    logger.info("Starting Auction API...")
    logger.info(f"   Debug mode: {os.getenv('DEBUG', 'true')}")

    if os.getenv("AUTO_CREATE_TABLES", "true").lower() == "true":
        init_db()
        logger.info("   Database tables ready")

    yield

    close_db()
    logger.info("Shutting down API...")


app = FastAPI(
    title="Auction API",
    description="Backend API for user accounts, auction listings, bids and bid history",
    version=API_VERSION,
    lifespan=lifespan
)

# CORS middleware for frontend communication
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class HealthResponse(BaseModel):
    """Health check response model"""
    status: str
    version: str = API_VERSION
    database: str = "not_checked"


def error_body(request: Request, message: str, status_code: int) -> dict:
    return {
        "success": False,
        "message": message,
        "status_code": status_code,
        "path": str(request.url.path)
    }


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors."""
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content=error_body(request, "Server error. Try again later.", 500)
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Render HTTP errors as {success, message} JSON."""
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(request, str(exc.detail), exc.status_code),
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed or missing body fields are client errors (400)."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "Invalid request"
    return JSONResponse(
        status_code=400,
        content=error_body(request, message, 400)
    )


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """
    Health check endpoint.
    Returns the status of the API and its database.
    """
    from app.database import check_connection

    try:
        if check_connection():
            db_status = "connected"
        else:
            db_status = "disconnected"
            logger.warning("Database health check: disconnected")
    except Exception as e:
        db_status = f"error: {str(e)}"
        logger.error(f"Database health check error: {e}")

    return HealthResponse(status="ok", database=db_status)


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information"""
    return {
        "message": "Welcome to the Auction API",
        "docs": "/docs",
        "health": "/health",
        "version": API_VERSION
    }


# Import and register routers
from app.routers import auth, auctions, bids  # noqa: E402
app.include_router(auth.router)
app.include_router(auctions.router)
app.include_router(bids.router)
