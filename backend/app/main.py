"""
FastAPI entrypoint for the Globetrotter backend application.
"""
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import settings
from app.core.error_handlers import setup_error_handlers
from app.api.router import api_router

logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Globetrotter API",
    description="Backend API for multi-city trip planning",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_error_handlers(app)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"message": "Globetrotter API is running"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
