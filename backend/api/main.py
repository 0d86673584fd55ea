"""
FastAPI application entry point.

Run with: uvicorn api.main:app --reload
"""
import logging
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load environment variables from backend/.env (optional) before other imports that read env
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(env_path)

from api.routes import images, search, venues  # noqa: E402

logger = logging.getLogger(__name__)

# Create app
app = FastAPI(
    title="KLIspots Venue API",
    description="Search and image resolution for venues in Karachi, Lahore and Islamabad",
    version="0.1.0",
)

# CORS middleware for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure properly for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(search.router, prefix="/search", tags=["search"])
app.include_router(images.router, prefix="/images", tags=["images"])
app.include_router(venues.router, prefix="/venues", tags=["venues"])


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "KLIspots Venue API"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
