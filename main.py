"""
Crease - Multi-innings Cricket Match Engine API
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from crease import __version__
from crease.config import settings
from crease.database import init_db
from crease.api.formats import router as formats_router
from crease.api.match import router as match_router

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

# Initialize FastAPI app
app = FastAPI(
    title="Crease",
    description="Multi-innings cricket match engine API",
    version=__version__,
)

default_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]
# Add custom origins from environment (comma-separated)
default_origins.extend(settings.CORS_ORIGINS)

app.add_middleware(
    CORSMiddleware,
    allow_origins=default_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(formats_router, prefix="/api")
app.include_router(match_router, prefix="/api")


@app.on_event("startup")
def startup_event():
    """Initialize database on startup"""
    init_db()


@app.get("/")
def root():
    """Health check endpoint"""
    return {
        "name": "Crease API",
        "version": __version__,
        "status": "running",
    }


@app.get("/api/health")
def health_check():
    """API health check"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
