from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from fastapi.middleware.cors import CORSMiddleware
import logging
import os

from .config import settings
from .database import engine, Base
from .routers import analysis, calculators, dashboard, documents, marketplace, profile
from .routers import settings as user_settings

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("farmconnect")

# Create tables (handles new tables but won't add columns to existing ones)
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title=settings.APP_NAME,
    description="Farm management toolkit: calculators, crop and disease analysis, marketplace and document locker",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(calculators.router, prefix="/api")
app.include_router(analysis.router, prefix="/api")
app.include_router(dashboard.router, prefix="/api")
app.include_router(marketplace.router, prefix="/api")
app.include_router(documents.router, prefix="/api")
app.include_router(profile.router, prefix="/api")
app.include_router(user_settings.router, prefix="/api")

# Serve uploaded files (local fallback when R2 not configured)
os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")


@app.get("/health")
def health():
    return {"status": "ok", "app": "farmconnect"}


@app.on_event("startup")
def auto_seed():
    """Seed marketplace, document locker, profile and settings on first run."""
    from .database import SessionLocal
    from .data_provider import get_data_provider
    from .seed import seed_all
    db = SessionLocal()
    try:
        seed_all(db, get_data_provider())
    except KeyError as e:
        logger.warning("Sample dataset missing, skipping seed: %s", e)
    finally:
        db.close()
