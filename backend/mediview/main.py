# mediview backend api
# fastapi app serving session-scoped mock patient data, gemini insights, and realtime biofeedback

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mediview.config import settings
from mediview.services.realtime import streams
from mediview.services.store import store
from mediview.routers import patients, dashboard, insights

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """startup: generate the mock roster. shutdown: stop any live streams."""
    logger.info("Starting MediView backend...")
    store.populate()
    logger.info("MediView backend ready")
    yield
    logger.info("Shutting down MediView backend...")
    await streams.cancel_all()


app = FastAPI(
    title="MediView API",
    description="Backend API for the MediView clinician dashboard: patient list, profiles, wearables, AI insights",
    version="0.1.0",
    lifespan=lifespan,
)

# cors, allow frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL, "http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# register routers
app.include_router(patients.router)
app.include_router(dashboard.router)
app.include_router(insights.router)


@app.get("/health")
async def health_check():
    """basic health check endpoint"""
    return {"status": "ok", "service": "mediview-api"}
