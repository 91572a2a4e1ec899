# healthwatch backend api
# fastapi app serving anonymous community check-ins and dashboard stats

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from healthwatch.config import settings
from healthwatch.services.store import store
from healthwatch.routers import reports, dashboard

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """startup: open the report store. shutdown: release its slot."""
    logger.info("Starting HealthWatch backend...")
    await store.open()
    logger.info("HealthWatch backend ready")
    yield
    logger.info("Shutting down HealthWatch backend...")
    await store.close()


app = FastAPI(
    title="HealthWatch API",
    description="Community health check-ins: anonymous submissions, summary stats and a 14-day trend",
    version="0.1.0",
    lifespan=lifespan,
)

# cors: allow frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL, "http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# register routers
app.include_router(reports.router)
app.include_router(dashboard.router)


@app.get("/health")
async def health_check():
    """basic health check endpoint"""
    return {"status": "ok", "service": "healthwatch-api"}
