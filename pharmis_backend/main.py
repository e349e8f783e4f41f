# pharmis_backend/main.py
"""
ASGI entry point.

    uvicorn pharmis_backend.main:app --reload
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from pharmis_backend.config import settings
from pharmis_backend.infrastructure.db import bootstrap
from pharmis_backend.api.insight.routes import router as insight_router

logging.basicConfig(
    level=settings().log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
for name in ("sqlalchemy.engine.Engine", "httpx", "openai"):
    logging.getLogger(name).setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await bootstrap.init_engine(settings())
    logger.info(f"Completion model: {settings().completion_model}")
    yield
    await bootstrap.dispose_engine()


app = FastAPI(title="Pharmis Health Insights", lifespan=lifespan)
app.include_router(insight_router)


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}
