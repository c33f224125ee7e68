# app/core/lifespan.py
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from app.db import mongo, redis as r
from app.core.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()

    # --- Startup ---
    # Mongo holds the catalog; without it every engine call answers 503
    if settings.MONGO_URI:
        await mongo.connect()
    else:
        logger.warning("No MONGO_URI provided, catalog store unavailable")

    # Redis is optional (snapshot cache)
    await r.connect()

    yield

    # --- Shutdown ---
    await r.disconnect()
    await mongo.disconnect()
