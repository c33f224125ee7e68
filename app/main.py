from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from app.core.config import get_settings
from app.core.lifespan import lifespan
from app.api.v1.routers.health import router as health_router
from app.api.v1.routers.search import router as search_router
from app.api.v1.routers.recommendations import router as recommendations_router
from app.api.v1.routers.similar import router as similar_router
from app.core.logging import configure_logging
from app.domain.errors import CollaboratorUnavailable, NotFound

from fastapi.middleware.cors import CORSMiddleware
import logging, os

logger = logging.getLogger(__name__)

settings = get_settings()
configure_logging(level=logging.DEBUG if settings.DEBUG else logging.INFO)

app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

# ------- CORS -------
# ALLOWED_ORIGINS from env (CSV), e.g. "https://shop.example.com,https://admin.example.com"
allowed_origins_env = os.getenv("ALLOWED_ORIGINS", "")
allowed_origins = [o.strip() for o in allowed_origins_env.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=False,                        # keep False to simplify preflight
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    max_age=86400,
)

# ------- Errors -------
@app.exception_handler(NotFound)
async def not_found_handler(request: Request, exc: NotFound):
    return JSONResponse(status_code=404, content={"detail": str(exc)})

@app.exception_handler(CollaboratorUnavailable)
async def unavailable_handler(request: Request, exc: CollaboratorUnavailable):
    logger.error("catalog store unavailable path=%s err=%s", request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "Catalog temporarily unavailable"})

# ------- Routes -------
app.include_router(health_router)
app.include_router(search_router, prefix=settings.api_prefix)             # natural-language search
app.include_router(recommendations_router, prefix=settings.api_prefix)    # user recommendations (before similar)
app.include_router(similar_router, prefix=settings.api_prefix)            # similar products
