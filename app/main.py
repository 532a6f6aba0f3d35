import logging
import logging.config
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.config import get_settings
from app.dependencies import limiter
from app.routers.categories import router as categories_router
from app.routers.content_pages import router as content_pages_router
from app.routers.lookup import router as lookup_router
from app.routers.products import router as products_router
from app.services.category_tree import CategoryUrlCache
from app.services.http_client import CommerceClient, RemoteError

settings = get_settings()

logging.config.dictConfig(
    {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "format": '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}',
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
            },
        },
        "root": {"level": settings.log_level, "handlers": ["console"]},
    }
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with CommerceClient(settings) as client:
        app.state.client = client
        yield


app = FastAPI(
    title="Commerce Bridge",
    description="Serves catalog categories, content pages and products of a commerce platform to the CMS bridge.",
    version="1.0.0",
    lifespan=lifespan,
)

# Rate-limiting state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Lives as long as the process; filled by the first category fetch
app.state.category_cache = CategoryUrlCache()


@app.exception_handler(RemoteError)
async def remote_error_handler(request: Request, exc: RemoteError) -> JSONResponse:
    logger.warning("Remote error for %s: %s", request.url, exc.status)
    return JSONResponse(status_code=exc.status, content=exc.to_dict())


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception for %s", request.url)
    return JSONResponse(status_code=500, content={"detail": "An unexpected error occurred."})


app.include_router(categories_router)
app.include_router(content_pages_router)
app.include_router(products_router)
app.include_router(lookup_router)


@app.get("/", summary="Health check")
async def root() -> dict:
    return {"message": "Commerce bridge is running"}


def run() -> None:
    """Serve the app with uvicorn on the configured host and port."""
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
