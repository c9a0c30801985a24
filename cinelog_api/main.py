import logging

from fastapi import FastAPI

from contextlib import asynccontextmanager
from cinelog_api.db.mongo import close_client, ensure_indexes, get_mongo_db

from cinelog_api.core.logger import setup_json_logging, shutdown_logging
from cinelog_api.core.sentry import init_sentry
from cinelog_api.core.config import settings
from cinelog_api.core.middleware import RequestContextMiddleware

from cinelog_api.api.v1.contents import router as contents_router
from cinelog_api.api.v1.reviews import router as reviews_router
from cinelog_api.api.v1.favorites import router as favorites_router
from cinelog_api.api.v1.lists import router as lists_router
from cinelog_api.api.v1.admin import router as admin_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # logging first, so startup problems end up in JSON too
    setup_json_logging(service=settings.app_name, level=settings.log_level)
    init_sentry(settings)

    db = await get_mongo_db()
    await ensure_indexes(db)
    logger.info("startup_complete",
                extra={"mongo_db": settings.mongo_db,
                       "transactions": settings.mongo_transactions})

    try:
        yield
    finally:
        await close_client()
        shutdown_logging()


app = FastAPI(title="Cinelog Service", lifespan=lifespan)

app.add_middleware(RequestContextMiddleware)

# our access line replaces uvicorn's
logging.getLogger("uvicorn.access").setLevel("WARNING")


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(contents_router)
app.include_router(reviews_router)
app.include_router(favorites_router)
app.include_router(lists_router)
app.include_router(admin_router)
