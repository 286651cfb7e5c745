import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import health
from canteen.api.routes.menu_items import router as menu_items_router
from canteen.api.routes.orders import router as orders_router
from canteen.config import settings
from canteen.db.session import init_models, engine
from canteen.logging_config import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    if settings.AUTO_CREATE_TABLES:
        await init_models()
    logger.info("Application started")
    yield
    await engine.dispose()
    logger.info("Application stopped")


app = FastAPI(title="Canteen Ordering", lifespan=lifespan)

# the mobile client calls the API cross-origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(health.router)
app.include_router(menu_items_router)
app.include_router(orders_router)


def run() -> None:
    uvicorn.run("canteen.main:app", host=settings.HOST, port=settings.PORT)
