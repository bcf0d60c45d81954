import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes.search import router as search_router
from api.routes.health import router as health_router
from papersearch import __version__
from papersearch.clients import close_clients, init_clients
from papersearch.config import Config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Index and cache clients are built once and shared by every request
    await init_clients(Config)
    logger.info("Paper search API ready")
    yield
    await close_clients()


app = FastAPI(title="Paper Search API", version=__version__, lifespan=lifespan)

# credentials cannot be combined with a "*" origin
allow_all = "*" in Config.server.cors_origins

app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.server.cors_origins,
    allow_credentials=not allow_all,
    allow_methods=["GET"],
    allow_headers=["*"],
    expose_headers=["X-Cache"],
)

app.include_router(search_router)
app.include_router(health_router)
