from contextlib import asynccontextmanager
import logging
import os

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pathfinder.ai.narrator import build_narrator
from pathfinder.logic.catalog import Catalog, load_catalog
from pathfinder.logic.engine import PathfinderEngine
from pathfinder.routes import router as paths_router

load_dotenv()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def build_catalog() -> Catalog:
    """Database catalog when DATABASE_URL is set, else the seed file."""
    if os.getenv("DATABASE_URL"):
        from db import get_db, init_db

        logging.info("App starting with DATABASE_URL")
        init_db()
        with get_db() as db:
            return load_catalog(db)
    return load_catalog()


@asynccontextmanager
async def lifespan(app: FastAPI):
    catalog = build_catalog()
    app.state.catalog = catalog
    app.state.engine = PathfinderEngine(catalog)
    app.state.narrator = build_narrator()
    logger.info(f"✅ Pathfinder ready: {catalog!r}")
    yield


app = FastAPI(title="Pathfinder", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(paths_router)


@app.get("/health", tags=["meta"], summary="Health check")
def health():
    return {"status": "ok"}
