from __future__ import annotations

import contextlib
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dotenv import load_dotenv

from localdb import LocalFileDatabase
from settings import get_settings

logger = logging.getLogger(__name__)


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    db: LocalFileDatabase = app.state.db
    await db.ensure_loaded()
    logger.info("LOCAL DB: serving %s", db.location)
    yield


def create_app(db: LocalFileDatabase | None = None) -> FastAPI:
    load_dotenv("local.env")
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    from endpoints.kv_endpoints import router as kv_router

    app = FastAPI(lifespan=lifespan)
    app.state.db = db if db is not None else LocalFileDatabase(settings.db_path)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allow_origins),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/healthz")
    async def healthz():
        return {"status": "ok", "db_path": app.state.db.location}

    app.include_router(kv_router)

    return app


app = create_app()
