import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tasklist.core.clock import Clock, SystemClock
from tasklist.core.config import Settings, settings as default_settings
from tasklist.core.database import Database
from tasklist.core.errors import register_exception_handlers
from tasklist.core.logging_setup import setup_logging
from tasklist.routers import categories, tasks

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, clock: Optional[Clock] = None) -> FastAPI:
    settings = settings or default_settings
    clock = clock or SystemClock()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.LOG_LEVEL)
        database = Database(settings)
        await database.ping()
        await database.create_all()
        app.state.db = database
        logger.info("Task list API ready prefix=%s", settings.API_PREFIX)
        try:
            yield
        finally:
            await database.dispose()

    app = FastAPI(title="Task List API", lifespan=lifespan)
    app.state.settings = settings
    app.state.clock = clock

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(tasks.router, prefix=settings.API_PREFIX)
    app.include_router(categories.router, prefix=settings.API_PREFIX)

    @app.get(f"{settings.API_PREFIX}/health")
    async def health():
        return {"ok": True}

    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=default_settings.API_PORT, log_config=None)
