import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from onestroke import __version__
from onestroke.core.config import settings
from onestroke.core.game import build_engine
from onestroke.routers import game_routers
from onestroke.services import TraceEngine
from utils.logger_config import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # logging is set up when the server starts, not on import
    configure_logging(settings.LOG_LEVEL, settings.LOG_FILE)
    logger.info("Game ready with %d levels", len(app.state.engine.catalog))
    yield


def create_app(engine: Optional[TraceEngine] = None) -> FastAPI:
    """Build the API around one game session. A broken level catalog stops startup here."""
    # create FastAPI
    app = FastAPI(title="One Stroke Puzzle API", version=__version__, lifespan=lifespan)
    app.state.engine = engine if engine is not None else build_engine(settings)

    # get routers
    app.include_router(game_routers.router, prefix="/game", tags=["Game"])

    # Landing info
    @app.get("/")
    async def index():
        engine = app.state.engine
        return {"name": app.title, "version": __version__, "levels": engine.catalog.names()}

    return app


app = create_app()
