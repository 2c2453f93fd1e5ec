import logging

from fastapi import Request

from onestroke.core.config import Settings, settings
from onestroke.services import AsyncioScheduler, LevelCatalog, TraceEngine, default_catalog

logger = logging.getLogger(__name__)


def load_catalog(config: Settings = settings) -> LevelCatalog:
    """ Catalog from LEVELS_FILE, or the built-in levels. Raises InvalidLevel on a broken catalog"""
    if config.LEVELS_FILE:
        logger.info("Loading levels from %s", config.LEVELS_FILE)
        return LevelCatalog.from_json(config.LEVELS_FILE, skip_invalid=config.SKIP_INVALID_LEVELS)
    return default_catalog()


def build_engine(config: Settings = settings) -> TraceEngine:
    return TraceEngine(
        load_catalog(config),
        AsyncioScheduler(),
        success_delay=config.SUCCESS_DELAY,
        hint_count=config.HINT_COUNT,
    )


def get_engine(request: Request) -> TraceEngine:
    """ The single game session hosted by this app"""
    return request.app.state.engine
