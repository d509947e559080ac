import sys

from loguru import logger

from pithos.autosave import AutoSave
from pithos.clock.base import Clock
from pithos.config import settings
from pithos.domain.state import DocState
from pithos.engine import NoteEngine


def configure_logging(level: str | None = None) -> None:
    logger.configure(handlers=[{"sink": sys.stderr, "level": level or settings.log_level}])


def create_engine(state: DocState | None = None, clock: Clock | None = None) -> NoteEngine:
    """Build the engine for a loaded vault, or a fresh one when ``state`` is None."""
    if state is None:
        logger.info("No vault state given, starting a fresh vault")
        engine = NoteEngine(clock=clock)
        engine.state.theme = settings.default_theme
        engine.state.sort_order = settings.default_sort_order
    else:
        engine = NoteEngine(state=state, clock=clock)

    if settings.purge_trash_on_start:
        engine.purge_trash()
    return engine


def create_autosave(engine: NoteEngine, delay_seconds: float | None = None) -> AutoSave:
    """Debounced autosave that snapshots the active note when it fires."""
    return AutoSave(engine.autosave_tick, delay_seconds=delay_seconds)
