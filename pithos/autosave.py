from threading import Lock, Timer, current_thread
from typing import Callable

from loguru import logger

from pithos.config import settings


class AutoSave:
    """Debounced auto-save on a background timer."""

    def __init__(
        self,
        save_callback: Callable[[], object],
        delay_seconds: float | None = None,
    ) -> None:
        self._save_callback = save_callback
        self._delay = settings.autosave_interval_seconds if delay_seconds is None else delay_seconds
        self._timer: Timer | None = None
        self._timer_lock = Lock()

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def trigger(self) -> None:
        """Schedule a save after the debounce delay. Resets if called again."""
        with self._timer_lock:
            self._cancel_locked()
            self._timer = Timer(self._delay, self._do_save)
            self._timer.daemon = True
            self._timer.start()

    def cancel(self) -> None:
        """Cancel any pending save."""
        with self._timer_lock:
            self._cancel_locked()

    def save_now(self) -> None:
        """Save immediately, canceling any pending debounce.

        The callback runs outside the timer lock, so a timer that already
        fired may run it concurrently. Callbacks must serialise themselves;
        ``NoteEngine.autosave_tick`` does so with the engine lock.
        """
        self.cancel()
        self._save_callback()

    def _cancel_locked(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _do_save(self) -> None:
        with self._timer_lock:
            if self._timer is current_thread():
                self._timer = None
        try:
            self._save_callback()
        except Exception:
            logger.exception("Auto-save failed")
