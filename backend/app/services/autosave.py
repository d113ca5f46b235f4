"""
Debounced writes as cancellable delayed tasks.

schedule() stores the latest value for a key and (re)starts a timer; when the
timer runs out the value is written once. A new schedule() for the same key
cancels the pending timer, so rapid edits coalesce and the last one wins.
flush() writes a pending value immediately (navigation away, shutdown).
"""
import asyncio
import logging
from typing import Any, Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)


class DebouncedWriter:
    """Coalesces writes per key behind a delay."""

    def __init__(self, write: Callable[[str, Any], None], delay: float = 0.5):
        self._write = write
        self.delay = delay
        self._pending: Dict[str, Tuple[Any, Optional[asyncio.Task]]] = {}

    def schedule(self, key: str, value: Any) -> None:
        """Replace any pending value for key and restart its timer."""
        self._cancel_timer(key)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No event loop to wait on: write through
            self._pending.pop(key, None)
            self._write(key, value)
            return
        task = loop.create_task(self._fire_later(key))
        self._pending[key] = (value, task)

    def pending(self, key: str) -> Optional[Any]:
        """Latest unsaved value for key, if any."""
        entry = self._pending.get(key)
        return entry[0] if entry else None

    def has_pending(self, key: str) -> bool:
        return key in self._pending

    def flush(self, key: str) -> bool:
        """Write the pending value for key now. False when nothing was pending."""
        entry = self._pending.pop(key, None)
        if entry is None:
            return False
        value, task = entry
        if task is not None and not task.done():
            task.cancel()
        self._write(key, value)
        return True

    def flush_all(self) -> int:
        """Write every pending value; returns how many were written."""
        keys = list(self._pending)
        for key in keys:
            self.flush(key)
        return len(keys)

    def discard(self, key: str) -> None:
        """Drop a pending value without writing it."""
        self._cancel_timer(key)
        self._pending.pop(key, None)

    def _cancel_timer(self, key: str) -> None:
        entry = self._pending.get(key)
        if entry is not None:
            task = entry[1]
            if task is not None and not task.done():
                task.cancel()

    async def _fire_later(self, key: str) -> None:
        await asyncio.sleep(self.delay)
        entry = self._pending.pop(key, None)
        if entry is None:
            return
        try:
            self._write(key, entry[0])
        except Exception:
            logger.exception(f"Debounced write for {key} failed")
