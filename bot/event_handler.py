"""Game event hub shared by the bot and its listeners."""

import asyncio
import inspect
import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Set

logger = logging.getLogger(__name__)

EventListener = Callable[[Dict[str, Any]], Any]

EVENT_NAMES = ("newGame", "win", "tie")


@dataclass(frozen=True)
class EventResult:
    """Result of an event dispatch."""
    vetoed: bool = False
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return not self.vetoed


class EventHandler:
    """Dispatches game events to registered listeners.

    A synchronous listener vetoes an event by raising; the dispatch stops
    and returns a vetoed result with the exception message as reason.
    Listeners returning a coroutine run as background tasks and cannot veto.
    """

    def __init__(self):
        self._listeners: Dict[str, List[EventListener]] = defaultdict(list)
        self._tasks: Set[asyncio.Task] = set()

    def on(self, name: str, listener: EventListener) -> None:
        """Register a listener for an event."""
        if name not in EVENT_NAMES:
            raise ValueError(f"Unknown event: {name}")
        self._listeners[name].append(listener)

    def remove(self, name: str, listener: EventListener) -> None:
        if listener in self._listeners.get(name, []):
            self._listeners[name].remove(listener)

    def emit_event(self, name: str, payload: Dict[str, Any]) -> EventResult:
        """Call every listener of an event, in registration order."""
        for listener in list(self._listeners.get(name, [])):
            try:
                result = listener(payload)
            except Exception as e:
                logger.info("Event %s vetoed by %r: %s", name, listener, e)
                return EventResult(vetoed=True, reason=str(e) or None)

            if inspect.isawaitable(result):
                task = asyncio.ensure_future(result)
                self._tasks.add(task)
                task.add_done_callback(self._task_done)

        return EventResult()

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Event listener task failed", exc_info=task.exception())

    async def wait_pending(self) -> None:
        """Wait for background listener tasks to finish."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
