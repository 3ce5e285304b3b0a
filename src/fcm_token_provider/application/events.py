import logging

from collections import defaultdict
from typing import (
    Any,
    Callable
)

logger = logging.getLogger(__name__)

EventHandler = Callable[[Any], None]


class EventBus:
    """In-process observer registry for named token events."""

    def __init__(self):
        self.__handlers: dict[str, list[EventHandler]] = defaultdict(list)

    def subscribe(self, name: str, handler: EventHandler) -> None:
        self.__handlers[name].append(handler)

    def unsubscribe(self, name: str, handler: EventHandler) -> None:
        handlers = self.__handlers.get(name, [])

        if handler in handlers:
            handlers.remove(handler)

    def emit(self, name: str, payload: Any = None) -> None:
        logger.debug(f"Emitting event {name}")

        for handler in list(self.__handlers.get(name, [])):
            try:
                handler(payload)
            except Exception:
                logger.exception(f"Handler for event {name} failed")
