import logging
from enum import Enum
from typing import Callable, Dict, List

logger = logging.getLogger(__name__)


class GameEvent(Enum):
    PLAYER_SPAWNED = "player_spawned"
    ENEMY_SPAWNED = "enemy_spawned"
    LEVEL_GENERATED = "level_generated"


class EventBus:
    """Synchronous publish/subscribe hub keyed by GameEvent.

    Listeners run in subscription order on the emitting thread. Exceptions
    raised by a listener propagate to the emitter.
    """

    def __init__(self):
        self._subs: Dict[GameEvent, List[Callable]] = {}

    def on(self, event: GameEvent, fn: Callable) -> None:
        self._subs.setdefault(event, []).append(fn)

    def off(self, event: GameEvent, fn: Callable) -> None:
        listeners = self._subs.get(event, [])
        if fn in listeners:
            listeners.remove(fn)

    def emit(self, event: GameEvent, **kw) -> None:
        listeners = list(self._subs.get(event, []))
        logger.debug("Emitting %s to %d listener(s)", event.value, len(listeners))
        for fn in listeners:
            fn(**kw)

    def clear(self) -> None:
        self._subs.clear()
