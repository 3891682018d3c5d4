"""
Notifications emitted by the engine.

The engine does not know who is listening: handlers subscribe per event type, and every event is fanned out to all of them.
"""

import logging
from dataclasses import dataclass
from threading import RLock
from typing import Callable, TypeVar

from src.othello.player import Player
from src.othello.status import GameStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameCreated:
    """A player opened a new game and waits for an opponent."""

    status: GameStatus


@dataclass(frozen=True)
class GameStarted:
    """Fired once for every participant of a game that just started."""

    participant: Player
    status: GameStatus


@dataclass(frozen=True)
class PlayerInvited:
    inviter: Player
    invitee: Player


@dataclass(frozen=True)
class GameStateChanged:
    """A move got played. 'player' is the one who made it."""

    player: Player
    status: GameStatus


GameEvent = GameCreated | GameStarted | PlayerInvited | GameStateChanged
EventT = TypeVar("EventT", GameCreated, GameStarted, PlayerInvited, GameStateChanged)
Handler = Callable[[EventT], None]


class EventBus:
    """Ordered collection of handlers per event type."""

    def __init__(self) -> None:
        self._handlers: dict[type, list[Callable]] = {}
        self._lock = RLock()

    def subscribe(self, event_type: type[EventT], handler: Handler[EventT]) -> Callable[[], bool]:
        """Register a handler. Returns a callable that undoes the subscription."""
        with self._lock:
            self._handlers.setdefault(event_type, []).append(handler)
        return lambda: self.unsubscribe(event_type, handler)

    def unsubscribe(self, event_type: type[EventT], handler: Handler[EventT]) -> bool:
        with self._lock:
            handlers = self._handlers.get(event_type, [])
            if handler not in handlers:
                return False
            handlers.remove(handler)
            return True

    def publish(self, event: GameEvent) -> None:
        """
        Call every handler subscribed to the type of this event, in subscription order.

        NOTE handlers are called outside the lock (so they may (un)subscribe or call back into the engine),
        and a failing handler does not stop the other handlers from being notified.
        """
        with self._lock:
            handlers = list(self._handlers.get(type(event), []))

        for handler in handlers:
            try:
                handler(event)
            except Exception:
                logger.exception("Handler %r failed on %s", handler, type(event).__name__)
