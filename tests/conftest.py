"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures required for testing multiple layers.
"""

from typing import Callable

import pytest

from src.othello.player import Player
from src.services.events import GameCreated, GameStarted, GameStateChanged, PlayerInvited
from src.services.game_engine import GameEngine

EVENT_TYPES = (GameCreated, GameStarted, PlayerInvited, GameStateChanged)


@pytest.fixture
def engine() -> GameEngine:
    """A fresh engine for every test: no registered players, no games."""
    return GameEngine()


@pytest.fixture
def register(engine: GameEngine) -> Callable[[Player], Player]:
    """Call the inner function with a player to register it with the engine (and get the same player back)."""

    def _register(player: Player) -> Player:
        engine.register_player(player)
        return player

    return _register


@pytest.fixture
def recorded_events(engine: GameEngine) -> list[object]:
    """Every event the engine publishes during the test, in order."""
    events: list[object] = []
    for event_type in EVENT_TYPES:
        engine.subscribe(event_type, events.append)
    return events
