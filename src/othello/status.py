"""
Read-only snapshot of a game, recomputed from the Game on demand.

This is what gets handed to whoever listens to the engine (transport layer, tests, ...)
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from src.core.shared_types import DiscColor, GameState
from src.othello.position import Move, Position

# Name reported for the white side while the game is still waiting for an opponent
NO_PLAYER_NAME = "No player"


@dataclass(frozen=True)
class PlayerStatus:
    name: str
    score: int


@dataclass(frozen=True)
class GameStatus:
    game_id: UUID
    game_state: GameState
    board: tuple[tuple[int, ...], ...]
    disc_of_next_move: DiscColor
    discs_flipped: tuple[Position, ...]
    last_valid_move: Optional[Move]
    black_player_status: PlayerStatus
    white_player_status: PlayerStatus

    @property
    def is_finished(self) -> bool:
        return self.game_state == GameState.FINISHED

    def score(self, color: DiscColor) -> int:
        if color == DiscColor.BLACK:
            return self.black_player_status.score
        return self.white_player_status.score
