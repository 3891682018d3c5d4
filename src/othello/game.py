"""
The Game class is the entrypoint into the domain layer for the engine.
It wraps a Board with the two participants and decides whose turn it is, when a turn gets passed and when the game is over.
"""

import logging
from dataclasses import dataclass, field
from threading import RLock
from typing import Optional, Self
from uuid import UUID, uuid4

from src.core.exceptions import GameStateError
from src.core.shared_types import DiscColor, GameState
from src.othello.board import Board, MoveResult
from src.othello.player import Player
from src.othello.position import Move, Position
from src.othello.status import NO_PLAYER_NAME, GameStatus, PlayerStatus

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Game:
    # --- DOMAIN LAYER API CALLED BY THE ENGINE ---

    board: Board
    players: dict[DiscColor, Player]
    state: GameState
    color_to_move: DiscColor = DiscColor.BLACK
    last_move: Optional[MoveResult] = None
    game_id: UUID = field(default_factory=uuid4)
    # All access to a single game is serialised through its own lock, so games never contend with each other
    lock: RLock = field(default_factory=RLock, repr=False)

    @classmethod
    def new_game(cls, player: Player, board: Optional[Board] = None) -> Self:
        """A player opens a game and waits for an opponent. A player without a preferred color gets the Black discs."""
        color = player.preferred_color or DiscColor.BLACK
        return cls(
            board=board if board is not None else Board(),
            players={color: player},
            state=GameState.WAITING_FOR_OPPONENT,
        )

    @classmethod
    def between(cls, black: Player, white: Player, board: Optional[Board] = None) -> Self:
        """Both players are known up front (queue / invitation): the game starts immediately."""
        game = cls(
            board=board if board is not None else Board(),
            players={DiscColor.BLACK: black},
            state=GameState.WAITING_FOR_OPPONENT,
        )
        game.join_opponent(white)
        return game

    # --- PLAYERS ---
    @property
    def black_player(self) -> Optional[Player]:
        return self.players.get(DiscColor.BLACK)

    @property
    def white_player(self) -> Optional[Player]:
        return self.players.get(DiscColor.WHITE)

    @property
    def participants(self) -> list[Player]:
        with self.lock:
            return list(self.players.values())

    def is_participant(self, player: Player) -> bool:
        with self.lock:
            return player in self.players.values()

    def color_of(self, player: Player) -> Optional[DiscColor]:
        with self.lock:
            return next(
                (color for color, participant in self.players.items() if participant == player),
                None,
            )

    def join_opponent(self, player: Player) -> None:
        """Registering the 2nd player to an open game. The opponent gets whatever color is left."""
        with self.lock:
            if self.state != GameState.WAITING_FOR_OPPONENT:
                raise GameStateError(
                    f"Cannot join this game. Game is not accepting new players. state: {self.state}"
                )
            if self.is_participant(player):
                raise GameStateError(f"{player.name} is already playing in this game.")

            first_color = next(iter(self.players))
            self.players[first_color.opponent] = player
            self._change_state(GameState.ONGOING)

    # --- PLAYING ---
    @property
    def scores(self) -> dict[DiscColor, int]:
        return self.board.scores()

    @property
    def winner(self) -> Optional[Player]:
        """Only known once the game is finished. None on a draw."""
        if self.state != GameState.FINISHED:
            return None
        scores = self.scores
        if scores[DiscColor.BLACK] == scores[DiscColor.WHITE]:
            return None
        winning_color = max(scores, key=lambda color: scores[color])
        return self.players.get(winning_color)

    def legal_moves(self, player: Player) -> list[Position]:
        """Positions the player can play right now (empty if it is not their turn)"""
        with self.lock:
            if self.state != GameState.ONGOING:
                return []
            if self.color_of(player) != self.color_to_move:
                return []
            return self.board.legal_moves(self.color_to_move)

    def make_move(self, player: Player, position: Position) -> Optional[MoveResult]:
        """
        Attempt to place a disc
        -----

        Returns None, with the board left as it was, when:
        * the game is not ongoing
        * the player is not the one to move (or not playing in this game at all)
        * the target cell is occupied, or placing there captures nothing

        On success:
        1. the discs get flipped on the board
        2. the turn goes to the opponent, or stays put if the opponent has to pass
        3. the game finishes when neither color can move anymore
        """
        with self.lock:
            if self.state != GameState.ONGOING:
                return None

            player_color = self.color_of(player)
            if player_color is None or player_color != self.color_to_move:
                return None

            result = self.board.try_move(Move(position, player_color))
            if result is None:
                return None

            self.last_move = result
            self._update_turn()
            return result

    def status(self) -> GameStatus:
        """Snapshot of the current game, scores counted live from the board"""
        with self.lock:
            scores = self.scores
            black, white = self.black_player, self.white_player
            return GameStatus(
                game_id=self.game_id,
                game_state=self.state,
                board=self.board.cells(),
                disc_of_next_move=self.color_to_move,
                discs_flipped=self.last_move.flipped if self.last_move else (),
                last_valid_move=self.last_move.move if self.last_move else None,
                black_player_status=PlayerStatus(
                    black.name if black else NO_PLAYER_NAME, scores[DiscColor.BLACK]
                ),
                white_player_status=PlayerStatus(
                    white.name if white else NO_PLAYER_NAME, scores[DiscColor.WHITE]
                ),
            )

    # -- PRIVATE HELPERS ---
    def _update_turn(self) -> None:
        """Decide who moves next, or finish the game.

        NOTE the board has already been updated. At this point color_to_move is still the color that just moved.
        """
        mover = self.color_to_move
        if self.board.has_moves(mover.opponent):
            self.color_to_move = mover.opponent
            return

        if self.board.has_moves(mover):
            logger.info("Game %s: %s has to pass", self.game_id, mover.opponent)
            return

        self._finish()

    def _finish(self) -> None:
        """Neither color can move (full board, a wiped out color, or a blocked position)."""
        for color in DiscColor:
            # Only a wiped out color gets cleared. It has no discs left, so the board stays as it is.
            if self.board.count(color) == 0:
                self.board.remove_discs_for_color(color)
        self._change_state(GameState.FINISHED)
        logger.info("Game %s finished with scores %s", self.game_id, self.scores)

    def _change_state(self, new_state: GameState) -> None:
        # Once finished, a game never changes state again
        assert self.state != GameState.FINISHED, "Finished games cannot change state"
        self.state = new_state
