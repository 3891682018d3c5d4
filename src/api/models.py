"""Requests and Response models"""

from typing import Optional, Self
from uuid import UUID

from pydantic import BaseModel, field_validator, model_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import DiscColor, GameState
from src.othello.player import Player
from src.othello.position import BOARD_SIZE, Position
from src.othello.status import GameStatus


# --- REQUEST MODELS ---
class RegisterPlayerRequest(BaseModel):
    player_name: str
    color: Optional[DiscColor] = None

    @field_validator("player_name")
    @classmethod
    def validate_player_name(cls, value: str) -> str:
        if not value.strip():
            raise InvalidRequestError("Player name cannot be empty.")
        return value.strip()


class CreateGameRequest(BaseModel):
    player_id: UUID


class QueueRequest(BaseModel):
    player_id: UUID


class InviteRequest(BaseModel):
    inviter_id: UUID
    invitee_id: UUID


class InvitationAnswerRequest(BaseModel):
    responder_id: UUID
    inviter_id: UUID
    accepted: bool


class JoinGameRequest(BaseModel):
    game_id: UUID
    player_id: UUID


class LegalMovesRequest(BaseModel):
    game_id: UUID
    player_id: UUID


class MoveRequest(BaseModel):
    """The target cell is given either as a row/column pair (0-indexed) or as a square name like 'd3'."""

    game_id: UUID
    player_id: UUID
    row: Optional[int] = None
    column: Optional[int] = None
    square: Optional[str] = None

    @field_validator(*["row", "column"])
    @classmethod
    def validate_index(cls, value: Optional[int]) -> Optional[int]:
        if value is None:
            return value
        if not 0 <= value < BOARD_SIZE:
            raise InvalidRequestError(
                f"Row and column must lie between 0 and {BOARD_SIZE - 1}, got {value}."
            )
        return value

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value

        def _is_algebraic_notation(value: str) -> bool:
            if len(value) != 2:
                return False
            return value[0].lower() in "abcdefgh"[:BOARD_SIZE] and value[1] in "12345678"[:BOARD_SIZE]

        if not _is_algebraic_notation(value):
            raise InvalidRequestError(
                f"Cannot interpret square: {value!r} as a valid square name."
            )
        return value.lower()

    @model_validator(mode="after")
    def validate_target(self) -> Self:
        has_indices = self.row is not None and self.column is not None
        has_square = self.square is not None
        if has_indices == has_square:
            raise InvalidRequestError(
                "Supply either both row and column, or a square name (not both)."
            )
        return self

    @property
    def position(self) -> Position:
        if self.square is not None:
            return Position.from_algebraic(self.square)
        # for the type checker: the model validator guarantees both are set
        assert self.row is not None and self.column is not None
        return Position(self.row, self.column)


class GetGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class PlayerResponse(BaseModel):
    player_id: UUID
    name: str
    color: Optional[DiscColor]

    @classmethod
    def from_player(cls, player: Player) -> Self:
        return cls(player_id=player.player_id, name=player.name, color=player.preferred_color)


class PositionResponse(BaseModel):
    row: int
    column: int
    square: str

    @classmethod
    def from_position(cls, position: Position) -> Self:
        return cls(row=position.row, column=position.column, square=position.to_algebraic())


class LastMoveResponse(BaseModel):
    position: PositionResponse
    color: DiscColor


class PlayerStatusResponse(BaseModel):
    name: str
    score: int


class GameResponse(BaseModel):
    """Status snapshot of a game. The board keeps the numeric encoding: -1 black, 1 white, 0 empty."""

    game_id: UUID
    game_state: GameState
    board: list[list[int]]
    disc_of_next_move: DiscColor
    discs_flipped: list[PositionResponse]
    last_valid_move: Optional[LastMoveResponse]
    black_player: PlayerStatusResponse
    white_player: PlayerStatusResponse

    @classmethod
    def from_status(cls, status: GameStatus) -> Self:
        last_move = status.last_valid_move
        return cls(
            game_id=status.game_id,
            game_state=status.game_state,
            board=[list(row) for row in status.board],
            disc_of_next_move=status.disc_of_next_move,
            discs_flipped=[PositionResponse.from_position(p) for p in status.discs_flipped],
            last_valid_move=(
                LastMoveResponse(
                    position=PositionResponse.from_position(last_move.position),
                    color=last_move.color,
                )
                if last_move
                else None
            ),
            black_player=PlayerStatusResponse(
                name=status.black_player_status.name,
                score=status.black_player_status.score,
            ),
            white_player=PlayerStatusResponse(
                name=status.white_player_status.name,
                score=status.white_player_status.score,
            ),
        )


class QueueResponse(BaseModel):
    paired: bool
    game: Optional[GameResponse]


class InvitationResponse(BaseModel):
    success: bool


class MoveResponse(BaseModel):
    accepted: bool
    game: Optional[GameResponse]


class LegalMovesResponse(BaseModel):
    game_id: UUID
    player_id: UUID
    legal_moves: list[PositionResponse]
