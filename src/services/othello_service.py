"""Orchestration of communication from the transport layer (requests by player/game ID) to the game engine (and the reverse direction)."""

import logging
from uuid import UUID

from src.api.models import (
    CreateGameRequest,
    GameResponse,
    GetGameRequest,
    InvitationAnswerRequest,
    InvitationResponse,
    InviteRequest,
    JoinGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    MoveResponse,
    PlayerResponse,
    PositionResponse,
    QueueRequest,
    QueueResponse,
    RegisterPlayerRequest,
)
from src.core.config import configure_logging
from src.core.exceptions import PlayerNotRegisteredError
from src.core.shared_types import DiscColor
from src.othello.player import BlackPlayer, Player, WhitePlayer
from src.services.game_engine import GameEngine

logger = logging.getLogger(__name__)

PLAYER_ROLES: dict[DiscColor | None, type[Player]] = {
    None: Player,
    DiscColor.BLACK: BlackPlayer,
    DiscColor.WHITE: WhitePlayer,
}


class OthelloService:
    """Translates requests into engine calls, and engine results into responses."""

    def __init__(self, engine: GameEngine) -> None:
        self.engine = engine

    # -- Routes logic ---
    def register_player(self, request: RegisterPlayerRequest) -> PlayerResponse:
        """New player: the requested color (if any) becomes the player's role."""
        player = PLAYER_ROLES[request.color](request.player_name)
        self.engine.register_player(player)
        return PlayerResponse.from_player(player)

    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        player = self._fetch_player(request.player_id)
        status = self.engine.create_new_game(player)
        return GameResponse.from_status(status)

    def join_game(self, request: JoinGameRequest) -> GameResponse:
        player = self._fetch_player(request.player_id)
        status = self.engine.join_game(request.game_id, player)
        return GameResponse.from_status(status)

    def join_queue(self, request: QueueRequest) -> QueueResponse:
        player = self._fetch_player(request.player_id)
        status = self.engine.put_player_in_queue(player)
        if status is None:
            return QueueResponse(paired=False, game=None)
        return QueueResponse(paired=True, game=GameResponse.from_status(status))

    def leave_queue(self, request: QueueRequest) -> bool:
        player = self._fetch_player(request.player_id)
        return self.engine.leave_queue(player)

    def invite(self, request: InviteRequest) -> InvitationResponse:
        inviter = self._fetch_player(request.inviter_id)
        invitee = self._fetch_player(request.invitee_id)
        return InvitationResponse(success=self.engine.try_invite_player_to_game(inviter, invitee))

    def answer_invitation(self, request: InvitationAnswerRequest) -> InvitationResponse:
        responder = self._fetch_player(request.responder_id)
        inviter = self._fetch_player(request.inviter_id)
        success = self.engine.invitation_response(responder, inviter, request.accepted)
        return InvitationResponse(success=success)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        player = self._fetch_player(request.player_id)
        positions = self.engine.legal_moves(request.game_id, player)
        return LegalMovesResponse(
            game_id=request.game_id,
            player_id=request.player_id,
            legal_moves=[PositionResponse.from_position(p) for p in positions],
        )

    def make_move(self, request: MoveRequest) -> MoveResponse:
        """Make a move attempt. An illegal move is not an error: the response just says it was not accepted."""
        player = self._fetch_player(request.player_id)
        status = self.engine.make_move(request.game_id, player, request.position)
        if status is None:
            return MoveResponse(accepted=False, game=None)
        return MoveResponse(accepted=True, game=GameResponse.from_status(status))

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        return GameResponse.from_status(self.engine.get_game_status(request.game_id))

    def list_games(self) -> list[GameResponse]:
        """All games that are not finished yet."""
        return [GameResponse.from_status(status) for status in self.engine.active_games]

    # -- Internal helpers --
    def _fetch_player(self, player_id: UUID) -> Player:
        """Attempt to find the player among the registered players and raise error if it fails."""
        player = self.engine.find_player(player_id)
        if player is None:
            raise PlayerNotRegisteredError(f"Player with {player_id=} is not registered.")
        return player


def create_service() -> OthelloService:
    """Entry point for the transport layer: one engine for the lifetime of the process."""
    configure_logging()
    logger.info("Starting Othello engine")
    return OthelloService(GameEngine())
