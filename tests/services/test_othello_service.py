"""Unit tests for src/services/othello_service.py"""

from uuid import uuid4

import pytest

from src.api.models import (
    CreateGameRequest,
    GetGameRequest,
    InvitationAnswerRequest,
    InvitationResponse,
    InviteRequest,
    JoinGameRequest,
    LegalMovesRequest,
    MoveRequest,
    PlayerResponse,
    QueueRequest,
    RegisterPlayerRequest,
)
from src.core.exceptions import GameError, GameNotFoundError, PlayerNotRegisteredError
from src.core.shared_types import DiscColor, GameState
from src.services.game_engine import GameEngine
from src.services.othello_service import OthelloService, create_service


@pytest.fixture
def service(engine: GameEngine) -> OthelloService:
    return OthelloService(engine)


def _register(service: OthelloService, name: str, color: DiscColor | None = None) -> PlayerResponse:
    return service.register_player(RegisterPlayerRequest(player_name=name, color=color))


# --- REGISTRATION ----
@pytest.mark.parametrize("color", [None, DiscColor.BLACK, DiscColor.WHITE])
def test_register_player(service: OthelloService, color: DiscColor | None) -> None:
    response = _register(service, "Mocker M. Mockerson", color)

    assert response.name == "Mocker M. Mockerson"
    assert response.color == color
    player = service.engine.find_player(response.player_id)
    assert player is not None
    assert player.preferred_color == color


def test_unknown_player_id(service: OthelloService) -> None:
    with pytest.raises(PlayerNotRegisteredError):
        service.create_new_game(CreateGameRequest(player_id=uuid4()))


# --- PLAYING A GAME ----
def test_create_join_and_move(service: OthelloService) -> None:
    """Open a game, let a second player join and play the first move by square name"""
    host = _register(service, "host", DiscColor.BLACK)
    guest = _register(service, "guest")

    created = service.create_new_game(CreateGameRequest(player_id=host.player_id))
    assert created.game_state == GameState.WAITING_FOR_OPPONENT
    assert created.white_player.name == "No player"

    joined = service.join_game(JoinGameRequest(game_id=created.game_id, player_id=guest.player_id))
    assert joined.game_state == GameState.ONGOING
    assert joined.white_player.name == "guest"

    response = service.make_move(
        MoveRequest(game_id=created.game_id, player_id=host.player_id, square="d3")
    )
    assert response.accepted
    assert response.game is not None
    assert response.game.board[2][3] == DiscColor.BLACK.cell_value
    assert [p.square for p in response.game.discs_flipped] == ["d4"]
    assert response.game.disc_of_next_move == DiscColor.WHITE


def test_illegal_move_is_not_accepted(service: OthelloService) -> None:
    host = _register(service, "host", DiscColor.BLACK)
    guest = _register(service, "guest")
    created = service.create_new_game(CreateGameRequest(player_id=host.player_id))
    service.join_game(JoinGameRequest(game_id=created.game_id, player_id=guest.player_id))

    response = service.make_move(
        MoveRequest(game_id=created.game_id, player_id=host.player_id, row=0, column=0)
    )
    assert not response.accepted
    assert response.game is None


def test_queue_pairs_players(service: OthelloService) -> None:
    first = _register(service, "first")
    second = _register(service, "second")

    waiting = service.join_queue(QueueRequest(player_id=first.player_id))
    paired = service.join_queue(QueueRequest(player_id=second.player_id))

    assert not waiting.paired and waiting.game is None
    assert paired.paired and paired.game is not None
    assert paired.game.black_player.name == "first"
    assert [game.game_id for game in service.list_games()] == [paired.game.game_id]


def test_leave_queue(service: OthelloService) -> None:
    player = _register(service, "player")
    service.join_queue(QueueRequest(player_id=player.player_id))
    assert service.leave_queue(QueueRequest(player_id=player.player_id))
    assert not service.leave_queue(QueueRequest(player_id=player.player_id))


def test_invite_and_accept(service: OthelloService) -> None:
    inviter = _register(service, "inviter")
    invitee = _register(service, "invitee")

    sent = service.invite(InviteRequest(inviter_id=inviter.player_id, invitee_id=invitee.player_id))
    answered = service.answer_invitation(
        InvitationAnswerRequest(
            responder_id=invitee.player_id, inviter_id=inviter.player_id, accepted=True
        )
    )

    assert sent == InvitationResponse(success=True)
    assert answered.success
    [game] = service.list_games()
    assert game.game_state == GameState.ONGOING


def test_legal_moves(service: OthelloService) -> None:
    host = _register(service, "host", DiscColor.BLACK)
    guest = _register(service, "guest")
    created = service.create_new_game(CreateGameRequest(player_id=host.player_id))
    service.join_game(JoinGameRequest(game_id=created.game_id, player_id=guest.player_id))

    response = service.legal_moves(LegalMovesRequest(game_id=created.game_id, player_id=host.player_id))

    assert sorted(p.square for p in response.legal_moves) == ["c4", "d3", "e6", "f5"]


def test_get_game_state(service: OthelloService) -> None:
    host = _register(service, "host")
    created = service.create_new_game(CreateGameRequest(player_id=host.player_id))

    assert service.get_game_state(GetGameRequest(game_id=created.game_id)) == created
    with pytest.raises(GameNotFoundError):
        service.get_game_state(GetGameRequest(game_id=uuid4()))


def test_errors_share_a_common_base(service: OthelloService) -> None:
    """Any custom exception can be caught at the boundary as a GameError"""
    with pytest.raises(GameError):
        service.get_game_state(GetGameRequest(game_id=uuid4()))


def test_create_service() -> None:
    service = create_service()
    assert isinstance(service.engine, GameEngine)
    assert service.list_games() == []
