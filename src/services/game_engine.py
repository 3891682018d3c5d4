"""Orchestration of all games running on the server: registration, matchmaking queue, invitations and routing of moves."""

import logging
from collections import deque
from threading import RLock
from typing import Callable, Optional
from uuid import UUID

from src.core.exceptions import (
    GameNotFoundError,
    GameStateError,
    InvalidParticipantError,
    PlayerNotRegisteredError,
)
from src.othello.game import Game
from src.othello.player import Player, assign_colors
from src.othello.position import Position
from src.othello.status import GameStatus
from src.services.events import (
    EventBus,
    EventT,
    GameCreated,
    GameStarted,
    GameStateChanged,
    Handler,
    PlayerInvited,
)

logger = logging.getLogger(__name__)

# (inviter, invitee)
InvitationKey = tuple[Player, Player]


class GameEngine:
    """
    Process-wide registry of players and active games.
    ----

    Every registry has its own lock. When more than one is needed they are always taken in this order:
    players -> queue -> invitations -> games -> a single game's lock

    Events are published after all locks are released, so handlers always see committed state.
    """

    def __init__(self, events: Optional[EventBus] = None) -> None:
        self.events = events or EventBus()

        self._players: dict[UUID, Player] = {}
        self._queue: deque[Player] = deque()
        # dict used as an insertion ordered set
        self._invitations: dict[InvitationKey, None] = {}
        self._games: dict[UUID, Game] = {}

        self._players_lock = RLock()
        self._queue_lock = RLock()
        self._invitations_lock = RLock()
        self._games_lock = RLock()

    # --- SUBSCRIPTIONS ---
    def subscribe(self, event_type: type[EventT], handler: Handler[EventT]) -> Callable[[], bool]:
        return self.events.subscribe(event_type, handler)

    def unsubscribe(self, event_type: type[EventT], handler: Handler[EventT]) -> bool:
        return self.events.unsubscribe(event_type, handler)

    # --- REGISTRATION ---
    def register_player(self, player: Player) -> None:
        """Idempotent: registering the same player again changes nothing."""
        with self._players_lock:
            if player.player_id in self._players:
                return
            self._players[player.player_id] = player
        logger.info("Registered player %s (%s)", player.name, player.player_id)

    def is_registered(self, player: Player) -> bool:
        with self._players_lock:
            return self._players.get(player.player_id) == player

    def find_player(self, player_id: UUID) -> Optional[Player]:
        with self._players_lock:
            return self._players.get(player_id)

    # --- GAME CREATION ---
    def create_new_game(self, player: Player) -> GameStatus:
        """Open a new game. The player waits for someone to join it."""
        self._assert_registered(player)

        game = Game.new_game(player)
        status = self._store_game(game)
        logger.info("Game %s created by %s", game.game_id, player.name)

        self.events.publish(GameCreated(status))
        return status

    def add_game(self, game: Game) -> GameStatus:
        """Register a game that was set up elsewhere (ex. from a custom board position)."""
        self._assert_registered(*game.participants)
        status = self._store_game(game)
        logger.info("Game %s added in state %s", game.game_id, status.game_state)
        return status

    def join_game(self, game_id: UUID, player: Player) -> GameStatus:
        """
        Second player joins an open game.
        ----

        Raises GameStateError if the game is not waiting for an opponent, or if the player already plays a game.
        """
        self._assert_registered(player)
        game = self._fetch_game(game_id)

        with self._queue_lock, self._invitations_lock:
            if self._is_playing(player):
                raise GameStateError(f"{player.name} is already playing a game.")
            with game.lock:
                game.join_opponent(player)
                status = game.status()
            self._withdraw(player)
        logger.info("%s joined game %s", player.name, game_id)

        self._publish_game_started(game, status)
        return status

    # --- MATCHMAKING QUEUE ---
    def put_player_in_queue(self, player: Player) -> Optional[GameStatus]:
        """
        Wait for a random opponent.
        ----

        As soon as two players are waiting, the two who waited longest get paired into a new game
        (the first one in line gets Black unless the players' roles say otherwise).
        Returns the status of that game if this call made a pairing.
        A player who is already playing a game does not get queued.
        """
        self._assert_registered(player)

        with self._queue_lock, self._invitations_lock:
            if self._is_playing(player):
                logger.warning("%s is already playing and cannot wait in the queue", player.name)
                return None

            if player not in self._queue:
                self._queue.append(player)
                logger.info("%s is waiting in the queue", player.name)

            if len(self._queue) < 2:
                return None

            black, white = assign_colors(self._queue.popleft(), self._queue.popleft())
            game = Game.between(black, white)
            status = self._store_game(game)
        logger.info("Queue paired %s (black) and %s (white) in game %s", black.name, white.name, game.game_id)

        self._publish_game_started(game, status)
        return status

    def leave_queue(self, player: Player) -> bool:
        """Returns True if the player was waiting in the queue."""
        with self._queue_lock:
            if player not in self._queue:
                return False
            self._queue.remove(player)
        logger.info("%s left the queue", player.name)
        return True

    @property
    def queued_players(self) -> list[Player]:
        with self._queue_lock:
            return list(self._queue)

    # --- INVITATIONS ---
    def try_invite_player_to_game(self, inviter: Player, invitee: Player) -> bool:
        """
        Invite a specific player to a game.
        ----

        * Fails (False, nothing published) if either player is already playing a game.
        * If the invitee already invited the inviter, the two of them start a game right away.
        * Otherwise the invitation stays pending until the invitee responds.
        """
        self._assert_registered(inviter, invitee)
        if inviter == invitee:
            logger.warning("%s tried to invite themselves", inviter.name)
            return False

        with self._queue_lock, self._invitations_lock:
            if self._is_playing(invitee):
                logger.warning("%s invited %s, who is already playing", inviter.name, invitee.name)
                return False
            if self._is_playing(inviter):
                logger.warning("%s is already playing and cannot invite %s", inviter.name, invitee.name)
                return False

            if (invitee, inviter) in self._invitations:
                # Both invited each other: no need to wait for a response
                black, white = assign_colors(invitee, inviter)
                game = Game.between(black, white)
                status = self._store_game(game)
                mutual = True
            else:
                self._invitations[(inviter, invitee)] = None
                mutual = False

        if mutual:
            logger.info("Mutual invitation of %s and %s started game %s", inviter.name, invitee.name, game.game_id)
            self._publish_game_started(game, status)
        else:
            logger.info("%s invited %s", inviter.name, invitee.name)
            self.events.publish(PlayerInvited(inviter=inviter, invitee=invitee))
        return True

    def invitation_response(self, responder: Player, inviter: Player, accepted: bool) -> bool:
        """
        Answer a pending invitation.
        ----

        Returns False if there was no such invitation. Accepting starts a new game, declining just drops the invitation.
        Accepting while one of the two players is already playing fails (False) and drops the invitation.
        """
        self._assert_registered(responder, inviter)

        with self._queue_lock, self._invitations_lock:
            if (inviter, responder) not in self._invitations:
                logger.warning("%s responded to a non-existing invitation from %s", responder.name, inviter.name)
                return False
            self._invitations.pop((inviter, responder))

            if not accepted:
                logger.info("%s declined the invitation of %s", responder.name, inviter.name)
                return True

            if self._is_playing(responder) or self._is_playing(inviter):
                logger.warning(
                    "%s accepted the invitation of %s, but one of them is already playing", responder.name, inviter.name
                )
                return False

            black, white = assign_colors(inviter, responder)
            game = Game.between(black, white)
            status = self._store_game(game)
        logger.info("%s accepted the invitation of %s: game %s", responder.name, inviter.name, game.game_id)

        self._publish_game_started(game, status)
        return True

    def pending_invitations(self, player: Player) -> list[Player]:
        """Players waiting for an answer from this player (oldest first)."""
        with self._invitations_lock:
            return [inviter for inviter, invitee in self._invitations if invitee == player]

    # --- PLAYING ---
    def make_move(self, game_id: UUID, player: Player, position: Position) -> Optional[GameStatus]:
        """
        Route a move to its game.
        ----

        Raises GameNotFoundError for unknown (or already finished) games,
        and InvalidParticipantError if the player is not playing in this game.
        Returns None if the move is illegal (wrong turn, occupied cell, nothing captured): nothing gets published then.
        A game that finishes with this move is removed from the active games.
        """
        game = self._fetch_game(game_id)

        with game.lock:
            if not game.is_participant(player):
                raise InvalidParticipantError(f"{player.name} is not playing in game {game_id}.")

            result = game.make_move(player, position)
            if result is None:
                logger.warning("Illegal move by %s in game %s at %s", player.name, game_id, position)
                return None
            status = game.status()

        if status.is_finished:
            with self._games_lock:
                self._games.pop(game_id, None)
            logger.info("Game %s finished and removed from active games", game_id)

        self.events.publish(GameStateChanged(player=player, status=status))
        return status

    def legal_moves(self, game_id: UUID, player: Player) -> list[Position]:
        """Positions the player may play right now. Empty when it is not their turn."""
        game = self._fetch_game(game_id)
        if not game.is_participant(player):
            raise InvalidParticipantError(f"{player.name} is not playing in game {game_id}.")
        return game.legal_moves(player)

    def get_game_status(self, game_id: UUID) -> GameStatus:
        return self._fetch_game(game_id).status()

    @property
    def active_games(self) -> list[GameStatus]:
        with self._games_lock:
            games = list(self._games.values())
        return [game.status() for game in games]

    # -- INTERNAL HELPERS --
    def _assert_registered(self, *players: Player) -> None:
        for player in players:
            if not self.is_registered(player):
                raise PlayerNotRegisteredError(f"Player {player.name!r} is not registered.")

    def _store_game(self, game: Game) -> GameStatus:
        """Keep the game among the active games. Its players stop waiting for any other opponent."""
        participants = game.participants
        with self._queue_lock, self._invitations_lock:
            self._withdraw(*participants)
            with self._games_lock:
                self._games[game.game_id] = game
        return game.status()

    def _withdraw(self, *players: Player) -> None:
        """Take the players out of the queue and drop every invitation they sent or received."""
        with self._queue_lock, self._invitations_lock:
            for player in players:
                if player in self._queue:
                    self._queue.remove(player)
            for inviter, invitee in list(self._invitations):
                if inviter in players or invitee in players:
                    del self._invitations[(inviter, invitee)]

    def _fetch_game(self, game_id: UUID) -> Game:
        """Attempt to find the game among the active games and raise error if it fails."""
        with self._games_lock:
            game = self._games.get(game_id)
        if game is None:
            raise GameNotFoundError(f"Game with {game_id=} not found.")
        return game

    def _is_playing(self, player: Player) -> bool:
        with self._games_lock:
            games = list(self._games.values())
        return any(game.is_participant(player) for game in games)

    def _publish_game_started(self, game: Game, status: GameStatus) -> None:
        for participant in game.participants:
            self.events.publish(GameStarted(participant=participant, status=status))
