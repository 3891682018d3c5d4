"""Custom exceptions. Every layer raises a subclass of GameError so callers can catch a single top-level type."""


class GameError(Exception):
    """Top-level exception for anything going wrong while handling a game."""


class GameStateError(GameError):
    """Requested action does not fit the current state of the game (ex. joining a game that already started)."""


class InvalidRequestError(GameError):
    """Payload coming in from the outside cannot be interpreted."""


class PlayerNotRegisteredError(GameError):
    """The player has to be registered with the engine before queueing, inviting or playing."""


class InvalidParticipantError(GameError, ValueError):
    """A player addressed a game they are not part of."""


class RepositoryError(GameError):
    """Something went wrong looking up or storing a game."""


class GameNotFoundError(RepositoryError):
    """No active game with the requested ID (never existed, or finished and got evicted)."""
