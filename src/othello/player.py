"""Participants of a game. The role a player registers with decides which discs they get in a new game."""

from dataclasses import dataclass, field
from typing import Optional
from uuid import UUID, uuid4

from src.core.shared_types import DiscColor


@dataclass(frozen=True)
class Player:
    """A player without a preferred color (gets Black when opening a game, and whatever is left when joining one)"""

    name: str
    player_id: UUID = field(default_factory=uuid4)

    @property
    def preferred_color(self) -> Optional[DiscColor]:
        return None


class BlackPlayer(Player):
    @property
    def preferred_color(self) -> Optional[DiscColor]:
        return DiscColor.BLACK


class WhitePlayer(Player):
    @property
    def preferred_color(self) -> Optional[DiscColor]:
        return DiscColor.WHITE


def assign_colors(first: Player, second: Player) -> tuple[Player, Player]:
    """
    Decide who plays Black when pairing two players.
    ---

    By convention the first player gets Black, unless the roles say otherwise:
    * the first player registered as a WhitePlayer, or
    * the first player has no preference and the second one registered as a BlackPlayer.

    Returns (black, white)
    """
    if first.preferred_color == DiscColor.WHITE:
        return second, first
    if first.preferred_color is None and second.preferred_color == DiscColor.BLACK:
        return second, first
    return first, second
