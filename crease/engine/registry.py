"""
Player registry - a keyed store of immutable player records.
"""
import itertools
from dataclasses import dataclass
from typing import Any, Dict, Iterator

from crease.errors import DuplicatePlayerIdError, PlayerNotFoundError


@dataclass(frozen=True)
class Player:
    id: int
    name: str
    rating: Any = None


class PlayerDb:
    """
    Holds player records for one simulation. Identities come from a counter
    owned by the registry, so separate registries never share state.
    """

    def __init__(self, first_id: int = 1):
        self._ids = itertools.count(first_id)
        self._players: Dict[int, Player] = {}

    def add(self, name: str, rating: Any = None) -> Player:
        player_id = next(self._ids)
        while player_id in self._players:
            player_id = next(self._ids)
        player = Player(id=player_id, name=name, rating=rating)
        self._players[player_id] = player
        return player

    def insert(self, player: Player) -> Player:
        """Register a record that already carries an id"""
        if player.id in self._players:
            raise DuplicatePlayerIdError(player.id)
        self._players[player.id] = player
        return player

    def get(self, player_id: int) -> Player:
        try:
            return self._players[player_id]
        except KeyError:
            raise PlayerNotFoundError(player_id) from None

    def name_of(self, player_id: int) -> str:
        return self.get(player_id).name

    def __contains__(self, player_id: int) -> bool:
        return player_id in self._players

    def __iter__(self) -> Iterator[Player]:
        return iter(self._players.values())

    def __len__(self) -> int:
        return len(self._players)
