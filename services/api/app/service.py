"""Player service: business rules on top of `PlayerStore`.

Every mutator except `update_titles` checks that the player exists and raises
`PlayerNotFoundError` otherwise. `update_titles` goes straight to the store's
single-column write and reports nothing when the id is unknown; callers that
need not-found semantics must check first.
"""

import logging
from typing import Any, Mapping

from .errors import PlayerNotFoundError
from .models import Player, PlayerProfile
from .patch import apply_patch
from .schemas import PlayerCreate, PlayerUpdate
from .store import PlayerStore

logger = logging.getLogger(__name__)


class PlayerService:
    def __init__(self, store: PlayerStore):
        self.store = store

    def get_all_players(self) -> list[Player]:
        return self.store.list_all()

    def get_player(self, player_id: int) -> Player:
        player = self.store.find_by_id(player_id)
        if player is None:
            raise PlayerNotFoundError(player_id)
        return player

    def add_player(self, payload: PlayerCreate) -> Player:
        """Create a player from `payload`; ids are always assigned by the store."""
        player = Player(
            name=payload.name,
            nationality=payload.nationality,
            birth_date=payload.birth_date,
            titles=payload.titles,
        )
        if payload.player_profile is not None:
            player.player_profile = PlayerProfile(twitter=payload.player_profile.twitter)

        player = self.store.insert(player)
        logger.info("Created player %s (%s)", player.id, player.name)
        return player

    def update_player(self, player_id: int, payload: PlayerUpdate) -> Player:
        """Overwrite name, nationality, birth date and titles. The profile is left as is."""
        player = self.get_player(player_id)
        player.name = payload.name
        player.nationality = payload.nationality
        player.birth_date = payload.birth_date
        player.titles = payload.titles

        player = self.store.update(player)
        logger.info("Updated player %s", player_id)
        return player

    def patch(self, player_id: int, fields: Mapping[str, Any]) -> Player:
        player = self.get_player(player_id)
        applied = apply_patch(player, fields)
        if not applied:
            return player

        player = self.store.update(player)
        logger.info("Patched player %s fields=%s", player_id, applied)
        return player

    def update_titles(self, player_id: int, titles: int) -> None:
        rows = self.store.update_titles_only(player_id, titles)
        if rows == 0:
            logger.warning("Titles update matched no player (id=%s)", player_id)
        else:
            logger.info("Set titles=%s for player %s", titles, player_id)

    def delete_player(self, player_id: int) -> str:
        """Delete the player and its profile.

        Returns:
            str: Confirmation message for the client.
        """
        self.get_player(player_id)
        self.store.delete(player_id)
        logger.info("Deleted player %s", player_id)
        return f"Player with id {player_id} deleted"
