"""Player persistence.

`PlayerStore` is the only code that talks to the database. It wraps a
request-scoped SQLAlchemy session and exposes the small set of operations the
service layer needs. Each write runs inside `unit_of_work`, so a player and its
owned profile are committed or rolled back together.

Absence is not an error here: lookups return None and `delete` /
`update_titles_only` are no-ops for unknown ids. The one exception is `update`,
which refuses to write a row that no longer exists.
"""

import logging
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from .db import unit_of_work
from .errors import PlayerNotFoundError
from .models import Player

logger = logging.getLogger(__name__)


class PlayerStore:
    def __init__(self, session: Session):
        self.session = session

    def list_all(self) -> list[Player]:
        """All players in ascending id order."""
        return list(self.session.scalars(select(Player).order_by(Player.id)).unique())

    def find_by_id(self, player_id: int) -> Optional[Player]:
        return self.session.get(Player, player_id)

    def insert(self, player: Player) -> Player:
        """Persist a new player (and its profile, if any) and assign ids."""
        with unit_of_work(self.session):
            self.session.add(player)
            self.session.flush()
        return player

    def update(self, player: Player) -> Player:
        """Write the full state of an already-persisted player.

        Raises:
            PlayerNotFoundError: If no row exists for `player.id`.
        """
        exists = self.session.scalar(select(Player.id).where(Player.id == player.id))
        if exists is None:
            raise PlayerNotFoundError(player.id)
        with unit_of_work(self.session):
            self.session.add(player)
        return player

    def update_titles_only(self, player_id: int, titles: int) -> int:
        """Single-column UPDATE of `titles`, without loading the row.

        Returns:
            int: Number of rows affected (0 when the id is unknown).
        """
        stmt = (
            update(Player)
            .where(Player.id == player_id)
            .values(titles=titles)
            .execution_options(synchronize_session=False)
        )
        with unit_of_work(self.session):
            result = self.session.execute(stmt)
        # drop any cached copy so later reads in this session see the new value
        self.session.expire_all()
        return result.rowcount

    def delete(self, player_id: int) -> None:
        """Remove the player and, by cascade, its profile. No-op if absent."""
        player = self.find_by_id(player_id)
        if player is None:
            logger.debug("delete: player %s already absent", player_id)
            return
        with unit_of_work(self.session):
            self.session.delete(player)
