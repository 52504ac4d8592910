"""API data models.

SQLAlchemy declarative models for the two persisted entities:

- `Player`: a tennis player record (`players` table)
- `PlayerProfile`: an optional social profile owned 1:1 by a player
  (`player_profiles` table)

A profile has no life of its own: it is created with (or attached to) its
player and removed when the player is removed or the profile is detached.
"""

from datetime import date
from typing import Optional

from sqlalchemy import Date, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .db import Base


class PlayerProfile(Base):
    __tablename__ = "player_profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    twitter: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"PlayerProfile(id={self.id!r}, twitter={self.twitter!r})"


class Player(Base):
    __tablename__ = "players"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[Optional[str]] = mapped_column(String(255))
    nationality: Mapped[Optional[str]] = mapped_column(String(255))
    birth_date: Mapped[Optional[date]] = mapped_column(Date)
    titles: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    profile_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("player_profiles.id"), nullable=True
    )

    # single_parent + delete-orphan: the profile goes with the player
    player_profile: Mapped[Optional[PlayerProfile]] = relationship(
        cascade="all, delete-orphan",
        single_parent=True,
        lazy="joined",
    )

    def __repr__(self) -> str:
        return (
            f"Player(id={self.id!r}, name={self.name!r}, nationality={self.nationality!r}, "
            f"birth_date={self.birth_date!r}, titles={self.titles!r})"
        )
