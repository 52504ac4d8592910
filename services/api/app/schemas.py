"""API schemas.

Pydantic models for request/response validation. Field names follow the
public JSON contract (camelCase: `birthDate`, `playerProfile`) through aliases,
while Python code works with snake_case attributes.

Dates travel as `dd-MM-yyyy` strings; ISO `yyyy-MM-dd` is accepted on input too.
"""

from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_serializer, field_validator

from .errors import InvalidPlayerError

DATE_FORMAT = "%d-%m-%Y"
_INPUT_DATE_FORMATS = (DATE_FORMAT, "%Y-%m-%d")

# bounds of the `titles` INTEGER column
TITLES_MIN = -(2**31)
TITLES_MAX = 2**31 - 1


def parse_birth_date(value: Any) -> Optional[date]:
    """Coerce a wire value into a calendar date.

    Args:
        value: A `date`, a string in `dd-MM-yyyy` or `yyyy-MM-dd` form, or None.

    Returns:
        date | None: The parsed date (time components are dropped).

    Raises:
        ValueError: If the value is not a recognisable date.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        for fmt in _INPUT_DATE_FORMATS:
            try:
                return datetime.strptime(value.strip(), fmt).date()
            except ValueError:
                continue
        raise ValueError(f"expected a date formatted dd-MM-yyyy, got {value!r}")
    raise ValueError(f"expected a date string, got {type(value).__name__}")


def format_birth_date(value: Optional[date]) -> Optional[str]:
    return value.strftime(DATE_FORMAT) if value is not None else None


class ProfileIn(BaseModel):
    """Owned profile as supplied by a client. Any `id` is ignored."""

    model_config = ConfigDict(extra="ignore")

    twitter: Optional[str] = None


class _PlayerPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: Optional[str] = None
    nationality: Optional[str] = None
    birth_date: Optional[date] = Field(default=None, alias="birthDate")
    player_profile: Optional[ProfileIn] = Field(default=None, alias="playerProfile")

    @field_validator("birth_date", mode="before")
    @classmethod
    def _parse_birth_date(cls, value: Any) -> Optional[date]:
        return parse_birth_date(value)


class PlayerCreate(_PlayerPayload):
    """Body of `POST /players`. A client-supplied `id` is dropped."""

    titles: int = Field(default=0, ge=TITLES_MIN, le=TITLES_MAX)


class PlayerUpdate(_PlayerPayload):
    """Body of `PUT /players/{id}`; completeness is checked by `validate_full_update`."""

    titles: Optional[int] = Field(default=None, ge=TITLES_MIN, le=TITLES_MAX)


class ProfileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    twitter: Optional[str] = None


class PlayerOut(BaseModel):
    """Player as returned to clients."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    name: Optional[str] = None
    nationality: Optional[str] = None
    birth_date: Optional[date] = Field(default=None, alias="birthDate")
    titles: int
    player_profile: Optional[ProfileOut] = Field(default=None, alias="playerProfile")

    @field_serializer("birth_date")
    def _format_birth_date(self, value: Optional[date]) -> Optional[str]:
        return format_birth_date(value)


class ErrorOut(BaseModel):
    """Structured error body (documented in OpenAPI for 4xx responses)."""

    timestamp: str
    statusCode: int
    path: str
    message: str


def validate_full_update(body: Any) -> PlayerUpdate:
    """Check a full-update body before anything touches the store.

    All of name, nationality, birthDate and titles must be present; name and
    nationality must not be blank and titles must not be negative.

    Raises:
        InvalidPlayerError: On any missing, blank, unparseable or negative value.
    """
    try:
        payload = PlayerUpdate.model_validate(body)
    except ValidationError as exc:
        raise InvalidPlayerError() from exc

    if (
        payload.name is None or not payload.name.strip()
        or payload.nationality is None or not payload.nationality.strip()
        or payload.birth_date is None
        or payload.titles is None or payload.titles < 0
    ):
        raise InvalidPlayerError()
    return payload
