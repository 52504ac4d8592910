"""Player API routes.

Responsibilities:
- player directory endpoints (`/players`, `/players/{id}`)
- create, full update, partial update and delete of a player
- the dedicated titles-only update (`/players/{id}/titles`)

Handlers stay thin: they decode the request, call `PlayerService`, and let the
exception handlers in `errors.py` produce error responses.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Response, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas import TITLES_MAX, TITLES_MIN, ErrorOut, PlayerCreate, PlayerOut, validate_full_update
from ..service import PlayerService
from ..store import PlayerStore

router = APIRouter(tags=["players"])

_NOT_FOUND = {404: {"model": ErrorOut}}


def get_player_service(db: Session = Depends(get_db)) -> PlayerService:
    """FastAPI dependency wiring a request-scoped store into the service."""
    return PlayerService(PlayerStore(db))


@router.get("/players", response_model=list[PlayerOut])
def list_players(service: PlayerService = Depends(get_player_service)):
    """List every player in ascending id order.

    Returns:
        list: Player objects; empty when the store holds none.
    """
    return service.get_all_players()


@router.get("/players/{player_id}", response_model=PlayerOut, responses=_NOT_FOUND)
def get_player(player_id: int, service: PlayerService = Depends(get_player_service)):
    """Fetch a single player.

    Raises:
        PlayerNotFoundError: 404 if the player does not exist.
    """
    return service.get_player(player_id)


@router.post("/players", response_model=PlayerOut, status_code=status.HTTP_201_CREATED)
def add_player(payload: PlayerCreate, service: PlayerService = Depends(get_player_service)):
    """Create a player. Any `id` in the body is ignored; the store assigns one."""
    return service.add_player(payload)


@router.put(
    "/players/{player_id}",
    response_model=PlayerOut,
    responses={400: {"description": "Incomplete or invalid player"}, **_NOT_FOUND},
)
def update_player(
    player_id: int,
    body: Any = Body(...),
    service: PlayerService = Depends(get_player_service),
):
    """Replace name, nationality, birthDate and titles of a player.

    The body is validated before the player is looked up, so an invalid body
    yields 400 even when the id does not exist.

    Raises:
        InvalidPlayerError: 400 if any attribute is missing or invalid.
        PlayerNotFoundError: 404 if the player does not exist.
    """
    payload = validate_full_update(body)
    return service.update_player(player_id, payload)


@router.patch("/players/{player_id}", response_model=PlayerOut, responses=_NOT_FOUND)
def patch_player(
    player_id: int,
    fields: dict[str, Any] = Body(...),
    service: PlayerService = Depends(get_player_service),
):
    """Apply a partial update: a JSON object of field -> new value.

    Raises:
        PlayerNotFoundError: 404 if the player does not exist.
        UnknownFieldError: 400 for a field that cannot be patched.
        FieldValidationError: 400 for a value of the wrong type.
    """
    return service.patch(player_id, fields)


@router.patch("/players/{player_id}/titles")
def update_titles(
    player_id: int,
    titles: int = Body(..., ge=TITLES_MIN, le=TITLES_MAX),
    service: PlayerService = Depends(get_player_service),
):
    """Set only the title count. The body is a bare JSON integer, e.g. `15`.

    Unknown ids are not reported; the request still returns 200.
    """
    service.update_titles(player_id, titles)
    return Response(status_code=status.HTTP_200_OK)


@router.delete(
    "/players/{player_id}",
    response_class=PlainTextResponse,
    responses=_NOT_FOUND,
)
def delete_player(player_id: int, service: PlayerService = Depends(get_player_service)):
    """Delete a player together with its profile.

    Returns:
        str: `"Player with id {id} deleted"` as plain text.
    """
    return service.delete_player(player_id)
