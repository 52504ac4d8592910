"""Tests for `services/api/app/service.py`."""

from datetime import date

import pytest

from services.api.app.errors import FieldValidationError, PlayerNotFoundError, UnknownFieldError
from services.api.app.schemas import PlayerCreate, PlayerUpdate


def _fields(player) -> dict:
    return {
        "name": player.name,
        "nationality": player.nationality,
        "birth_date": player.birth_date,
        "titles": player.titles,
        "twitter": player.player_profile.twitter if player.player_profile else None,
    }


def test_get_all_players_never_fails(service) -> None:
    assert service.get_all_players() == []


@pytest.mark.parametrize(
    "call",
    [
        lambda s: s.get_player(999),
        lambda s: s.update_player(
            999,
            PlayerUpdate(name="A", nationality="B", birthDate="01-01-1990", titles=1),
        ),
        lambda s: s.patch(999, {"name": "A"}),
        lambda s: s.delete_player(999),
    ],
    ids=["get", "update", "patch", "delete"],
)
def test_missing_player_raises_not_found(service, call) -> None:
    with pytest.raises(PlayerNotFoundError) as excinfo:
        call(service)
    assert excinfo.value.message == "Player with id 999 not found."
    assert excinfo.value.player_id == 999


def test_add_then_get_round_trip(service, session) -> None:
    payload = PlayerCreate.model_validate(
        {
            "id": 42,
            "name": "Andy Murray",
            "nationality": "Great Britain",
            "birthDate": "15-05-1987",
            "titles": 3,
            "playerProfile": {"id": 77, "twitter": "@andy_murray"},
        }
    )

    created = service.add_player(payload)
    session.expire_all()
    fetched = service.get_player(created.id)

    assert fetched.id == created.id
    assert _fields(fetched) == {
        "name": "Andy Murray",
        "nationality": "Great Britain",
        "birth_date": date(1987, 5, 15),
        "titles": 3,
        "twitter": "@andy_murray",
    }
    assert fetched.player_profile.id


def test_update_player_keeps_profile_and_is_idempotent(service, session, federer) -> None:
    payload = PlayerUpdate(name="Roger", nationality="SUI", birthDate="08-08-1981", titles=103)

    service.update_player(federer.id, payload)
    session.expire_all()
    first = _fields(service.get_player(federer.id))

    service.update_player(federer.id, payload)
    session.expire_all()
    second = _fields(service.get_player(federer.id))

    assert first == second
    assert first["titles"] == 103
    assert first["twitter"] == "@rogerfederer"


def test_empty_patch_leaves_player_unchanged(service, session, nadal) -> None:
    before = _fields(nadal)
    service.patch(nadal.id, {})
    session.expire_all()
    assert _fields(service.get_player(nadal.id)) == before


def test_patch_persists_named_fields_only(service, session, nadal) -> None:
    service.patch(nadal.id, {"name": "X", "titles": 10})
    session.expire_all()
    after = _fields(service.get_player(nadal.id))
    assert after["name"] == "X"
    assert after["titles"] == 10
    assert after["nationality"] == "Spain"
    assert after["birth_date"] == date(1986, 6, 3)


def test_patch_with_unknown_field_does_not_mutate(service, session, nadal) -> None:
    before = _fields(nadal)

    with pytest.raises(UnknownFieldError):
        service.patch(nadal.id, {"name": "X", "surface": "clay"})

    assert _fields(nadal) == before
    session.expire_all()
    assert _fields(service.get_player(nadal.id)) == before


def test_patch_with_bad_value_propagates(service, nadal) -> None:
    with pytest.raises(FieldValidationError):
        service.patch(nadal.id, {"birthDate": "not a date"})


def test_update_titles_changes_only_titles(service, session, federer) -> None:
    before = _fields(federer)

    service.update_titles(federer.id, 99)
    session.expire_all()
    after = _fields(service.get_player(federer.id))

    assert after.pop("titles") == 99
    before.pop("titles")
    assert after == before


def test_update_titles_does_not_check_existence(service) -> None:
    # unlike every other mutator, the titles path reports nothing for unknown ids
    service.update_titles(999, 5)
    with pytest.raises(PlayerNotFoundError):
        service.get_player(999)


def test_delete_removes_player_and_returns_message(service, federer) -> None:
    assert service.delete_player(federer.id) == f"Player with id {federer.id} deleted"
    with pytest.raises(PlayerNotFoundError):
        service.get_player(federer.id)
