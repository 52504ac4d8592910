"""Partial updates of a Player.

A patch is a sparse JSON object of wire field name -> new value. Each
patchable field has an explicit handler that turns the raw JSON value into the
attribute's type; there is no attribute lookup by name.

`apply_patch` works in two passes: every entry is coerced first, and only when
all of them are valid is anything assigned. A bad entry therefore leaves the
target untouched.

Notes:
- `id` is accepted and ignored; identity never changes through a patch.
- `titles` must fit the 32-bit column but negatives are allowed here
  (only full updates reject them).
- `playerProfile: null` detaches the profile, which deletes its row on commit.
"""

from typing import Any, Callable, Mapping

from .errors import FieldValidationError, UnknownFieldError
from .models import Player, PlayerProfile
from .schemas import TITLES_MAX, TITLES_MIN, parse_birth_date

IGNORED_FIELDS = frozenset({"id"})
_PROFILE_FIELDS = frozenset({"twitter"})


def _coerce_text(field: str, value: Any) -> str:
    if not isinstance(value, str):
        raise FieldValidationError(field, "expected a string")
    return value


def _coerce_birth_date(field: str, value: Any):
    if value is None:
        raise FieldValidationError(field, "must not be null")
    try:
        return parse_birth_date(value)
    except ValueError as exc:
        raise FieldValidationError(field, str(exc)) from exc


def _parse_titles(field: str, value: Any) -> int:
    # bool is an int subclass; true/false is never a title count
    if isinstance(value, bool):
        raise FieldValidationError(field, "expected an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise FieldValidationError(field, "expected an integer")


def _coerce_titles(field: str, value: Any) -> int:
    titles = _parse_titles(field, value)
    if not TITLES_MIN <= titles <= TITLES_MAX:
        raise FieldValidationError(field, "out of range")
    return titles


def _coerce_profile(field: str, value: Any):
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise FieldValidationError(field, "expected an object or null")
    coerced = {}
    for key, item in value.items():
        if key in IGNORED_FIELDS:
            continue
        if key not in _PROFILE_FIELDS:
            raise UnknownFieldError(f"{field}.{key}")
        if item is not None and not isinstance(item, str):
            raise FieldValidationError(f"{field}.{key}", "expected a string or null")
        coerced[key] = item
    return coerced


def _set_name(player: Player, value: str) -> None:
    player.name = value


def _set_nationality(player: Player, value: str) -> None:
    player.nationality = value


def _set_birth_date(player: Player, value) -> None:
    player.birth_date = value


def _set_titles(player: Player, value: int) -> None:
    player.titles = value


def _set_profile(player: Player, value) -> None:
    if value is None:
        player.player_profile = None
        return
    if player.player_profile is None:
        # `{}` on a player without a profile creates nothing
        if not value:
            return
        player.player_profile = PlayerProfile()
    for key, item in value.items():
        setattr(player.player_profile, key, item)


# wire field name -> (coerce, assign)
PATCH_HANDLERS: dict[str, tuple[Callable[[str, Any], Any], Callable[[Player, Any], None]]] = {
    "name": (_coerce_text, _set_name),
    "nationality": (_coerce_text, _set_nationality),
    "birthDate": (_coerce_birth_date, _set_birth_date),
    "titles": (_coerce_titles, _set_titles),
    "playerProfile": (_coerce_profile, _set_profile),
}


def apply_patch(target: Player, patch: Mapping[str, Any]) -> list[str]:
    """Apply `patch` onto `target` in place, all or nothing.

    Args:
        target: The player to mutate.
        patch: Wire field name -> raw JSON value.

    Returns:
        list[str]: The field names that were applied, in patch order.

    Raises:
        UnknownFieldError: If a key is not a patchable field.
        FieldValidationError: If a value cannot be converted to the field's type.
    """
    staged = []
    for field, raw in patch.items():
        if field in IGNORED_FIELDS:
            continue
        handler = PATCH_HANDLERS.get(field)
        if handler is None:
            raise UnknownFieldError(field)
        coerce, assign = handler
        staged.append((field, assign, coerce(field, raw)))

    for _, assign, value in staged:
        assign(target, value)
    return [field for field, _, _ in staged]
