"""HTTP routes of the tennis player API.

`router` bundles the player endpoints (`/players`, `/players/{player_id}`,
`/players/{player_id}/titles`); the application factory mounts it under the
configured `API_PREFIX`. Composition lives in `api_router.py`.
"""

from .api_router import router
