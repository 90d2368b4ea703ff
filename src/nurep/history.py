from __future__ import annotations

import gzip
import zlib
from functools import cached_property
from pathlib import Path

import msgspec

NEUTRAL_OWNER = 0
UNKNOWN_OWNER = -1

_GZIP_MAGIC = b"\x1f\x8b"


class HistoryError(ValueError):
    pass


class Planet(msgspec.Struct, frozen=True):
    id: int
    position: tuple[int, int]


class Connection(msgspec.Struct, frozen=True):
    id_a: int
    id_b: int


class Cluster(msgspec.Struct, frozen=True, dict=True):
    planets: list[Planet] = msgspec.field(default_factory=list)
    connections: list[Connection] = msgspec.field(default_factory=list)
    dimensions: tuple[int, int] | None = None

    def __post_init__(self) -> None:
        seen: set[int] = set()
        for planet in self.planets:
            if planet.id in seen:
                raise ValueError(f"duplicate planet id {planet.id}")
            seen.add(planet.id)
        if self.dimensions is not None:
            width, height = self.dimensions
            if width <= 0 or height <= 0:
                raise ValueError(f"cluster dimensions must be positive, got {width}x{height}")

    @cached_property
    def _planets_by_id(self) -> dict[int, Planet]:
        return {planet.id: planet for planet in self.planets}

    def planet_by_id(self, planet_id: int) -> Planet | None:
        return self._planets_by_id.get(planet_id)


class Game(msgspec.Struct, frozen=True):
    """One recorded game: cluster topology plus per-turn planet ownership.

    `planet_to_owners[planet_id][turn]` is the owning player id. Turns are
    1-indexed. Keys are strings in the JSON document and decode to ints.
    """

    cluster: Cluster
    planet_to_owners: dict[int, dict[int, int]]
    num_turns: int

    def __post_init__(self) -> None:
        if self.num_turns < 0:
            raise ValueError(f"num_turns must not be negative, got {self.num_turns}")

    def owner_at(self, planet_id: int, turn: int) -> int:
        """Owner of `planet_id` at `turn`, or `UNKNOWN_OWNER` when not recorded."""
        turns = self.planet_to_owners.get(planet_id)
        if turns is None:
            return UNKNOWN_OWNER
        owner = turns.get(turn)
        if owner is None:
            return UNKNOWN_OWNER
        return int(owner)

    def player_ids(self) -> list[int]:
        players: set[int] = set()
        for turns in self.planet_to_owners.values():
            players.update(owner for owner in turns.values() if owner > NEUTRAL_OWNER)
        return sorted(players)


_GAME_DECODER = msgspec.json.Decoder(type=Game)


def decode_game(data: bytes) -> Game:
    try:
        return _GAME_DECODER.decode(data)
    except (msgspec.DecodeError, msgspec.ValidationError) as exc:
        raise HistoryError(f"invalid game history: {exc}") from exc


def load_game(path: Path) -> Game:
    path = Path(path)
    if not path.is_file():
        raise HistoryError(f"game history not found: {path}")
    raw = path.read_bytes()
    if raw.startswith(_GZIP_MAGIC):
        try:
            raw = gzip.decompress(raw)
        except (OSError, EOFError, zlib.error) as exc:
            raise HistoryError(f"invalid gzip stream: {path}") from exc
    return decode_game(raw)


__all__ = [
    "Cluster",
    "Connection",
    "Game",
    "HistoryError",
    "NEUTRAL_OWNER",
    "Planet",
    "UNKNOWN_OWNER",
    "decode_game",
    "load_game",
]
