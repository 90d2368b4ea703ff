from __future__ import annotations

from typing import Protocol

from .color import BACKGROUND_COLOR, CONNECTION_COLOR, RGBA, owner_color
from .history import Game
from .transform import CoordTransform

DEFAULT_RADIUS_DIVISOR = 175

ScreenPoint = tuple[int, int]


class SurfaceError(RuntimeError):
    pass


class Surface(Protocol):
    def clear(self, color: RGBA) -> None: ...

    def draw_circle(self, center: ScreenPoint, radius: int, color: RGBA) -> None: ...

    def draw_line(self, start: ScreenPoint, end: ScreenPoint, color: RGBA) -> None: ...


def planet_radius(draw_size: int, divisor: int = DEFAULT_RADIUS_DIVISOR) -> int:
    return max(1, int(draw_size) // max(1, int(divisor)))


class FrameRenderer:
    """Draws one turn of a recorded game onto a `Surface`.

    Screen positions are resolved once up front; `draw` only looks up owners,
    so drawing the same turn twice issues the same calls.
    """

    def __init__(self, game: Game, transform: CoordTransform, radius: int) -> None:
        self._game = game
        self._radius = int(radius)
        cluster = game.cluster
        self._planet_points: list[tuple[int, ScreenPoint]] = [
            (planet.id, transform.apply(planet.position)) for planet in cluster.planets
        ]
        self._connection_points: list[tuple[ScreenPoint, ScreenPoint]] = []
        self._skipped_connections = 0
        for connection in cluster.connections:
            planet_a = cluster.planet_by_id(connection.id_a)
            planet_b = cluster.planet_by_id(connection.id_b)
            if planet_a is None or planet_b is None:
                self._skipped_connections += 1
                continue
            self._connection_points.append(
                (transform.apply(planet_a.position), transform.apply(planet_b.position))
            )

    @property
    def radius(self) -> int:
        return self._radius

    @property
    def skipped_connections(self) -> int:
        """Connections dropped because an endpoint id has no planet."""
        return self._skipped_connections

    def draw(self, surface: Surface, turn: int) -> None:
        surface.clear(BACKGROUND_COLOR)
        for start, end in self._connection_points:
            surface.draw_line(start, end, CONNECTION_COLOR)
        for planet_id, center in self._planet_points:
            color = owner_color(self._game.owner_at(planet_id, turn))
            surface.draw_circle(center, self._radius, color)
