from __future__ import annotations

from dataclasses import dataclass

from .history import Cluster

DEFAULT_FILL_RATIO = 0.95


def draw_size_for(screen_width: int, screen_height: int) -> int:
    """Side of the centred square drawing region."""
    return min(int(screen_width), int(screen_height))


@dataclass(slots=True, frozen=True)
class Extent:
    """Game-space rectangle the cluster occupies. Width and height are >= 1."""

    min_x: int
    min_y: int
    width: int
    height: int

    @classmethod
    def of_cluster(cls, cluster: Cluster) -> Extent:
        if cluster.dimensions is not None:
            width, height = cluster.dimensions
            return cls(0, 0, max(1, int(width)), max(1, int(height)))
        if not cluster.planets:
            return cls(0, 0, 1, 1)
        xs = [planet.position[0] for planet in cluster.planets]
        ys = [planet.position[1] for planet in cluster.planets]
        min_x, max_x = min(xs), max(xs)
        min_y, max_y = min(ys), max(ys)
        return cls(min_x, min_y, max(1, max_x - min_x), max(1, max_y - min_y))


@dataclass(slots=True, frozen=True)
class CoordTransform:
    """Uniform game-space to screen-space mapping.

    `screen_x = round(x * scale) + offset_x`, and the same for y, or
    `offset_y - round(y * scale)` when `flip_y` is set.
    """

    scale: float
    offset_x: int
    offset_y: int
    flip_y: bool = False

    @classmethod
    def fit(
        cls,
        extent: Extent,
        screen_width: int,
        screen_height: int,
        *,
        fill_ratio: float = DEFAULT_FILL_RATIO,
        flip_y: bool = False,
    ) -> CoordTransform:
        draw_size = draw_size_for(screen_width, screen_height)
        origin_x = (int(screen_width) - draw_size) // 2
        origin_y = (int(screen_height) - draw_size) // 2
        scale = float(draw_size) * float(fill_ratio) / float(max(extent.width, extent.height))

        # Leftover space inside the draw square, split evenly on both sides.
        pad_x = (draw_size - extent.width * scale) * 0.5
        pad_y = (draw_size - extent.height * scale) * 0.5
        offset_x = origin_x + round(pad_x - extent.min_x * scale)
        if flip_y:
            offset_y = origin_y + round(draw_size - pad_y + extent.min_y * scale)
        else:
            offset_y = origin_y + round(pad_y - extent.min_y * scale)
        return cls(scale=scale, offset_x=int(offset_x), offset_y=int(offset_y), flip_y=bool(flip_y))

    def apply(self, coord: tuple[int, int]) -> tuple[int, int]:
        x, y = coord
        screen_x = round(x * self.scale) + self.offset_x
        if self.flip_y:
            screen_y = self.offset_y - round(y * self.scale)
        else:
            screen_y = round(y * self.scale) + self.offset_y
        return int(screen_x), int(screen_y)
