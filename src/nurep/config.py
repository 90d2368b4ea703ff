from __future__ import annotations

from dataclasses import dataclass

from .render import DEFAULT_RADIUS_DIVISOR
from .transform import DEFAULT_FILL_RATIO

DEFAULT_TICK_SECONDS = 0.25
DEFAULT_TITLE = "nurep"


@dataclass(frozen=True, slots=True)
class PlaybackConfig:
    tick_seconds: float = DEFAULT_TICK_SECONDS
    fill_ratio: float = DEFAULT_FILL_RATIO
    radius_divisor: int = DEFAULT_RADIUS_DIVISOR
    flip_y: bool = False
    title: str = DEFAULT_TITLE
    debug: bool = False
