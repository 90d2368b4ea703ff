from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .history import NEUTRAL_OWNER
from .math import clamp01

if TYPE_CHECKING:
    import pyray as rl


@dataclass(slots=True, frozen=True)
class RGBA:
    r: float = 1.0
    g: float = 1.0
    b: float = 1.0
    a: float = 1.0

    @classmethod
    def rgb8(cls, r: int, g: int, b: int) -> RGBA:
        inv_255 = 1.0 / 255.0
        return cls(float(r) * inv_255, float(g) * inv_255, float(b) * inv_255, 1.0)

    def clamped(self) -> RGBA:
        return RGBA(r=clamp01(self.r), g=clamp01(self.g), b=clamp01(self.b), a=clamp01(self.a))

    def to_rgba8(self) -> tuple[int, int, int, int]:
        c = self.clamped()
        return (
            int(c.r * 255.0 + 0.5),
            int(c.g * 255.0 + 0.5),
            int(c.b * 255.0 + 0.5),
            int(c.a * 255.0 + 0.5),
        )

    def to_rl(self) -> rl.Color:
        import pyray as rl

        return rl.Color(*self.to_rgba8())


BACKGROUND_COLOR = RGBA.rgb8(0x00, 0x00, 0x00)
CONNECTION_COLOR = RGBA.rgb8(0x30, 0x30, 0x30)
UNKNOWN_COLOR = RGBA.rgb8(0xFF, 0xFF, 0xFF)

# Index is the owner id; 0 is neutral.
OWNER_PALETTE: tuple[RGBA, ...] = (
    RGBA.rgb8(0x50, 0x50, 0x50),
    RGBA.rgb8(0xFF, 0x00, 0x00),
    RGBA.rgb8(0x00, 0xFF, 0x00),
    RGBA.rgb8(0x00, 0x00, 0xFF),
    RGBA.rgb8(0xFF, 0xFF, 0x00),
    RGBA.rgb8(0x00, 0xFF, 0xFF),
    RGBA.rgb8(0xFF, 0x00, 0xFF),
    RGBA.rgb8(0xC0, 0x80, 0x00),
    RGBA.rgb8(0x00, 0xC0, 0x80),
    RGBA.rgb8(0xC0, 0x00, 0x80),
    RGBA.rgb8(0x80, 0xC0, 0x00),
    RGBA.rgb8(0x00, 0x80, 0xC0),
)


def owner_color(owner_id: int) -> RGBA:
    """Palette colour for an owner id; unknown or out-of-table ids are white."""
    owner_id = int(owner_id)
    if NEUTRAL_OWNER <= owner_id < len(OWNER_PALETTE):
        return OWNER_PALETTE[owner_id]
    return UNKNOWN_COLOR
