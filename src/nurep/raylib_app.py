from __future__ import annotations

from types import TracebackType

import pyray as rl

from .color import RGBA
from .config import PlaybackConfig
from .history import Game
from .playback import Playback, PlaybackState
from .render import FrameRenderer, ScreenPoint, SurfaceError, planet_radius
from .trace_log import trace_display
from .transform import CoordTransform, Extent, draw_size_for


class DisplayError(RuntimeError):
    pass


class RaylibSurface:
    """`Surface` backed by the current raylib drawing pass."""

    def _require_window(self) -> None:
        if not rl.is_window_ready():
            raise SurfaceError("raylib window is not ready")

    def clear(self, color: RGBA) -> None:
        self._require_window()
        rl.clear_background(color.to_rl())

    def draw_circle(self, center: ScreenPoint, radius: int, color: RGBA) -> None:
        self._require_window()
        x, y = center
        rl.draw_circle(int(x), int(y), float(radius), color.to_rl())

    def draw_line(self, start: ScreenPoint, end: ScreenPoint, color: RGBA) -> None:
        self._require_window()
        rl.draw_line(int(start[0]), int(start[1]), int(end[0]), int(end[1]), color.to_rl())


class RaylibDisplay:
    """Full-screen raylib window implementing the playback `Display`.

    raylib pairs `begin_drawing`/`end_drawing` and polls input at the end of
    a pass, so a dropped frame still closes its pass.
    """

    def __init__(self, title: str) -> None:
        self._surface = RaylibSurface()
        self._open = False
        rl.set_config_flags(rl.ConfigFlags.FLAG_FULLSCREEN_MODE)
        # Zero size means "use the current monitor resolution".
        rl.init_window(0, 0, title)
        if not rl.is_window_ready():
            raise DisplayError("failed to create window")
        self._open = True
        rl.set_exit_key(rl.KeyboardKey.KEY_ESCAPE)

    def screen_size(self) -> tuple[int, int]:
        width = int(rl.get_screen_width())
        height = int(rl.get_screen_height())
        if width <= 0 or height <= 0:
            raise DisplayError(f"failed to retrieve display size: {width}x{height}")
        return width, height

    def quit_requested(self) -> bool:
        return bool(rl.window_should_close())

    def begin_frame(self) -> RaylibSurface:
        rl.begin_drawing()
        return self._surface

    def present(self) -> None:
        rl.end_drawing()

    def drop_frame(self) -> None:
        rl.end_drawing()

    def now(self) -> float:
        return float(rl.get_time())

    def wait(self, seconds: float) -> None:
        rl.wait_time(float(seconds))

    def close(self) -> None:
        if not self._open:
            return
        self._open = False
        rl.close_window()

    def __enter__(self) -> RaylibDisplay:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def build_renderer(game: Game, screen_width: int, screen_height: int, config: PlaybackConfig) -> FrameRenderer:
    transform = CoordTransform.fit(
        Extent.of_cluster(game.cluster),
        screen_width,
        screen_height,
        fill_ratio=config.fill_ratio,
        flip_y=config.flip_y,
    )
    radius = planet_radius(draw_size_for(screen_width, screen_height), config.radius_divisor)
    return FrameRenderer(game, transform, radius)


def run_replay(game: Game, config: PlaybackConfig) -> PlaybackState:
    """Open the window, play `game` to the end (or until quit), then close."""
    with RaylibDisplay(config.title) as display:
        screen_width, screen_height = display.screen_size()
        renderer = build_renderer(game, screen_width, screen_height, config)
        trace_display(
            width=screen_width,
            height=screen_height,
            radius=renderer.radius,
            skipped_connections=renderer.skipped_connections,
        )
        playback = Playback(game, renderer, display, tick_seconds=config.tick_seconds)
        return playback.run()
