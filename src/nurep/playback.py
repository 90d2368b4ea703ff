from __future__ import annotations

from enum import Enum
from typing import Protocol

from .config import DEFAULT_TICK_SECONDS
from .history import Game
from .render import FrameRenderer, Surface, SurfaceError
from .trace_log import trace_frame_failed, trace_playback_end


class PlaybackState(Enum):
    RUNNING = "running"
    QUITTING = "quitting"
    STOPPED = "stopped"


class Display(Protocol):
    def quit_requested(self) -> bool: ...

    def begin_frame(self) -> Surface: ...

    def present(self) -> None: ...

    def drop_frame(self) -> None: ...

    def now(self) -> float: ...

    def wait(self, seconds: float) -> None: ...


class Playback:
    """Fixed-rate forward replay: one turn per tick, starting at turn 1.

    Quit is checked once per tick before drawing. A frame whose drawing fails
    with `SurfaceError` is dropped rather than presented; the turn still
    advances.
    """

    def __init__(
        self,
        game: Game,
        renderer: FrameRenderer,
        display: Display,
        *,
        tick_seconds: float = DEFAULT_TICK_SECONDS,
    ) -> None:
        self._game = game
        self._renderer = renderer
        self._display = display
        self._tick_seconds = max(0.0, float(tick_seconds))
        self.turn = 1
        self.state = PlaybackState.RUNNING
        self.frames_presented = 0
        self.frames_dropped = 0

    @property
    def finished(self) -> bool:
        return self.state is not PlaybackState.RUNNING

    def tick(self) -> PlaybackState:
        if self.finished:
            return self.state
        if self.turn > self._game.num_turns:
            self.state = PlaybackState.STOPPED
            return self.state
        display = self._display
        if display.quit_requested():
            self.state = PlaybackState.QUITTING
            return self.state

        start = display.now()
        surface = display.begin_frame()
        try:
            self._renderer.draw(surface, self.turn)
        except SurfaceError as exc:
            display.drop_frame()
            self.frames_dropped += 1
            trace_frame_failed(self.turn, exc)
        else:
            display.present()
            self.frames_presented += 1

        self.turn += 1
        elapsed = display.now() - start
        remaining = self._tick_seconds - elapsed
        if remaining > 0.0:
            display.wait(remaining)
        return self.state

    def run(self) -> PlaybackState:
        while not self.finished:
            self.tick()
        trace_playback_end(
            state=self.state.value,
            turn=self.turn,
            presented=self.frames_presented,
            dropped=self.frames_dropped,
        )
        return self.state
