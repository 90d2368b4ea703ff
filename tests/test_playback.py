from __future__ import annotations

from pathlib import Path

import pytest

from fakes import FakeDisplay, make_game
from nurep.color import OWNER_PALETTE
from nurep.playback import Playback, PlaybackState
from nurep.render import FrameRenderer, SurfaceError
from nurep.trace_log import open_trace_log
from nurep.transform import CoordTransform, Extent


class _SpyRenderer:
    def __init__(self, *, fail_turns: tuple[int, ...] = (), error: Exception | None = None) -> None:
        self.turns: list[int] = []
        self._fail_turns = fail_turns
        self._error = error

    def draw(self, surface, turn: int) -> None:  # noqa: ANN001
        self.turns.append(turn)
        if turn in self._fail_turns:
            raise self._error or SurfaceError(f"turn {turn} failed")
        surface.clear(OWNER_PALETTE[0])


def _playback(num_turns: int, renderer, display: FakeDisplay, *, tick_seconds: float = 0.25) -> Playback:  # noqa: ANN001
    game = make_game([(1, (0, 0))], num_turns=num_turns)
    return Playback(game, renderer, display, tick_seconds=tick_seconds)


def test_three_turns_render_in_order_then_stop() -> None:
    renderer = _SpyRenderer()
    display = FakeDisplay()
    playback = _playback(3, renderer, display)

    assert playback.run() is PlaybackState.STOPPED

    assert renderer.turns == [1, 2, 3]
    assert display.events == ["begin", "present"] * 3
    assert playback.frames_presented == 3
    assert playback.turn == 4


def test_initial_state() -> None:
    playback = _playback(5, _SpyRenderer(), FakeDisplay())
    assert playback.state is PlaybackState.RUNNING
    assert playback.turn == 1
    assert not playback.finished


def test_zero_turns_stop_without_polling_or_drawing() -> None:
    renderer = _SpyRenderer()
    display = FakeDisplay()

    assert _playback(0, renderer, display).run() is PlaybackState.STOPPED

    assert display.polls == 0
    assert renderer.turns == []


def test_quit_signal_skips_drawing() -> None:
    renderer = _SpyRenderer()
    display = FakeDisplay(quit_at_poll=2)
    playback = _playback(10, renderer, display)

    assert playback.run() is PlaybackState.QUITTING

    assert renderer.turns == [1]
    assert display.events == ["begin", "present"]
    assert playback.turn == 2


def test_quit_before_first_frame() -> None:
    renderer = _SpyRenderer()
    display = FakeDisplay(quit_at_poll=1)

    assert _playback(3, renderer, display).run() is PlaybackState.QUITTING
    assert renderer.turns == []
    assert display.events == []


def test_terminal_state_is_sticky() -> None:
    display = FakeDisplay(quit_at_poll=1)
    playback = _playback(3, _SpyRenderer(), display)
    playback.tick()
    polls = display.polls

    assert playback.tick() is PlaybackState.QUITTING
    assert display.polls == polls


def test_failed_frame_is_dropped_and_playback_continues() -> None:
    renderer = _SpyRenderer(fail_turns=(2,))
    display = FakeDisplay()
    playback = _playback(3, renderer, display)

    assert playback.run() is PlaybackState.STOPPED

    assert renderer.turns == [1, 2, 3]
    assert display.events == ["begin", "present", "begin", "drop", "begin", "present"]
    assert playback.frames_presented == 2
    assert playback.frames_dropped == 1


def test_non_surface_errors_propagate() -> None:
    renderer = _SpyRenderer(fail_turns=(1,), error=KeyError("boom"))
    playback = _playback(3, renderer, FakeDisplay())

    with pytest.raises(KeyError):
        playback.run()


def test_tick_waits_for_remainder_of_budget() -> None:
    display = FakeDisplay(frame_cost=0.1)
    playback = _playback(2, _SpyRenderer(), display, tick_seconds=0.25)

    playback.run()

    assert display.waits == [pytest.approx(0.15), pytest.approx(0.15)]


def test_slow_frames_never_wait_negative() -> None:
    display = FakeDisplay(frame_cost=0.4)
    playback = _playback(2, _SpyRenderer(), display, tick_seconds=0.25)

    playback.run()

    assert display.waits == []


def test_real_renderer_draws_each_turn_once() -> None:
    game = make_game(
        [(1, (0, 0)), (2, (50, 50))],
        [(1, 2)],
        {1: {1: 1, 2: 2, 3: 3}},
        num_turns=3,
    )
    transform = CoordTransform.fit(Extent.of_cluster(game.cluster), 500, 500)
    display = FakeDisplay()

    Playback(game, FrameRenderer(game, transform, 3), display).run()

    assert len(display.surfaces) == 3
    first_circles = [surface.calls[2][3] for surface in display.surfaces]
    assert first_circles == [OWNER_PALETTE[1], OWNER_PALETTE[2], OWNER_PALETTE[3]]


def test_dropped_frame_is_traced(tmp_path: Path) -> None:
    log_path = open_trace_log(base_dir=tmp_path, data_path=tmp_path / "game.json")
    playback = _playback(2, _SpyRenderer(fail_turns=(1,)), FakeDisplay())

    playback.run()

    text = log_path.read_text(encoding="utf-8")
    assert "event=frame_failed error=turn 1 failed turn=1" in text
    assert "event=playback_end dropped=1 presented=1 state=stopped turn=3" in text
