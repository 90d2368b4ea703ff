from __future__ import annotations

import datetime as dt
import os
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from .history import Game

_TRACE_FILE: TextIO | None = None


def _escape(value: object) -> str:
    return str(value).replace("\n", "\\n")


def _emit(event: str, **fields: object) -> None:
    handle = _TRACE_FILE
    if handle is None:
        return
    stamp = dt.datetime.now(dt.timezone.utc).isoformat(timespec="milliseconds")
    parts = [stamp, f"event={event}"]
    parts.extend(f"{key}={_escape(fields[key])}" for key in sorted(fields))
    handle.write(" ".join(parts) + "\n")


def open_trace_log(*, base_dir: Path, data_path: Path) -> Path:
    """Start a fresh `logs/nurep-pid<pid>-<utc>.log` under `base_dir`."""
    global _TRACE_FILE
    close_trace_log()
    stamp = dt.datetime.now(dt.timezone.utc).strftime("%Y%m%dT%H%M%S.%fZ")
    path = Path(base_dir) / "logs" / f"nurep-pid{os.getpid()}-{stamp}.log"
    path.parent.mkdir(parents=True, exist_ok=True)
    _TRACE_FILE = path.open("a", encoding="utf-8", buffering=1)
    _emit("init", data_path=data_path, pid=os.getpid())
    return path


def close_trace_log() -> None:
    global _TRACE_FILE
    handle, _TRACE_FILE = _TRACE_FILE, None
    if handle is not None:
        handle.close()


def trace_load(game: Game) -> None:
    _emit(
        "load",
        planets=len(game.cluster.planets),
        connections=len(game.cluster.connections),
        turns=game.num_turns,
        players=",".join(str(player) for player in game.player_ids()) or "none",
    )


def trace_display(*, width: int, height: int, radius: int, skipped_connections: int) -> None:
    _emit("display", width=width, height=height, radius=radius, skipped_connections=skipped_connections)


def trace_frame_failed(turn: int, error: BaseException) -> None:
    _emit("frame_failed", turn=turn, error=error)


def trace_playback_end(*, state: str, turn: int, presented: int, dropped: int) -> None:
    _emit("playback_end", state=state, turn=turn, presented=presented, dropped=dropped)
