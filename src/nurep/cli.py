from __future__ import annotations

import faulthandler
from pathlib import Path

import typer

from .config import PlaybackConfig
from .debug import debug_enabled
from .history import Game, HistoryError, load_game
from .trace_log import close_trace_log, open_trace_log, trace_load

USAGE = "Usage: nurep <data_path>"

app = typer.Typer(add_completion=False)


def _format_summary(data_path: Path, game: Game) -> str:
    cluster = game.cluster
    players = ", ".join(str(player) for player in game.player_ids()) or "none"
    return (
        f"{data_path.name}: planets={len(cluster.planets)} "
        f"connections={len(cluster.connections)} turns={game.num_turns} players=[{players}]"
    )


def _replay(data_path: Path, config: PlaybackConfig) -> None:
    from .raylib_app import DisplayError, run_replay

    try:
        game = load_game(data_path)
    except HistoryError as exc:
        typer.echo(f"nurep: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    trace_load(game)
    typer.echo(_format_summary(data_path, game))

    try:
        run_replay(game, config)
    except DisplayError as exc:
        typer.echo(f"nurep: {exc}", err=True)
        raise typer.Exit(code=1) from exc


@app.command()
def cmd_replay(
    data_paths: list[Path] | None = typer.Argument(
        None,
        help="game history document (.json, optionally gzip-compressed)",
        show_default=False,
    ),
) -> None:
    """Replay a recorded planet-cluster game, one turn per tick. Escape quits."""
    paths = list(data_paths or [])
    if len(paths) != 1:
        typer.echo(USAGE)
        return
    data_path = paths[0]
    config = PlaybackConfig(debug=debug_enabled())
    if not config.debug:
        _replay(data_path, config)
        return

    log_path = open_trace_log(base_dir=Path.cwd(), data_path=data_path)
    typer.echo(f"trace log: {log_path}", err=True)
    faulthandler.enable()
    try:
        _replay(data_path, config)
    finally:
        faulthandler.disable()
        close_trace_log()


def main(argv: list[str] | None = None) -> None:
    app(prog_name="nurep", args=argv)


if __name__ == "__main__":
    main()
