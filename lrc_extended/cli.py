from __future__ import annotations

import json
import logging
from pathlib import Path

import typer

from lrc_extended.app import play as play_loop
from lrc_extended.config import LANGS, AppConfig, clamp_lines_to_show, load_config, save_config_lang
from lrc_extended.i18n import set_lang, t
from lrc_extended.logging_setup import setup_logging
from lrc_extended.lrc.edit import (
    auto_timestamp_words,
    insert_header_tags,
    overlong_lines,
    reflow_text,
    strip_empty_time_tags,
)
from lrc_extended.lrc.export import export_json, export_lrc, export_srt
from lrc_extended.lrc.model import LyricsDocument
from lrc_extended.lrc.parse import parse_lrc, parse_lrc_with_stats
from lrc_extended.lrc.reflow import reflow
from lrc_extended.mpris.errors import NoPlayersFound, PlayerUnavailable
from lrc_extended.sync.clock import WallClock
from lrc_extended.sync.frames import sample_frames, span_changes
from lrc_extended.sync.tracker import resolve

EXPORT_FORMATS = ("lrc", "srt", "json", "frames")

logger = logging.getLogger(__name__)

app = typer.Typer(no_args_is_help=True, add_completion=False)


@app.callback()
def main_options(
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Parse, normalize, export and play word-timed (extended) LRC lyrics."""
    setup_logging(debug)


def _config() -> AppConfig:
    cfg = load_config()
    set_lang(cfg.lang)
    return cfg


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        typer.echo(t("file_not_readable", path=str(path), error=str(e)), err=True)
        raise typer.Exit(code=1)


def _load(path: Path, min_gap: float, raw: bool = False) -> LyricsDocument:
    doc = parse_lrc(_read(path))
    logger.debug("Loaded %s: %d lines, tags=%s", path, len(doc.lines), doc.tags)
    return doc if raw else reflow(doc, min_gap=min_gap)


def _emit(data: str, out: Path | None) -> None:
    if out:
        out.write_text(data, encoding="utf-8")
        typer.echo(t("written", path=str(out)), err=True)
    else:
        typer.echo(data, nl=False)


@app.command()
def parse(lrc_path: Path):
    """Parse LRC and print stats."""
    _config()
    doc, stats = parse_lrc_with_stats(_read(lrc_path))
    typer.echo(f"lines_total={stats.lines_total}")
    typer.echo(f"lines_blank={stats.lines_blank}")
    typer.echo(f"header_lines={stats.header_lines}")
    typer.echo(f"label_lines={stats.label_lines}")
    typer.echo(f"lyric_lines={stats.lyric_lines}")
    typer.echo(f"tokens_total={stats.tokens_total}")
    typer.echo(f"lines_ignored={stats.lines_ignored}")
    typer.echo(f"tags={doc.tags}")


@app.command("reflow")
def reflow_cmd(
    lrc_path: Path,
    min_gap: float | None = typer.Option(None, "--min-gap", help="Minimum seconds between words"),
    out: Path | None = typer.Option(None, "--out", help="Output file (default: stdout)"),
):
    """Normalize word timings and print the LRC. Unrecognised lines are dropped with a warning."""
    cfg = _config()
    text = _read(lrc_path)
    _emit(reflow_text(text, min_gap=min_gap if min_gap is not None else cfg.min_gap), out)


@app.command()
def export(
    lrc_path: Path,
    fmt: str = typer.Option("srt", "--format", case_sensitive=False, help="lrc|srt|json|frames"),
    fps: int | None = typer.Option(None, "--fps", help="Frame rate for --format frames"),
    audio_duration: float = typer.Option(0.0, "--audio-duration", help="Audio length in seconds (frames)"),
    raw: bool = typer.Option(False, "--raw", help="Skip the reflow pass"),
    out: Path | None = typer.Option(None, "--out", help="Output file (default: stdout)"),
):
    """Export LRC to SRT/JSON/LRC, or the active span per frame."""
    cfg = _config()
    fmt_l = fmt.lower()
    if fmt_l not in EXPORT_FORMATS:
        raise typer.BadParameter(t("unknown_format", formats=", ".join(EXPORT_FORMATS)))

    doc = _load(lrc_path, cfg.min_gap, raw=raw)
    if fmt_l == "json":
        data = export_json(doc)
    elif fmt_l == "lrc":
        data = export_lrc(doc)
    elif fmt_l == "srt":
        data = export_srt(doc)
    else:
        rate = fps or cfg.fps
        if rate <= 0:
            raise typer.BadParameter("--fps must be positive")
        changes = span_changes(sample_frames(doc, rate, audio_duration))
        data = json.dumps(
            [
                {"frame": s.frame, "time": round(s.time, 3), "line": s.line_index, "token": s.token_index}
                for s in changes
            ],
            indent=2,
        )
    _emit(data, out)


@app.command("resolve")
def resolve_cmd(
    lrc_path: Path,
    at: float = typer.Argument(..., help="Playback time in seconds"),
    raw: bool = typer.Option(False, "--raw", help="Skip the reflow pass"),
):
    """Show which line and word are active at a playback time."""
    cfg = _config()
    doc = _load(lrc_path, cfg.min_gap, raw=raw)
    span = resolve(doc, at)
    if span.line_index is None:
        typer.echo(t("no_active_line"))
        raise typer.Exit(code=1)
    line = doc.lines[span.line_index]
    typer.echo(t("active_line", index=span.line_index, text=line.text))
    if span.token_index is not None:
        typer.echo(t("active_token", index=span.token_index, text=line.tokens[span.token_index].text))


@app.command()
def play(
    lrc_path: Path,
    start: float = typer.Option(0.0, "--start", help="Start position in seconds"),
    rate: float = typer.Option(1.0, "--rate", help="Playback speed"),
    player: str | None = typer.Option(None, "--player", help="Follow an MPRIS player (e.g. vlc) instead of the wall clock"),
    lines: int | None = typer.Option(None, "--lines", help="Rows in the karaoke window"),
    refresh_hz: float | None = typer.Option(None, "--refresh-hz", help="Polling frequency (Hz)"),
    no_alt_screen: bool = typer.Option(False, "--no-alt-screen", help="Do not use alternate screen buffer"),
    no_countdown: bool = typer.Option(False, "--no-countdown", help="Skip the intro countdown"),
):
    """
    Play lyrics karaoke-style in the terminal.
    """
    cfg = _config()
    if refresh_hz is not None:
        cfg = cfg.__class__(**{**cfg.__dict__, "refresh_hz": refresh_hz})
    if lines is not None:
        cfg = cfg.__class__(**{**cfg.__dict__, "lines_to_show": clamp_lines_to_show(lines)})
    if no_alt_screen:
        cfg = cfg.__class__(**{**cfg.__dict__, "use_alt_screen": False})
    if no_countdown:
        cfg = cfg.__class__(**{**cfg.__dict__, "countdown": False})

    doc = _load(lrc_path, cfg.min_gap)
    title = doc.tag("ti") or lrc_path.stem
    if doc.tag("ar"):
        title = f"{doc.tag('ar')} - {title}"

    player = player or cfg.preferred_player
    if player:
        # D-Bus is only needed when following a player
        from lrc_extended.mpris.client import MprisClient

        try:
            clock = MprisClient.pick_player(preferred=player)
        except NoPlayersFound:
            typer.echo(t("no_mpris_players"), err=True)
            raise typer.Exit(code=1)
        if not doc.tag("ti"):
            try:
                title = clock.track_info().display or title
            except PlayerUnavailable as e:
                logger.debug("No track metadata: %s", e)
        stop_at = None
    else:
        clock = WallClock(start_s=start, rate=rate)
        stop_at = doc.lyric_duration() + 2.0

    raise typer.Exit(code=play_loop(cfg, doc, clock, title=title, stop_at=stop_at))


@app.command()
def autotime(
    lrc_path: Path,
    span: float = typer.Option(10.0, "--span", help="Seconds given to the last timed line"),
    strip_empty: bool = typer.Option(False, "--strip-empty", help="Blank out lines that are only a time tag"),
    out: Path | None = typer.Option(None, "--out", help="Output file (default: stdout)"),
):
    """Add evenly spaced word timestamps to line-timed lyrics."""
    _config()
    text = auto_timestamp_words(_read(lrc_path), default_span=span)
    if strip_empty:
        text = strip_empty_time_tags(text)
    _emit(text if text.endswith("\n") else text + "\n", out)


@app.command()
def lint(
    lrc_path: Path,
    max_chars: int | None = typer.Option(None, "--max-chars", help="Longest allowed visible line"),
):
    """Report lyric lines too long to display."""
    cfg = _config()
    limit = max_chars if max_chars is not None else cfg.max_line_chars
    found = overlong_lines(_read(lrc_path), limit)
    for lineno, count in found:
        typer.echo(t("overlong_line", line=lineno, count=count, max=limit))
    if found:
        raise typer.Exit(code=1)
    typer.echo(t("no_overlong_lines", max=limit))


@app.command()
def tags(
    lrc_path: Path,
    ti: str = typer.Option("", "--ti", help="Title"),
    ar: str = typer.Option("", "--ar", help="Artist"),
    al: str = typer.Option("", "--al", help="Album"),
    by: str = typer.Option("", "--by", help="Creator of the LRC file"),
    out: Path | None = typer.Option(None, "--out", help="Output file (default: stdout)"),
):
    """Insert or replace the header tag block."""
    _config()
    text = insert_header_tags(_read(lrc_path), ti=ti, ar=ar, al=al, by=by)
    _emit(text if text.endswith("\n") else text + "\n", out)


@app.command()
def players():
    """List available MPRIS players."""
    from lrc_extended.mpris.client import MprisClient

    for p in MprisClient.list_players():
        typer.echo(p)


@app.command()
def lang(code: str = typer.Argument(..., help="EN or DE")):
    """Set the interface language."""
    if code.upper() not in LANGS:
        raise typer.BadParameter(t("unknown_lang", langs=", ".join(LANGS)))
    save_config_lang(code)
    set_lang(code)
    typer.echo(t("lang_saved", lang=code.upper()))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
