from __future__ import annotations

import shutil
import signal
import sys
from dataclasses import dataclass
from typing import Callable

import colorama

from lrc_extended.lrc.model import Line, LyricsDocument

CSI = "\x1b["


def _sgr(*codes: int) -> str:
    return CSI + ";".join(str(c) for c in codes) + "m"


@dataclass(frozen=True, slots=True)
class Theme:
    title: str = _sgr(36, 1)  # cyan bold
    current: str = _sgr(37, 1)  # white bold
    word: str = _sgr(33, 1)  # yellow bold, the word being sung
    label: str = _sgr(34, 1)  # blue bold
    dim: str = _sgr(90)  # bright black
    warning: str = _sgr(33, 1)
    reset: str = _sgr(0)


@dataclass(frozen=True, slots=True)
class Frame:
    title: str
    lines: tuple[Line, ...] = ()
    current_idx: int = -1  # position in `lines`, -1 for none
    token_idx: int | None = None
    window_start: int = 0
    lines_to_show: int = 3
    subtitle: str = ""
    countdown: int | None = None
    message: str | None = None


def visible_lines(doc: LyricsDocument) -> list[tuple[int, Line]]:
    """Lines worth a row on screen, with their index in `doc.lines`."""
    out: list[tuple[int, Line]] = []
    for i, line in enumerate(doc.lines):
        if line.is_timed or line.is_label:
            out.append((i, line))
    return out


def adjust_window_start(window_start: int, active: int, total: int, span: int) -> int:
    """
    Page the window instead of re-centring on every line: it only moves,
    by a whole page, when the active line leaves it.
    """
    if total <= 0:
        return 0
    span = max(1, min(span, total))
    start = min(max(0, window_start), max(0, total - span))
    end = min(total - 1, start + span - 1)
    if active < start:
        return max(0, start - span)
    if active > end:
        return min(max(0, total - span), start + span)
    return start


def _center(plain: str, styled: str, cols: int) -> str:
    pad = max((cols - len(plain)) // 2, 0)
    return " " * pad + styled


class KaraokeRenderer:
    def __init__(self, use_alt_screen: bool = True, theme: Theme | None = None):
        self.use_alt_screen = use_alt_screen
        self.theme = theme or Theme()
        self._entered = False
        self._resize_handler: Callable[..., None] | None = None
        self._last_frame: Frame | None = None

    def __enter__(self):
        self.enter()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.exit()

    def enter(self) -> None:
        if self._entered:
            return
        colorama.just_fix_windows_console()
        if self.use_alt_screen:
            sys.stdout.write(CSI + "?1049h")  # alt screen
        sys.stdout.write(CSI + "?25l")  # hide cursor
        sys.stdout.write(CSI + "H" + CSI + "2J")  # home + clear
        sys.stdout.flush()
        self._entered = True

        # redraw last frame on terminal resize
        def _on_resize(signum=None, frame=None):
            if self._last_frame is not None:
                self.render(self._last_frame)

        self._resize_handler = _on_resize
        signal.signal(signal.SIGWINCH, _on_resize)

    def exit(self) -> None:
        if not self._entered:
            return
        if self._resize_handler:
            signal.signal(signal.SIGWINCH, signal.SIG_DFL)
            self._resize_handler = None
        sys.stdout.write(self.theme.reset)
        sys.stdout.write(CSI + "?25h")  # show cursor
        if self.use_alt_screen:
            sys.stdout.write(CSI + "?1049l")  # normal screen
        sys.stdout.flush()
        self._entered = False
        self._last_frame = None

    def _line_row(self, line: Line, active: bool, token_idx: int | None) -> tuple[str, str]:
        th = self.theme
        if not line.tokens:
            text = (line.label or "").upper()
            color = th.label if active else th.dim
            return text, f"{color}{text}{th.reset}"

        base = th.current if active else th.dim
        parts: list[str] = []
        for j, tok in enumerate(line.tokens):
            color = th.word if active and j == token_idx else base
            parts.append(f"{color}{tok.text}{th.reset}")
        return line.text, " ".join(parts)

    def compose(self, frame: Frame, cols: int = 80) -> list[str]:
        th = self.theme
        out = [f"{th.title}♫ {frame.title} ♫{th.reset}", ""]

        if frame.message is not None:
            out.append(_center(frame.message, f"{th.warning}{frame.message}{th.reset}", cols))
            return out

        if frame.countdown is not None:
            for text in (frame.title, frame.subtitle):
                if text:
                    out.append(_center(text, f"{th.current}{text}{th.reset}", cols))
            n = str(frame.countdown)
            out.append("")
            out.append(_center(n, f"{th.word}{n}{th.reset}", cols))
            return out

        end = min(frame.window_start + max(1, frame.lines_to_show), len(frame.lines))
        for i in range(frame.window_start, end):
            active = i == frame.current_idx
            plain, styled = self._line_row(frame.lines[i], active, frame.token_idx)
            out.append(_center(plain, styled, cols))
        return out

    def render(self, frame: Frame) -> None:
        # kept for SIGWINCH redraw
        self._last_frame = frame

        cols, _rows = shutil.get_terminal_size(fallback=(80, 24))
        out = self.compose(frame, cols)

        # move home + clear, then print full frame
        sys.stdout.write(CSI + "H" + CSI + "2J")
        sys.stdout.write("\n".join(out))
        sys.stdout.write(self.theme.reset)
        sys.stdout.flush()
