from __future__ import annotations

from dataclasses import replace
import logging

from .model import Line, LyricsDocument, Token

DEFAULT_MIN_GAP = 0.02
LAST_LINE_TAIL = 0.5  # seconds a final line is assumed to last
_EPS = 1e-9

logger = logging.getLogger(__name__)


def _next_line_start(lines: tuple[Line, ...], i: int) -> float | None:
    # unanchored labels carry no deadline
    for nxt in lines[i + 1 :]:
        if nxt.tokens:
            return nxt.tokens[0].time
        if nxt.start_time > 0:
            return nxt.start_time
    return None


def line_end(lines: tuple[Line, ...], i: int, min_gap: float = DEFAULT_MIN_GAP) -> float:
    """
    Hard deadline for the tokens of `lines[i]`: the next timed line's start,
    else the last token + 0.5s, never less than start + min_gap.
    """
    line = lines[i]
    start = line.start
    nxt = _next_line_start(lines, i)
    if nxt is None:
        nxt = line.last_time + LAST_LINE_TAIL
    return max(start + min_gap, nxt)


def _compress(times: list[float], end: float, min_gap: float) -> list[float]:
    n = len(times)
    first = times[0]
    span = max(min_gap, times[-1] - first)
    target = max(min_gap, end - first)

    scale = target / span
    out = [first + (t - first) * scale for t in times]
    if all(b - a >= min_gap - _EPS for a, b in zip(out, out[1:])):
        out[-1] = first + target
        return out

    floor = (n - 1) * min_gap
    room = target - floor
    slack = span - floor
    if room <= 0 or slack <= 0:
        step = target / (n - 1)
        return [first + step * k for k in range(n)]

    # scale only what exceeds min_gap so no pair collapses
    k = room / slack
    out = [first]
    for a, b in zip(times, times[1:]):
        out.append(out[-1] + min_gap + (b - a - min_gap) * k)
    out[-1] = first + target
    return out


def reflow_tokens(tokens: tuple[Token, ...], end: float, min_gap: float = DEFAULT_MIN_GAP) -> tuple[Token, ...]:
    if len(tokens) < 2:
        return tokens

    times = [tok.time for tok in tokens]
    for j in range(1, len(times)):
        if times[j] < times[j - 1] + min_gap - _EPS:
            times[j] = times[j - 1] + min_gap

    if times[-1] > end + _EPS:
        times = _compress(times, end, min_gap)

    return tuple(
        tok if tok.time == t else Token(time=t, text=tok.text) for tok, t in zip(tokens, times)
    )


def reflow(doc: LyricsDocument, min_gap: float = DEFAULT_MIN_GAP) -> LyricsDocument:
    """
    Normalize token timings within each line so they are increasing by at
    least `min_gap` and do not run past the line end. An overrunning line is
    compressed proportionally rather than clipped, keeping the word rhythm.

    Returns a new document; reflowing its result again changes nothing.
    """
    if not doc.lines:
        return doc

    new_lines: list[Line] = []
    for i, line in enumerate(doc.lines):
        if not line.tokens:
            new_lines.append(line)
            continue
        end = line_end(doc.lines, i, min_gap)
        if line.tokens[-1].time > end + _EPS:
            logger.debug("Line %d runs %.3fs past its end, compressing", i, line.tokens[-1].time - end)
        new_lines.append(replace(line, tokens=reflow_tokens(line.tokens, end, min_gap)))

    return replace(doc, lines=tuple(new_lines))
