from __future__ import annotations

from dataclasses import dataclass

from lrc_extended.lrc.model import Line, LyricsDocument

# Line windows open a little early and linger a little: the clock is
# sampled at display-refresh granularity.
LINE_START_EPS = 0.15
LINE_END_EPS = 0.20
TOKEN_EPS = 0.02
MIN_WINDOW = 0.02
LINE_TAIL = 0.5
TOKEN_TAIL = 0.35


@dataclass(frozen=True, slots=True)
class ActiveSpan:
    line_index: int | None
    token_index: int | None


def next_start_after(doc: LyricsDocument, index: int) -> float | None:
    """Start of the first timed line after `doc.lines[index]`."""
    for i, line in doc.timed_lines():
        if i > index:
            return line.start
    return None


def resolve_line(doc: LyricsDocument, time: float) -> int | None:
    """
    Position within `doc.timed_lines()` of the line active at `time`.

    Before the first window this is 0, past the last window the last
    position; None only when the document has no timed line at all.
    """
    timed = doc.timed_lines()
    if not timed:
        return None

    for k, (_idx, line) in enumerate(timed):
        start = line.start
        if k + 1 < len(timed):
            raw_next = timed[k + 1][1].start
        else:
            raw_next = line.last_time + LINE_TAIL
        next_start = max(start + MIN_WINDOW, raw_next)
        if start - LINE_START_EPS <= time <= next_start + LINE_END_EPS:
            return k

    if time < timed[0][1].start - LINE_START_EPS:
        return 0
    return len(timed) - 1


def resolve_token(line: Line, time: float, next_line_start: float | None = None) -> int | None:
    """
    Index of the word active at `time` within `line`, or None.

    The last word stays active until `next_line_start` when it is known,
    else for 0.35s.
    """
    toks = line.tokens
    for j, tok in enumerate(toks):
        if j + 1 < len(toks):
            end = toks[j + 1].time
        elif next_line_start is not None:
            end = max(tok.time, next_line_start)
        else:
            end = tok.time + TOKEN_TAIL
        end = max(tok.time + MIN_WINDOW, end)
        if tok.time - TOKEN_EPS <= time < end + TOKEN_EPS:
            return j
    return None


def resolve(doc: LyricsDocument, time: float) -> ActiveSpan:
    """Active line (as an index into `doc.lines`) and word at `time`."""
    pos = resolve_line(doc, time)
    if pos is None:
        return ActiveSpan(line_index=None, token_index=None)
    idx = doc.timed_lines()[pos][0]
    tok = resolve_token(doc.lines[idx], time, next_start_after(doc, idx))
    return ActiveSpan(line_index=idx, token_index=tok)


@dataclass(slots=True)
class SpanTracker:
    """
    Resolve against one document snapshot and report only changes.
    """

    doc: LyricsDocument
    last: ActiveSpan | None = None

    def current(self, time: float) -> ActiveSpan:
        return resolve(self.doc, time)

    def changed(self, time: float) -> ActiveSpan | None:
        span = self.current(time)
        if span != self.last:
            self.last = span
            return span
        return None
