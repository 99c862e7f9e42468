"""
Text-level helpers for authoring extended LRC: automatic word timing,
header block insertion, and the per-line length check.
"""

from __future__ import annotations

import logging
import re

import regex

from .export import export_lrc, format_line_tag, format_word_tag
from .parse import HEADER_RE, LABEL_RE, LINE_TAG_RE, parse_lrc_with_stats, parse_time
from .reflow import DEFAULT_MIN_GAP, reflow

DEFAULT_WORD_SPAN = 10.0  # seconds assumed for the last timed line

_EMPTY_LINE_TAG_RE = re.compile(r"^\[\d{2}:\d{2}\.\d{2}\]$")
_ANY_HEADER_RE = re.compile(r"^\[(ti|ar|al|by):[^\]]*\]$", re.IGNORECASE)
_LEADING_TAG_RE = re.compile(r"^\[\d{2}:\d{2}[.,]?\d*\]\s*")
_WORD_TAG_RE = re.compile(r"<\s*\d{2}:\d{2}[.,]?\d*\s*>")
_WS_RE = re.compile(r"\s+")

logger = logging.getLogger(__name__)


def _split_lines(text: str) -> list[str]:
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


def auto_timestamp_words(text: str, default_span: float = DEFAULT_WORD_SPAN) -> str:
    """
    Give every word of a line-timed line its own <mm:ss.cc> tag, spaced
    evenly between the line time and the next line time.

    Lines that already carry word tags, label lines and untimed lines are
    left as they are.
    """
    lines = _split_lines(text)
    times: list[tuple[int, float]] = []
    for i, line in enumerate(lines):
        m = LINE_TAG_RE.match(line)
        if m:
            times.append((i, parse_time(m.group(1), m.group(2))))

    out: list[str] = []
    for i, line in enumerate(lines):
        m = LINE_TAG_RE.match(line)
        rest = line[m.end() :].strip() if m else ""
        if m is None or _WORD_TAG_RE.search(rest) or LABEL_RE.match(rest):
            out.append(line)
            continue

        t1 = parse_time(m.group(1), m.group(2))
        t2 = next((t for idx, t in times if idx > i), t1 + default_span)
        words = rest.split()
        if not words:
            out.append(format_line_tag(t1))
            continue
        step = (t2 - t1) / len(words)
        tagged = [f"{format_word_tag(t1 + step * j)}{w}" for j, w in enumerate(words)]
        out.append(format_line_tag(t1) + " ".join(tagged))
    return "\n".join(out)


def strip_empty_time_tags(text: str) -> str:
    # a line that is only "[mm:ss.cc]" becomes blank, the line itself stays
    return "\n".join("" if _EMPTY_LINE_TAG_RE.match(ln.strip()) else ln for ln in _split_lines(text))


def insert_header_tags(text: str, ti: str = "", ar: str = "", al: str = "", by: str = "") -> str:
    """
    Put a [ti:]/[ar:]/[al:]/[by:] block on top of `text`, replacing the
    header lines already leading the document. Empty values are left out.
    """
    fields = (("ti", ti), ("ar", ar), ("al", al), ("by", by))
    block = [f"[{k}:{v.strip()}]" for k, v in fields if v.strip()]
    if not text:
        return "\n".join(block) + "\n" if block else ""

    lines = _split_lines(text)
    skip = 0
    while skip < len(lines) and _ANY_HEADER_RE.match(lines[skip].strip()):
        skip += 1
    return "\n".join([*block, *lines[skip:]])


def visible_text_length(line: str) -> int:
    """Number of user-perceived characters a lyric line shows once sung."""
    s = _LEADING_TAG_RE.sub("", line)
    s = _WORD_TAG_RE.sub("", s)
    s = _WS_RE.sub(" ", s).strip()
    return len(regex.findall(r"\X", s))


def overlong_lines(text: str, max_chars: int) -> list[tuple[int, int]]:
    """(line number, visible length) for lyric lines longer than `max_chars`."""
    out: list[tuple[int, int]] = []
    for lineno, line in enumerate(_split_lines(text), start=1):
        s = line.strip()
        if not s or HEADER_RE.match(s):
            continue
        if LABEL_RE.match(s) and not LINE_TAG_RE.match(s):
            continue
        n = visible_text_length(s)
        if n > max_chars:
            out.append((lineno, n))
    return out


def reflow_text(text: str, min_gap: float = DEFAULT_MIN_GAP) -> str:
    """
    Reflow and re-serialize LRC text. Lines the parser does not recognise
    (comments, untimed prose) are not carried over; a warning reports them.
    """
    doc, stats = parse_lrc_with_stats(text)
    if stats.lines_ignored:
        logger.warning("Dropping %d unrecognised line(s) while reflowing", stats.lines_ignored)
    return export_lrc(reflow(doc, min_gap=min_gap))
