from __future__ import annotations

import json
import math

from .model import Line, LyricsDocument
from .reflow import LAST_LINE_TAIL

_HEADER_ORDER = ("ti", "ar", "al", "by")


def _mm_ss_cc(t: float) -> str:
    if not math.isfinite(t) or t < 0:
        t = 0.0
    # keep 2 decimals for compatibility
    total_cs = int(round(t * 100))
    s, cs = divmod(total_cs, 100)
    m, s = divmod(s, 60)
    return f"{m:02d}:{s:02d}.{cs:02d}"


def format_line_tag(t: float) -> str:
    return f"[{_mm_ss_cc(t)}]"


def format_word_tag(t: float) -> str:
    return f"<{_mm_ss_cc(t)}>"


def format_line(line: Line) -> str:
    head = format_line_tag(line.start_time) if line.start_time >= 0 else ""
    if line.tokens:
        return head + " ".join(f"{format_word_tag(tok.time)}{tok.text}" for tok in line.tokens)
    if line.label is not None:
        return f"{head}[{line.label}]"
    return head


def export_lrc(doc: LyricsDocument, include_tags: bool = True) -> str:
    out: list[str] = []
    if include_tags:
        tags = doc.tags
        for k in _HEADER_ORDER:
            if k in tags:
                out.append(f"[{k}:{tags[k]}]")

    for line in doc.lines:
        s = format_line(line)
        if s:
            out.append(s)
    return "\n".join(out) + ("\n" if out else "")


def export_json(doc: LyricsDocument) -> str:
    return json.dumps(
        {
            "tags": doc.tags,
            "lines": [
                {
                    "start": ln.start_time,
                    "label": ln.label,
                    "tokens": [{"t": tok.time, "text": tok.text} for tok in ln.tokens],
                }
                for ln in doc.lines
            ],
        },
        ensure_ascii=False,
        indent=2,
    )


def _fmt_srt_time(t: float) -> str:
    # HH:MM:SS,mmm
    ms = max(int(round(t * 1000)), 0)
    h, rem = divmod(ms, 3_600_000)
    m, rem = divmod(rem, 60_000)
    s, ms2 = divmod(rem, 1_000)
    return f"{h:02d}:{m:02d}:{s:02d},{ms2:03d}"


def export_srt(doc: LyricsDocument) -> str:
    """
    One cue per timed line with text. A cue ends where the next timed line
    starts; the last one at its last word + 0.5s.
    """
    timed = [ln for _i, ln in doc.timed_lines()]
    out: list[str] = []
    n = 0
    for k, line in enumerate(timed):
        text = line.text.strip()
        if not text:
            continue
        start = line.start
        if k + 1 < len(timed):
            end = timed[k + 1].start
        else:
            end = line.last_time + LAST_LINE_TAIL
        end = max(end, start + 0.001)
        n += 1
        out.append(str(n))
        out.append(f"{_fmt_srt_time(start)} --> {_fmt_srt_time(end)}")
        out.append(text)
        out.append("")
    return "\n".join(out)
