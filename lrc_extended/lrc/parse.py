from __future__ import annotations

from dataclasses import dataclass
import logging
import re

from .model import NO_TIME, Line, LyricsDocument, Token

logger = logging.getLogger(__name__)

_TIME = r"(\d{2}):(\d{2}(?:[.,]\d*)?)"  # mm:ss / mm:ss.ff / mm:ss,ff

HEADER_RE = re.compile(r"^\[(ti|ar|al|by):([^\]]+)\]$", re.IGNORECASE)
_TIME_LABEL_RE = re.compile(rf"^\[{_TIME}\]\[([^<]+)\]$")
LABEL_RE = re.compile(r"^\[(.+)\]$")
# bracketed groups (1, 2), bare groups (3, 4)
_LEADING_TIME_RE = re.compile(rf"^(?:\[{_TIME}\]|{_TIME})")
LINE_TAG_RE = re.compile(rf"^\[{_TIME}\]")
_NUM_RE = re.compile(r"\d+(?:\.\d*)?|\.\d+")


@dataclass(frozen=True, slots=True)
class LrcParseStats:
    lines_total: int
    lines_blank: int
    header_lines: int
    label_lines: int
    lyric_lines: int
    tokens_total: int
    lines_ignored: int


def _to_float(raw: str) -> float:
    s = raw.strip().replace(",", ".")
    if _NUM_RE.fullmatch(s):
        return float(s)
    return 0.0


def parse_time(mm: str, ss: str) -> float:
    """
    "01", "02.50" -> 62.5. Seconds accept "," as decimal separator;
    anything non-numeric counts as 0.
    """
    return _to_float(mm) * 60 + _to_float(ss)


def _scan_words(s: str) -> tuple[list[Token], bool]:
    """
    Collect `<mm:ss.ff>text` pairs. Text runs up to the next "<" or end of
    line. Second value tells whether any word tag was recognized at all.
    """
    tokens: list[Token] = []
    saw_tag = False
    idx = 0
    while True:
        lt = s.find("<", idx)
        if lt < 0:
            break
        gt = s.find(">", lt + 1)
        if gt < 0:
            break
        parts = s[lt + 1 : gt].strip().split(":")
        if len(parts) != 2:
            idx = gt + 1
            continue
        saw_tag = True
        nxt = s.find("<", gt + 1)
        if nxt < 0:
            nxt = len(s)
        text = s[gt + 1 : nxt].strip()
        if text:
            tokens.append(Token(time=parse_time(parts[0], parts[1]), text=text))
        idx = nxt
    return tokens, saw_tag


def _parse(text: str) -> tuple[LyricsDocument, LrcParseStats]:
    meta: dict[str, str] = {}
    lines: list[Line] = []
    last_timed_start = NO_TIME

    total = blank = headers = labels = lyrics = ignored = 0

    for lineno, raw in enumerate(text.replace("\r\n", "\n").replace("\r", "\n").split("\n"), start=1):
        total += 1
        line = raw.strip()
        if not line:
            blank += 1
            continue

        hdr = HEADER_RE.match(line)
        if hdr:
            # later headers overwrite earlier ones, wherever they appear
            meta[hdr.group(1).lower()] = hdr.group(2).strip()
            headers += 1
            continue

        tl = _TIME_LABEL_RE.match(line)
        if tl:
            ts = parse_time(tl.group(1), tl.group(2))
            last_timed_start = ts
            label = tl.group(3).strip()
            if label:
                lines.append(Line(start_time=ts, label=label))
                labels += 1
            else:
                lines.append(Line(start_time=ts))
                lyrics += 1
            continue

        lead = _LEADING_TIME_RE.match(line)

        if lead is None:
            lbl = LABEL_RE.match(line)
            if lbl:
                label = lbl.group(1).strip()
                if label:
                    lines.append(Line(start_time=last_timed_start, label=label))
                    labels += 1
                else:
                    ignored += 1
                continue

            tokens, _ = _scan_words(line)
            if tokens:
                lines.append(Line(start_time=NO_TIME, tokens=tuple(tokens)))
                lyrics += 1
            else:
                logger.debug("Ignoring line %d: %r", lineno, line)
                ignored += 1
            continue

        if lead.group(1) is not None:
            start = parse_time(lead.group(1), lead.group(2))
        else:
            start = parse_time(lead.group(3), lead.group(4))
        last_timed_start = start
        rest = line[lead.end() :].strip()

        lbl = LABEL_RE.match(rest)
        if lbl and lbl.group(1).strip():
            lines.append(Line(start_time=start, label=lbl.group(1).strip()))
            labels += 1
            continue

        tokens, saw_tag = _scan_words(rest)
        if not saw_tag and rest:
            # untagged line is sung as a whole from its line time
            tokens = [Token(time=start, text=rest)]
        lines.append(Line(start_time=start, tokens=tuple(tokens)))
        lyrics += 1

    doc = LyricsDocument(
        lines=tuple(lines),
        title=meta.get("ti"),
        artist=meta.get("ar"),
        album=meta.get("al"),
        by=meta.get("by"),
    )
    stats = LrcParseStats(
        lines_total=total,
        lines_blank=blank,
        header_lines=headers,
        label_lines=labels,
        lyric_lines=lyrics,
        tokens_total=sum(len(ln.tokens) for ln in doc.lines),
        lines_ignored=ignored,
    )
    return doc, stats


def parse_lrc(text: str) -> LyricsDocument:
    """
    Supported:
    - headers [ti:], [ar:], [al:], [by:] (case-insensitive, last one wins)
    - line time [mm:ss], [mm:ss.ff] or bare mm:ss.ff at line start
    - word times <mm:ss.ff>word, repeated within a line
    - section labels [Chorus] and [mm:ss.ff][Chorus]

    Never raises: lines that match nothing are dropped.
    """
    doc, _stats = _parse(text)
    return doc


def parse_lrc_with_stats(text: str) -> tuple[LyricsDocument, LrcParseStats]:
    # thin wrapper for CLI diagnostics
    return _parse(text)
