from __future__ import annotations

from dataclasses import dataclass

NO_TIME = -1.0  # sentinel: line has no timestamp of its own

_TAG_ALIASES = {
    "ti": ("ti", "title", "song", "name"),
    "ar": ("ar", "artist", "singer"),
    "al": ("al", "album", "record"),
    "by": ("by", "editor", "creator"),
}


@dataclass(frozen=True, slots=True)
class Token:
    time: float
    text: str


@dataclass(frozen=True, slots=True)
class Line:
    start_time: float = NO_TIME
    tokens: tuple[Token, ...] = ()
    label: str | None = None

    @property
    def start(self) -> float:
        # token-level precision wins over the line tag
        if self.tokens:
            return self.tokens[0].time
        return self.start_time

    @property
    def last_time(self) -> float:
        if self.tokens:
            return self.tokens[-1].time
        return self.start_time

    @property
    def is_timed(self) -> bool:
        return bool(self.tokens) or self.start >= 0

    @property
    def is_label(self) -> bool:
        return not self.tokens and bool(self.label and self.label.strip())

    @property
    def text(self) -> str:
        if self.tokens:
            return " ".join(tok.text for tok in self.tokens)
        return self.label or ""


@dataclass(frozen=True, slots=True)
class LyricsDocument:
    lines: tuple[Line, ...] = ()
    title: str | None = None
    artist: str | None = None
    album: str | None = None
    by: str | None = None

    def tag(self, key: str) -> str | None:
        """
        Header value by LRC key or a common alias ("title", "singer", ...).
        """
        k = key.strip().lower()
        for canonical, aliases in _TAG_ALIASES.items():
            if k in aliases:
                return self.tags.get(canonical)
        return None

    @property
    def tags(self) -> dict[str, str]:
        values = {"ti": self.title, "ar": self.artist, "al": self.album, "by": self.by}
        return {k: v for k, v in values.items() if v is not None}

    def timed_lines(self) -> list[tuple[int, Line]]:
        """
        Lines taking part in timing, with their index in `lines`.

        Unanchored labels (start at the -1 sentinel) are left out.
        """
        return [(i, ln) for i, ln in enumerate(self.lines) if ln.is_timed]

    def first_start(self) -> float | None:
        starts = [ln.start for ln in self.lines if ln.start >= 0]
        return min(starts) if starts else None

    def lyric_duration(self, default: float = 10.0) -> float:
        ends = []
        for ln in self.lines:
            if ln.tokens:
                ends.append(ln.tokens[-1].time)
            elif ln.start_time > 0:
                ends.append(ln.start_time)
        return max(ends) if ends else default
