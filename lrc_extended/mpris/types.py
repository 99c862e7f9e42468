from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class TrackInfo:
    title: str
    artist: str
    album: str

    @property
    def display(self) -> str:
        if self.artist and self.title:
            return f"{self.artist} - {self.title}"
        return self.title or self.artist


def to_str(value: Any) -> str:
    try:
        return str(value)
    except Exception:
        return ""


def join_artist(value: Any) -> str:
    # xesam:artist is a list of strings (dbus.Array is a list subclass)
    if isinstance(value, (list, tuple)):
        return ", ".join(to_str(x) for x in value if to_str(x))
    return to_str(value)
