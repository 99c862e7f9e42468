from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from lrc_extended.lrc.model import LyricsDocument

from .tracker import resolve


@dataclass(frozen=True, slots=True)
class FrameSample:
    frame: int
    time: float
    line_index: int | None
    token_index: int | None


def total_frames(doc: LyricsDocument, fps: int, audio_duration: float = 0.0) -> int:
    # run until the last lyric time even when the audio is shorter
    duration = max(audio_duration, doc.lyric_duration())
    return int(duration * fps)


def sample_frames(doc: LyricsDocument, fps: int = 30, audio_duration: float = 0.0) -> Iterator[FrameSample]:
    """
    Resolve the active span at every frame time, the way a video exporter
    walks the timeline.
    """
    if fps <= 0:
        raise ValueError(f"fps must be positive, got {fps}")
    for frame in range(total_frames(doc, fps, audio_duration)):
        t = frame / fps
        span = resolve(doc, t)
        yield FrameSample(frame=frame, time=t, line_index=span.line_index, token_index=span.token_index)


def span_changes(samples: Iterable[FrameSample]) -> list[FrameSample]:
    out: list[FrameSample] = []
    prev: tuple[int | None, int | None] | None = None
    for s in samples:
        key = (s.line_index, s.token_index)
        if key != prev:
            out.append(s)
            prev = key
    return out
