from __future__ import annotations

import time


class WallClock:
    """
    Playback position driven by the monotonic clock, for playing lyrics
    without a media player. Positions are seconds.
    """

    def __init__(self, start_s: float = 0.0, rate: float = 1.0, playing: bool = True):
        self.rate = float(rate)
        self._base_s = float(start_s)
        self._started: float | None = time.monotonic() if playing else None

    @property
    def playing(self) -> bool:
        return self._started is not None

    def position_s(self) -> float:
        if self._started is None:
            return self._base_s
        return self._base_s + (time.monotonic() - self._started) * self.rate

    def pause(self) -> None:
        if self._started is None:
            return
        self._base_s = self.position_s()
        self._started = None

    def play(self) -> None:
        if self._started is None:
            self._started = time.monotonic()

    def seek(self, position_s: float) -> None:
        self._base_s = float(position_s)
        if self._started is not None:
            self._started = time.monotonic()
