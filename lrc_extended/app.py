from __future__ import annotations

import logging
import time
from typing import Protocol

from lrc_extended.config import AppConfig
from lrc_extended.i18n import t
from lrc_extended.lrc.model import LyricsDocument
from lrc_extended.mpris.errors import PlayerUnavailable
from lrc_extended.render.ansi import Frame, KaraokeRenderer, adjust_window_start, visible_lines
from lrc_extended.sync.tracker import SpanTracker

logger = logging.getLogger(__name__)


class PlaybackClock(Protocol):
    def position_s(self) -> float: ...


def play(
    cfg: AppConfig,
    doc: LyricsDocument,
    clock: PlaybackClock,
    *,
    title: str,
    stop_at: float | None = None,
    renderer: KaraokeRenderer | None = None,
) -> int:
    """
    Main play loop:
    clock -> position -> resolve -> render on change.

    Runs until the clock passes `stop_at` (forever when None) or Ctrl+C.
    """
    renderer = renderer or KaraokeRenderer(use_alt_screen=cfg.use_alt_screen)
    rows = visible_lines(doc)
    row_of = {doc_idx: pos for pos, (doc_idx, _line) in enumerate(rows)}
    lines = tuple(line for _i, line in rows)

    tracker = SpanTracker(doc)
    first_start = doc.first_start()
    window_start = 0
    last_countdown: int | None = None
    tick_s = 1.0 / max(cfg.refresh_hz, 1.0)

    renderer.enter()
    try:
        if not doc.timed_lines():
            renderer.render(Frame(title=title, message=t("no_timed_lines")))
            return 1

        while True:
            try:
                pos = clock.position_s()
            except PlayerUnavailable as e:
                logger.debug("Clock unavailable: %s", e)
                renderer.render(Frame(title=title, message=t("player_unavailable", error=str(e))))
                tracker.last = None
                time.sleep(0.5)
                continue

            if stop_at is not None and pos > stop_at:
                return 0

            if cfg.countdown and first_start is not None and first_start - pos >= 1:
                remaining = int(first_start - pos)
                if remaining != last_countdown:
                    last_countdown = remaining
                    renderer.render(
                        Frame(title=doc.tag("ti") or title, subtitle=doc.tag("ar") or "", countdown=remaining)
                    )
                    # force a lyrics redraw once the countdown ends
                    tracker.last = None
                time.sleep(tick_s)
                continue
            last_countdown = None

            span = tracker.changed(pos)
            if span is not None:
                current = row_of.get(span.line_index, -1) if span.line_index is not None else -1
                if current >= 0:
                    window_start = adjust_window_start(window_start, current, len(lines), cfg.lines_to_show)
                renderer.render(
                    Frame(
                        title=title,
                        lines=lines,
                        current_idx=current,
                        token_idx=span.token_index,
                        window_start=window_start,
                        lines_to_show=cfg.lines_to_show,
                    )
                )

            time.sleep(tick_s)
    except KeyboardInterrupt:
        return 0
    finally:
        renderer.exit()
