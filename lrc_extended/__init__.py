from lrc_extended.lrc.model import NO_TIME, Line, LyricsDocument, Token
from lrc_extended.lrc.parse import parse_lrc
from lrc_extended.lrc.reflow import reflow
from lrc_extended.sync.tracker import ActiveSpan, resolve, resolve_line, resolve_token

__all__ = [
    "NO_TIME",
    "ActiveSpan",
    "Line",
    "LyricsDocument",
    "Token",
    "parse_lrc",
    "reflow",
    "resolve",
    "resolve_line",
    "resolve_token",
]
