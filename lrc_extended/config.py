from __future__ import annotations

import json
from dataclasses import dataclass
import logging
import os
from pathlib import Path

from lrc_extended.i18n import available_langs

logger = logging.getLogger(__name__)

LANGS = available_langs()
_FALSY = ("0", "false", "False", "no", "off")


def _config_dir() -> Path:
    xdg = os.getenv("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "lrc-extended"
    return Path.home() / ".config" / "lrc-extended"


def _config_file() -> Path:
    return _config_dir() / "config.json"


@dataclass(frozen=True)
class AppConfig:
    config_dir: Path

    # Locale
    lang: str

    # Timing
    min_gap: float

    # Playback clock
    preferred_player: str | None

    # Rendering
    refresh_hz: float
    lines_to_show: int  # total rows in the karaoke window
    use_alt_screen: bool
    countdown: bool

    # Authoring / export
    max_line_chars: int
    fps: int


def clamp_lines_to_show(n: int) -> int:
    # odd counts keep the active line centred; 1..11 like the editor's stepper
    n = max(1, min(n, 11))
    return n if n % 2 else n + 1


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number", name, raw)
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", name, raw)
        return default


def _env_flag(name: str, default: bool = True) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip() not in _FALSY


def load_config() -> AppConfig:
    config_dir = _config_dir()
    lang = _load_lang(config_dir)

    return AppConfig(
        config_dir=config_dir,
        lang=lang,
        min_gap=_env_float("LRC_EXTENDED_MIN_GAP", 0.02),
        preferred_player=os.getenv("LRC_EXTENDED_PLAYER") or None,
        refresh_hz=_env_float("LRC_EXTENDED_REFRESH_HZ", 60.0),
        lines_to_show=clamp_lines_to_show(_env_int("LRC_EXTENDED_LINES", 3)),
        use_alt_screen=_env_flag("LRC_EXTENDED_ALT_SCREEN"),
        countdown=_env_flag("LRC_EXTENDED_COUNTDOWN"),
        max_line_chars=_env_int("LRC_EXTENDED_MAX_LINE_CHARS", 42),
        fps=_env_int("LRC_EXTENDED_FPS", 30),
    )


def _load_lang(config_dir: Path) -> str:
    # Priority: config.json → LRC_EXTENDED_LANG → "EN"
    cfg_path = config_dir / "config.json"
    if cfg_path.exists():
        try:
            data = json.loads(cfg_path.read_text(encoding="utf-8"))
            raw = (data.get("lang") or "en").upper()
            if raw in LANGS:
                return raw
        except (OSError, ValueError, AttributeError) as e:
            logger.warning("Ignoring unreadable %s: %s", cfg_path, e)
    env_lang = os.getenv("LRC_EXTENDED_LANG")
    if env_lang and env_lang.upper() in LANGS:
        return env_lang.upper()
    return "EN"


def save_config_lang(lang: str) -> None:
    cfg_path = _config_file()
    cfg_path.parent.mkdir(parents=True, exist_ok=True)
    data: dict[str, str] = {}
    if cfg_path.exists():
        try:
            data = json.loads(cfg_path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            pass
    data["lang"] = lang.upper()
    cfg_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
