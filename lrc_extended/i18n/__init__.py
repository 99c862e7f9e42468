from __future__ import annotations

from functools import lru_cache
import json
from importlib.resources import files

DEFAULT_LANG = "en"

_current = DEFAULT_LANG
_strings: dict[str, str] = {}


def available_langs() -> tuple[str, ...]:
    """Codes of the shipped `<code>.json` locales, upper-cased."""
    names = (p.name for p in files("lrc_extended.i18n").iterdir())
    return tuple(sorted(n[: -len(".json")].upper() for n in names if n.endswith(".json")))


@lru_cache(maxsize=None)
def _load_locale(code: str) -> dict[str, str]:
    try:
        path = files("lrc_extended.i18n") / f"{code}.json"
        return dict(json.loads(path.read_text(encoding="utf-8")))
    except (OSError, ValueError):
        return {}


def set_lang(lang: str) -> None:
    global _current, _strings
    code = (lang or DEFAULT_LANG).lower()
    if code.upper() not in available_langs():
        code = DEFAULT_LANG
    _current = code
    # keys missing from a translation fall back to English
    _strings = {**_load_locale(DEFAULT_LANG), **_load_locale(code)}


def t(key: str, **kwargs: str | int | float) -> str:
    if not _strings:
        set_lang(_current)
    s = _strings.get(key, key)
    if kwargs:
        try:
            return s.format(**kwargs)
        except (KeyError, IndexError, ValueError):
            return s
    return s


set_lang(DEFAULT_LANG)
