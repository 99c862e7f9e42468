from __future__ import annotations

import logging
from typing import Any

import dbus

from .errors import NoPlayersFound, PlayerUnavailable
from .types import TrackInfo, join_artist, to_str

logger = logging.getLogger(__name__)

_PLAYER_IFACE = "org.mpris.MediaPlayer2.Player"


class MprisClient:
    """
    Playback clock backed by a desktop media player over D-Bus, so lyrics
    follow whatever the player is actually playing.
    """

    def __init__(self, service_name: str):
        self.service_name = service_name
        self._bus = dbus.SessionBus()
        self._obj = self._bus.get_object(service_name, "/org/mpris/MediaPlayer2")
        self._props = dbus.Interface(self._obj, "org.freedesktop.DBus.Properties")

    @staticmethod
    def list_players() -> list[str]:
        try:
            bus = dbus.SessionBus()
            return [s for s in bus.list_names() if s.startswith("org.mpris.MediaPlayer2.")]
        except dbus.DBusException as e:
            # no session bus in sandboxes/CI: treat as "no players"
            logger.debug("Unable to connect to D-Bus session bus: %s", e)
            return []

    @staticmethod
    def pick_player(preferred: str | None = None) -> "MprisClient":
        players = MprisClient.list_players()
        if not players:
            raise NoPlayersFound("No active MPRIS players")

        if preferred:
            # allow passing short name like "vlc"
            for s in players:
                if s == preferred or s.endswith("." + preferred):
                    return MprisClient(s)
            logger.warning("Preferred player '%s' not found, falling back", preferred)

        for s in players:
            try:
                c = MprisClient(s)
                if c.playback_status().lower() == "playing":
                    return c
            except (dbus.DBusException, PlayerUnavailable):
                continue

        return MprisClient(players[0])

    def _get(self, name: str) -> Any:
        try:
            return self._props.Get(_PLAYER_IFACE, name)
        except dbus.DBusException as e:
            raise PlayerUnavailable(str(e)) from e

    def playback_status(self) -> str:
        return to_str(self._get("PlaybackStatus"))

    def position_s(self) -> float:
        # MPRIS Position is microseconds
        return int(self._get("Position")) / 1_000_000

    def track_info(self) -> TrackInfo:
        md = dict(self._get("Metadata"))
        return TrackInfo(
            title=to_str(md.get("xesam:title", "")),
            artist=join_artist(md.get("xesam:artist", [])),
            album=to_str(md.get("xesam:album", "")),
        )
