from __future__ import annotations

import pytest

from lrc_extended.mpris.errors import ClockError, NoPlayersFound, PlayerUnavailable
from lrc_extended.mpris.types import TrackInfo
from tests.mocks.mpris_mock import MockMprisClient


class TestMockMprisClient:
    def test_basic_track_info(self):
        mock = MockMprisClient()
        ti = mock.track_info()
        assert ti == TrackInfo(title="Test Track", artist="Test Artist", album="Test Album")
        assert ti.display == "Test Artist - Test Track"

    def test_set_track(self):
        mock = MockMprisClient()
        mock.set_track("New Song", "New Artist", "New Album")
        ti = mock.track_info()
        assert ti.title == "New Song"
        assert ti.artist == "New Artist"
        assert ti.album == "New Album"

    def test_multiple_artists(self):
        mock = MockMprisClient()
        mock.set_track("Song", ["Artist1", "Artist2"])
        assert mock.track_info().artist == "Artist1, Artist2"

    def test_seek_and_pause(self):
        mock = MockMprisClient(position_s=3.0)
        assert mock.position_s() == 3.0
        mock.seek(-4.0)
        assert mock.position_s() == 0.0
        mock.seek(12.5)
        mock.pause()
        assert mock.playback_status() == "Paused"
        assert mock.position_s() == 12.5

    def test_pick_player(self):
        assert MockMprisClient.pick_player().service_name == "org.mpris.MediaPlayer2.mock"
        with pytest.raises(NoPlayersFound):
            MockMprisClient.pick_player(preferred="vlc")

    def test_unavailable_player_raises(self):
        mock = MockMprisClient()
        mock.available = False
        with pytest.raises(PlayerUnavailable):
            mock.position_s()
        with pytest.raises(ClockError):
            mock.track_info()


@pytest.mark.parametrize(
    "artist, title, expected",
    [
        ("A", "T", "A - T"),
        ("", "T", "T"),
        ("A", "", "A"),
        ("", "", ""),
    ],
)
def test_track_display(artist, title, expected):
    assert TrackInfo(title=title, artist=artist, album="").display == expected
