"""Tests for the playback recorder and its deduplication window."""

from datetime import timedelta
from unittest.mock import patch

import pytest
from django.contrib.auth.models import AnonymousUser
from django.db import OperationalError
from django.utils import timezone

from api.exceptions import InvalidArgument
from api.models import Playback, PlaybackWindow
from api.playback import (
    PLAYBACK_WINDOW,
    normalize_item_type,
    parse_item_id,
    record,
    record_quietly,
)

pytestmark = pytest.mark.django_db


class TestNormalizeItemType:
    """Tests for item type validation."""

    def test_audio_alias(self):
        assert normalize_item_type("audio") == "song"
        assert normalize_item_type(" Audio ") == "song"

    @pytest.mark.parametrize("value", ["song", "album", "category"])
    def test_known_types(self, value):
        assert normalize_item_type(value) == value

    @pytest.mark.parametrize("value", ["podcast", "", None])
    def test_unknown_types(self, value):
        with pytest.raises(InvalidArgument):
            normalize_item_type(value)


class TestParseItemId:
    """Tests for item id validation."""

    def test_accepts_ints_and_digit_strings(self):
        assert parse_item_id(42) == 42
        assert parse_item_id("42") == 42

    @pytest.mark.parametrize("value", [0, -1, "abc", "4.2", True, None, ""])
    def test_rejects_malformed(self, value):
        with pytest.raises(InvalidArgument):
            parse_item_id(value)


class TestRecord:
    """Tests for record."""

    def test_first_play_is_recorded(self, listener):
        assert record(listener.id, "song", 1) is True

        event = Playback.objects.get()
        assert (event.user_id, event.item_type, event.item_id) == (listener.id, "song", 1)

    def test_repeat_within_window_is_deduplicated(self, listener):
        """Plays at t and t+5min produce one event; t+11min produces a second."""
        t = timezone.now()

        assert record(listener.id, "song", 7, now=t) is True
        assert record(listener.id, "song", 7, now=t + timedelta(minutes=5)) is False
        assert Playback.objects.count() == 1

        assert record(listener.id, "song", 7, now=t + timedelta(minutes=11)) is True
        assert Playback.objects.count() == 2

    def test_window_is_anchored_on_last_inserted_event(self, listener):
        """A deduplicated play does not move the window forward."""
        t = timezone.now()
        record(listener.id, "album", 3, now=t)
        record(listener.id, "album", 3, now=t + timedelta(minutes=9))

        later = t + PLAYBACK_WINDOW + timedelta(seconds=1)
        assert record(listener.id, "album", 3, now=later) is True
        assert PlaybackWindow.objects.get().opened_at == later

    def test_play_exactly_at_window_edge_is_deduplicated(self, listener):
        """The trailing window includes its edge: t and t+10min are one event."""
        t = timezone.now()

        assert record(listener.id, "song", 4, now=t) is True
        assert record(listener.id, "song", 4, now=t + PLAYBACK_WINDOW) is False
        assert Playback.objects.count() == 1
        assert PlaybackWindow.objects.get().opened_at == t

        assert record(listener.id, "song", 4, now=t + PLAYBACK_WINDOW + timedelta(microseconds=1)) is True
        assert Playback.objects.count() == 2

    def test_window_is_per_item_and_per_user(self, listener, artist):
        t = timezone.now()

        assert record(listener.id, "song", 1, now=t) is True
        assert record(listener.id, "song", 2, now=t) is True
        assert record(listener.id, "category", 1, now=t) is True
        assert record(artist.id, "song", 1, now=t) is True
        assert Playback.objects.count() == 4

    def test_audio_alias_shares_the_song_window(self, listener):
        t = timezone.now()
        record(listener.id, "song", 5, now=t)

        assert record(listener.id, "audio", "5", now=t + timedelta(minutes=1)) is False

    def test_invalid_input_writes_nothing(self, listener):
        with pytest.raises(InvalidArgument):
            record(listener.id, "podcast", 1)
        with pytest.raises(InvalidArgument):
            record(listener.id, "song", "x1")

        assert Playback.objects.count() == 0
        assert PlaybackWindow.objects.count() == 0


class TestRecordQuietly:
    """Tests for record_quietly used from read views."""

    def test_anonymous_is_skipped(self):
        assert record_quietly(AnonymousUser(), "song", 1) is False
        assert Playback.objects.count() == 0

    def test_store_errors_are_logged_not_raised(self, listener, caplog):
        with patch("api.playback.record", side_effect=OperationalError("timeout")):
            assert record_quietly(listener, "song", 1) is False

        assert "Failed to record playback" in caplog.text

    def test_records_for_signed_in_user(self, listener):
        assert record_quietly(listener, "category", 9) is True
        assert Playback.objects.filter(item_type="category", item_id=9).exists()


@pytest.mark.django_db(transaction=True)
class TestConcurrentRecord:
    """Simultaneous plays of one item by one user collapse to a single event."""

    def test_one_winner_per_key(self, listener, run_concurrently):
        t = timezone.now()

        results = run_concurrently(lambda i: record(listener.id, "song", 11, now=t + timedelta(seconds=i)), workers=8)

        assert results.count(True) == 1
        assert Playback.objects.filter(item_type="song", item_id=11).count() == 1
        assert PlaybackWindow.objects.count() == 1

    def test_distinct_keys_do_not_block_each_other(self, listener, run_concurrently):
        results = run_concurrently(lambda i: record(listener.id, "song", i + 1), workers=5)

        assert results == [True] * 5
        assert Playback.objects.count() == 5
