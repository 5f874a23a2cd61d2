"""Tests for the sequence allocator and the codes it mints."""

import pytest

from api.models import Album, Sequence
from api.sequences import next_code, next_sequence

pytestmark = pytest.mark.django_db


class TestNextSequence:
    """Tests for next_sequence."""

    def test_values_are_distinct_and_strictly_increasing(self):
        values = [next_sequence("invoice") for _ in range(25)]

        assert values == list(range(1, 26))
        assert Sequence.objects.get(name="invoice").value == 25

    def test_counters_are_independent(self):
        next_sequence("a")
        next_sequence("a")

        assert next_sequence("b") == 1
        assert next_sequence("a") == 3

    def test_existing_counter_continues(self):
        Sequence.objects.create(name="song", value=41)

        assert next_code("song", "TRK") == "TRK000042"


class TestModelCodes:
    """Songs and albums get their codes on first save."""

    def test_song_track_codes(self, make_song):
        first, second = make_song("One"), make_song("Two")

        assert first.track_code == "TRK000001"
        assert second.track_code == "TRK000002"

    def test_track_code_is_stable_on_resave(self, make_song):
        song = make_song()
        code = song.track_code
        song.title = "Renamed"
        song.save()

        assert song.track_code == code
        assert Sequence.objects.get(name="song").value == 1

    def test_album_codes(self, artist):
        album = Album.objects.create(title="Debut", artist=artist)

        assert album.album_code == "ALB000001"


@pytest.mark.django_db(transaction=True)
class TestConcurrentAllocation:
    """Parallel callers on separate connections never share a value."""

    def test_parallel_callers_get_distinct_values(self, run_concurrently):
        batches = run_concurrently(lambda _: [next_sequence("ticket") for _ in range(5)], workers=8)

        values = sorted(v for batch in batches for v in batch)
        assert values == list(range(1, 41))
        assert Sequence.objects.get(name="ticket").value == 40

    def test_parallel_first_use_creates_one_counter(self, run_concurrently):
        values = run_concurrently(lambda _: next_sequence("fresh"), workers=6)

        assert sorted(values) == [1, 2, 3, 4, 5, 6]
        assert Sequence.objects.filter(name="fresh").count() == 1
