"""Tests for the discover aggregator sections."""

from datetime import timedelta

import pytest
from django.db import connection
from django.test.utils import CaptureQueriesContext
from django.utils import timezone

from api.discover import SECTIONS, get_section
from api.exceptions import AuthenticationRequired, InvalidArgument
from api.models import Album, Category, Playback, SongLike

pytestmark = pytest.mark.django_db


def _plays(user, item_type, item_id, count, start=None):
    start = start or timezone.now() - timedelta(days=1)
    Playback.objects.bulk_create([
        Playback(user=user, item_type=item_type, item_id=item_id, played_at=start + timedelta(minutes=15 * i))
        for i in range(count)
    ])


class TestNewReleases:
    """Tests for the new-releases section."""

    def test_limit_three_newest_first(self, make_song):
        now = timezone.now()
        songs = [make_song(f"Song {i}", created_at=now - timedelta(days=i)) for i in range(5)]

        items = get_section("new-releases", limit=3)

        assert [i.item.id for i in items] == [songs[0].id, songs[1].id, songs[2].id]
        assert all(i.type == "song" for i in items)

    def test_same_timestamp_ties_break_on_id(self, make_song):
        now = timezone.now()
        first = make_song("First", created_at=now)
        second = make_song("Second", created_at=now)

        items = get_section("new-releases")

        assert [i.item.id for i in items] == [second.id, first.id]

    def test_limit_is_clamped(self, make_song):
        for i in range(3):
            make_song(f"Song {i}")

        assert len(get_section("new-releases", limit="0")) == 1
        assert len(get_section("new-releases", limit="9999")) == 3


class TestMostLiked:
    """Tests for the most-liked section."""

    def test_ranked_by_like_count_then_id(self, make_song, listener, artist, admin_user):
        a, b, c = make_song("A"), make_song("B"), make_song("C")
        for user in (listener, artist):
            SongLike.objects.create(user=user, song=b)
        SongLike.objects.create(user=admin_user, song=a)
        SongLike.objects.create(user=admin_user, song=c)

        items = get_section("most-liked")

        assert [i.item.id for i in items] == [b.id, c.id, a.id]
        assert [i.count for i in items] == [2, 1, 1]


class TestMostListened:
    """Tests for the most-listened section."""

    def test_counts_ranked_and_deleted_items_dropped(self, make_song, listener):
        """Counts {A:5, B:3, C:5} rank A and C ahead of B; a deleted item disappears."""
        a, b, c, gone = make_song("A"), make_song("B"), make_song("C"), make_song("Gone")
        _plays(listener, "song", a.id, 5)
        _plays(listener, "song", b.id, 3)
        _plays(listener, "song", c.id, 5)
        _plays(listener, "song", gone.id, 9)
        gone.delete()

        items = get_section("most-listened")

        assert {i.item.id for i in items[:2]} == {a.id, c.id}
        assert items[2].item.id == b.id
        assert len(items) == 3
        assert [i.count for i in items] == [5, 5, 3]

    def test_audio_alias_and_other_types(self, listener, artist):
        album = Album.objects.create(title="Nights", artist=artist)
        category = Category.objects.create(name="Focus", slug="focus")
        _plays(listener, "album", album.id, 2)
        _plays(listener, "category", category.id, 4)

        assert [i.item for i in get_section("most-listened", item_type="album")] == [album]
        assert [i.item for i in get_section("most-listened", item_type="category")] == [category]
        assert get_section("most-listened", item_type="audio") == []

    def test_unknown_type(self):
        with pytest.raises(InvalidArgument):
            get_section("most-listened", item_type="podcast")


class TestRecentlyInteracted:
    """Tests for the recently-interacted section."""

    def test_requires_user(self):
        with pytest.raises(AuthenticationRequired):
            get_section("recently-interacted")

    def test_auth_required_is_an_invalid_argument_with_401(self):
        assert issubclass(AuthenticationRequired, InvalidArgument)
        assert AuthenticationRequired.status_code == 401

    def test_latest_play_per_item_newest_first(self, make_song, listener, artist):
        old, recent = make_song("Old"), make_song("Recent")
        category = Category.objects.create(name="Chill", slug="chill")
        album = Album.objects.create(title="Skipped", artist=artist)
        now = timezone.now()
        Playback.objects.bulk_create([
            Playback(user=listener, item_type="song", item_id=old.id, played_at=now - timedelta(hours=5)),
            Playback(user=listener, item_type="song", item_id=recent.id, played_at=now - timedelta(hours=3)),
            Playback(user=listener, item_type="category", item_id=category.id, played_at=now - timedelta(hours=2)),
            Playback(user=listener, item_type="album", item_id=album.id, played_at=now - timedelta(hours=1)),
            Playback(user=listener, item_type="song", item_id=old.id, played_at=now - timedelta(minutes=30)),
            Playback(user=artist, item_type="song", item_id=recent.id, played_at=now),
        ])

        items = get_section("recently-interacted", user_id=listener.id)

        assert [(i.type, i.item.id) for i in items] == [
            ("song", old.id),
            ("category", category.id),
            ("song", recent.id),
        ]
        assert items[0].played_at == now - timedelta(minutes=30)

    def test_type_filter_and_missing_entities(self, make_song, listener):
        kept, gone = make_song("Kept"), make_song("Gone")
        _plays(listener, "song", kept.id, 1)
        _plays(listener, "song", gone.id, 1, start=timezone.now())
        _plays(listener, "category", 999, 1)
        gone.delete()

        items = get_section("recently-interacted", user_id=listener.id, item_type="audio")

        assert [i.item.id for i in items] == [kept.id]


class TestGetSection:
    def test_unknown_section(self):
        with pytest.raises(InvalidArgument):
            get_section("trending")

    def test_section_names(self):
        assert SECTIONS == ("recently-interacted", "new-releases", "most-liked", "most-listened")


class TestHiddenContent:
    """Hidden songs and albums stay out of every section."""

    def test_hidden_song_left_out_of_public_sections(self, make_song, listener):
        visible = make_song("Visible")
        hidden = make_song("Hidden", hidden=True)
        SongLike.objects.create(user=listener, song=hidden)
        _plays(listener, "song", hidden.id, 4)
        _plays(listener, "song", visible.id, 1)

        for section in ("new-releases", "most-liked", "most-listened"):
            ids = [i.item.id for i in get_section(section)]
            assert hidden.id not in ids, section
            assert visible.id in ids, section

    def test_hidden_song_dropped_from_history(self, make_song, listener):
        hidden = make_song("Hidden", hidden=True)
        _plays(listener, "song", hidden.id, 1)

        assert get_section("recently-interacted", user_id=listener.id) == []

    def test_hidden_album_dropped(self, listener, artist):
        shown = Album.objects.create(title="Shown", artist=artist)
        hidden = Album.objects.create(title="Hidden", artist=artist, hidden=True)
        _plays(listener, "album", hidden.id, 3)
        _plays(listener, "album", shown.id, 1)

        assert [i.item for i in get_section("most-listened", item_type="album")] == [shown]


class TestBatchedResolution:
    """Resolution cost does not grow with the number of items returned."""

    def _count_queries(self, section, **kwargs):
        with CaptureQueriesContext(connection) as ctx:
            items = get_section(section, **kwargs)
        return len(ctx.captured_queries), items

    def test_most_listened_uses_one_entity_query(self, make_song, listener):
        for i in range(2):
            _plays(listener, "song", make_song(f"Few {i}").id, 1)
        few, items = self._count_queries("most-listened")
        assert len(items) == 2

        for i in range(6):
            _plays(listener, "song", make_song(f"Many {i}").id, 1)
        many, items = self._count_queries("most-listened", limit=20)
        assert len(items) == 8

        # grouping, one song lookup, two taxonomy prefetches
        assert few == many == 4

    def test_recently_interacted_is_one_query_per_type(self, make_song, listener):
        category = Category.objects.create(name="Chill", slug="chill")
        _plays(listener, "category", category.id, 1)
        for i in range(5):
            _plays(listener, "song", make_song(f"Song {i}").id, 1)

        count, items = self._count_queries("recently-interacted", user_id=listener.id)

        assert len(items) == 6
        # grouping, songs, two taxonomy prefetches, categories
        assert count == 5

    def test_like_counts_come_from_the_annotation(self, make_song, listener):
        songs = [make_song(f"Song {i}") for i in range(3)]
        SongLike.objects.create(user=listener, song=songs[1])

        items = get_section("new-releases")

        with CaptureQueriesContext(connection) as ctx:
            totals = {i.item.id: i.item.likes_total for i in items}
        assert totals == {songs[0].id: 0, songs[1].id: 1, songs[2].id: 0}
        assert len(ctx.captured_queries) == 0
