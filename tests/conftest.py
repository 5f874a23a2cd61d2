import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
from django.db import connection
from rest_framework.test import APIClient

from api.models import Artist, Song, User


# ============================================================================
# User Fixtures
# ============================================================================


@pytest.fixture
def listener(db):
    """A plain listener account."""
    return User.objects.create_user(email="listener@example.com", password="secret-pass", name="Lena")


@pytest.fixture
def artist(db):
    """An artist account that can upload songs and albums."""
    return User.objects.create_user(
        email="artist@example.com", password="secret-pass", name="Arlo", roles=User.ROLE_ARTIST
    )


@pytest.fixture
def other_artist(db):
    return User.objects.create_user(
        email="other-artist@example.com", password="secret-pass", name="Otto", roles=User.ROLE_ARTIST
    )


@pytest.fixture
def admin_user(db):
    """An admin account (roles=admin, is_staff)."""
    return User.objects.create_superuser(email="admin@example.com", password="secret-pass")


# ============================================================================
# Content Fixtures
# ============================================================================


@pytest.fixture
def artist_profile(artist):
    """Public profile of the artist fixture."""
    return Artist.ensure_for(artist)


@pytest.fixture
def make_song(artist):
    """Factory for creating songs owned by the artist fixture."""
    def _make(title="Song", uploader=None, **kwargs):
        return Song.objects.create(title=title, uploader=uploader or artist, artist_name="Arlo", **kwargs)
    return _make


# ============================================================================
# Client Fixtures
# ============================================================================


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def auth_client():
    """Factory returning an APIClient authenticated as the given user."""
    def _client(user):
        client = APIClient()
        client.force_authenticate(user=user)
        return client
    return _client


# ============================================================================
# Concurrency Fixtures
# ============================================================================


@pytest.fixture
def run_concurrently():
    """Run fn(index) on N threads released together; returns results in index order.

    Each worker uses its own database connection and closes it when done.
    Pair with ``django_db(transaction=True)`` so the workers see committed rows.
    """
    def _run(fn, workers=8):
        barrier = threading.Barrier(workers)

        def task(index):
            barrier.wait()
            try:
                return fn(index)
            finally:
                connection.close()

        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(task, range(workers)))
    return _run
