"""Tests for the seed_taxonomy management command."""

from io import StringIO

import pytest
from django.core.management import call_command

from api.models import Category, Genre

pytestmark = pytest.mark.django_db


class TestSeedTaxonomy:
    def test_seeds_defaults_and_extras(self):
        out = StringIO()
        call_command("seed_taxonomy", "--genre", "Drum & Bass", "--category", "Gaming", stdout=out)

        assert Genre.objects.filter(slug="hip-hop").exists()
        assert Genre.objects.filter(slug="drum-and-bass").exists()
        assert Category.objects.filter(slug="gaming").exists()
        assert "Genres ready" in out.getvalue()

    def test_running_twice_is_idempotent(self):
        call_command("seed_taxonomy", stdout=StringIO())
        genres = Genre.objects.count()
        categories = Category.objects.count()

        call_command("seed_taxonomy", stdout=StringIO())

        assert Genre.objects.count() == genres
        assert Category.objects.count() == categories
