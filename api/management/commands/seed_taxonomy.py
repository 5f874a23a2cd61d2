from django.core.management.base import BaseCommand

from api.taxonomy import ensure_categories_exist, ensure_genres_exist


class Command(BaseCommand):
    help = 'Create the default categories and genres (existing entries are left untouched)'

    default_categories = [
        'Chill', 'Workout', 'Focus', 'Party', 'Sleep', 'Road Trip',
        'Romance', 'Throwback', 'Morning Coffee', 'Rainy Day',
    ]
    default_genres = [
        'Pop', 'Rock', 'Hip Hop', 'R&B', 'Electronic', 'Jazz',
        'Blues', 'Metal', 'Classical', 'Folk', 'Traditional', 'Rap',
    ]

    def add_arguments(self, parser):
        parser.add_argument('--category', action='append', default=[], help='Extra category name (repeatable)')
        parser.add_argument('--genre', action='append', default=[], help='Extra genre name (repeatable)')

    def handle(self, *args, **options):
        categories = ensure_categories_exist(self.default_categories + options['category'])
        genres = ensure_genres_exist(self.default_genres + options['genre'])

        self.stdout.write(self.style.SUCCESS(
            f'Categories ready: {len(categories)} ({", ".join(categories)})'
        ))
        self.stdout.write(self.style.SUCCESS(
            f'Genres ready: {len(genres)} ({", ".join(genres)})'
        ))
