import logging

from django.db import IntegrityError, transaction

from .exceptions import InvalidArgument
from .models import Category, Genre
from .utils import normalize_many, slugify, title_case

logger = logging.getLogger(__name__)


def _existing_slugs(model, slugs):
    return set(model.objects.filter(slug__in=slugs).values_list('slug', flat=True))


def ensure_exist(model, raw) -> list:
    """Normalise raw taxonomy input and make sure every slug has a row.

    Returns the ordered slug list whether or not the entries already existed.
    Inserts run in their own savepoint: if another request created the same
    slug in the meantime the unique constraint rejects ours and the slug is
    simply there, which is all we need.
    """
    slugs = normalize_many(raw)
    if not slugs:
        return []

    existing = _existing_slugs(model, slugs)
    for slug in slugs:
        if slug in existing:
            continue
        try:
            with transaction.atomic():
                model.objects.create(name=title_case(slug), slug=slug)
        except IntegrityError:
            logger.debug('%s %s was provisioned concurrently', model.__name__, slug)
        else:
            logger.info('Provisioned %s %s', model.__name__, slug)
    return slugs


def ensure_categories_exist(raw) -> list:
    return ensure_exist(Category, raw)


def ensure_genres_exist(raw) -> list:
    return ensure_exist(Genre, raw)


def assign_taxonomy(obj, relation, slugs):
    """Replace the ordered taxonomy links of a song or album.

    relation is the many-to-many name on the instance ('categories' or
    'genres'); slugs must already exist (see ensure_exist).
    """
    manager = getattr(obj, relation)
    through = manager.through
    source = manager.source_field_name
    target = through._meta.get_field(manager.target_field_name).attname

    through.objects.filter(**{source: obj}).delete()
    through.objects.bulk_create([
        through(**{source: obj, target: slug, 'position': position})
        for position, slug in enumerate(slugs)
    ])


def create_taxon(model, name, image=''):
    """Admin creation of a category or genre; the slug is derived from the name."""
    slug = slugify(name)
    if not slug:
        raise InvalidArgument('A name containing at least one letter or digit is required.')
    if model.objects.filter(slug=slug).exists():
        raise InvalidArgument(f'{model.__name__} with slug "{slug}" already exists.')
    display_name = (name or '').strip() or title_case(slug)
    try:
        with transaction.atomic():
            return model.objects.create(name=display_name, slug=slug, image=image or '')
    except IntegrityError:
        raise InvalidArgument(f'{model.__name__} with slug "{slug}" already exists.')
