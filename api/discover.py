"""Discover feed sections built from songs, likes and playback events.

Every section resolves its ids with one query per item type and silently
drops groups whose entity has since been deleted or hidden. Hidden songs and
albums never appear in any section.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from django.db.models import Count, Max

from .exceptions import AuthenticationRequired, InvalidArgument
from .models import Album, Category, Playback, Song
from .playback import normalize_item_type
from .utils import parse_limit

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 7
MAX_LIMIT = 50

SECTION_RECENT = 'recently-interacted'
SECTION_NEW = 'new-releases'
SECTION_MOST_LIKED = 'most-liked'
SECTION_MOST_LISTENED = 'most-listened'

SECTIONS = (SECTION_RECENT, SECTION_NEW, SECTION_MOST_LIKED, SECTION_MOST_LISTENED)

# Albums are not resolved for the personal history section yet
RECENT_RESOLVABLE = {
    Playback.TYPE_SONG: Song,
    Playback.TYPE_CATEGORY: Category,
}

RESOLVABLE = {
    Playback.TYPE_SONG: Song,
    Playback.TYPE_ALBUM: Album,
    Playback.TYPE_CATEGORY: Category,
}


@dataclass
class DiscoverItem:
    type: str
    item: Any
    played_at: Optional[datetime] = None
    count: Optional[int] = None


def _songs():
    """Publicly visible songs with their album, taxonomy links and like totals."""
    return (
        Song.objects.filter(hidden=False)
        .select_related('album')
        .prefetch_related('category_links', 'genre_links')
        .annotate(likes_total=Count('liked_by', distinct=True))
    )


def _albums():
    return (
        Album.objects.filter(hidden=False)
        .prefetch_related('category_links', 'genre_links', 'songs')
        .annotate(likes_total=Count('liked_by', distinct=True))
    )


ENTITY_QUERYSETS = {
    Song: _songs,
    Album: _albums,
}


def _fetch(model, ids):
    """Resolve ids with one query; hidden and deleted entities are left out."""
    return ENTITY_QUERYSETS.get(model, model.objects.all)().in_bulk(ids)


def recently_interacted(user_id, item_type=None, limit=DEFAULT_LIMIT):
    if not user_id:
        raise AuthenticationRequired('Sign in to see the items you recently played.')

    events = Playback.objects.filter(user_id=user_id)
    if item_type:
        events = events.filter(item_type=normalize_item_type(item_type))
    groups = list(
        events.values('item_type', 'item_id')
        .annotate(last_played=Max('played_at'))
        .order_by('-last_played', '-item_id')[:limit]
    )

    resolved = {}
    for kind, model in RECENT_RESOLVABLE.items():
        ids = [g['item_id'] for g in groups if g['item_type'] == kind]
        if ids:
            resolved[kind] = _fetch(model, ids)

    items = []
    for g in groups:
        entity = resolved.get(g['item_type'], {}).get(g['item_id'])
        if entity is None:
            continue
        items.append(DiscoverItem(type=g['item_type'], item=entity, played_at=g['last_played']))
    return items


def new_releases(limit=DEFAULT_LIMIT):
    songs = _songs().order_by('-created_at', '-id')[:limit]
    return [DiscoverItem(type=Playback.TYPE_SONG, item=song) for song in songs]


def most_liked(limit=DEFAULT_LIMIT):
    songs = _songs().order_by('-likes_total', '-id')[:limit]
    return [DiscoverItem(type=Playback.TYPE_SONG, item=song, count=song.likes_total) for song in songs]


def most_listened(item_type=None, limit=DEFAULT_LIMIT):
    kind = normalize_item_type(item_type or Playback.TYPE_SONG)
    groups = list(
        Playback.objects.filter(item_type=kind)
        .values('item_id')
        .annotate(plays=Count('id'))
        .order_by('-plays', '-item_id')[:limit]
    )
    entities = _fetch(RESOLVABLE[kind], [g['item_id'] for g in groups]) if groups else {}

    items = []
    for g in groups:
        entity = entities.get(g['item_id'])
        if entity is None:
            continue
        items.append(DiscoverItem(type=kind, item=entity, count=g['plays']))
    return items


def get_section(section, user_id=None, item_type=None, limit=None):
    """Compute one ranked discover section.

    Raises InvalidArgument for an unknown section or item type and
    AuthenticationRequired when the personal section is asked for anonymously.
    """
    limit = parse_limit(limit, default=DEFAULT_LIMIT, maximum=MAX_LIMIT)

    if section == SECTION_RECENT:
        items = recently_interacted(user_id, item_type=item_type, limit=limit)
    elif section == SECTION_NEW:
        items = new_releases(limit=limit)
    elif section == SECTION_MOST_LIKED:
        items = most_liked(limit=limit)
    elif section == SECTION_MOST_LISTENED:
        items = most_listened(item_type=item_type, limit=limit)
    else:
        raise InvalidArgument(f'Unknown discover section "{section}". Expected one of: {", ".join(SECTIONS)}.')

    logger.debug('Discover section %s returned %d items', section, len(items))
    return items
