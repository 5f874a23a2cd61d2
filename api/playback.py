import logging
from datetime import timedelta

from django.db import transaction
from django.utils import timezone

from .exceptions import InvalidArgument
from .models import Playback, PlaybackWindow

logger = logging.getLogger(__name__)

# Repeated engagement with the same item inside this window is one session
PLAYBACK_WINDOW = timedelta(minutes=10)

ITEM_TYPES = (Playback.TYPE_SONG, Playback.TYPE_ALBUM, Playback.TYPE_CATEGORY)
ITEM_TYPE_ALIASES = {'audio': Playback.TYPE_SONG}


def normalize_item_type(item_type) -> str:
    """Map the legacy 'audio' alias to 'song' and reject anything unknown."""
    value = str(item_type or '').strip().lower()
    value = ITEM_TYPE_ALIASES.get(value, value)
    if value not in ITEM_TYPES:
        raise InvalidArgument(f'Unknown item type "{item_type}". Expected one of: {", ".join(ITEM_TYPES)}.')
    return value


def parse_item_id(item_id) -> int:
    if isinstance(item_id, bool):
        raise InvalidArgument('item_id must be a positive integer identifier.')
    if isinstance(item_id, int):
        value = item_id
    elif isinstance(item_id, str) and item_id.strip().isdigit():
        value = int(item_id.strip())
    else:
        raise InvalidArgument('item_id must be a positive integer identifier.')
    if value <= 0:
        raise InvalidArgument('item_id must be a positive integer identifier.')
    return value


def record(user_id, item_type, item_id, now=None) -> bool:
    """Record that a user engaged with an item.

    Returns True when a new Playback row was written and False when an event
    for the same key already exists inside the trailing window. The window
    anchor row is claimed with a conditional UPDATE, so concurrent requests for
    the same item cannot both insert.
    """
    item_type = normalize_item_type(item_type)
    item_id = parse_item_id(item_id)
    now = now or timezone.now()
    key = {'user_id': user_id, 'item_type': item_type, 'item_id': item_id}

    with transaction.atomic():
        window, created = PlaybackWindow.objects.get_or_create(defaults={'opened_at': now}, **key)
        if not created:
            claimed = PlaybackWindow.objects.filter(
                pk=window.pk,
                opened_at__lt=now - PLAYBACK_WINDOW,
            ).update(opened_at=now)
            if not claimed:
                logger.debug('Playback deduplicated user=%s %s=%s', user_id, item_type, item_id)
                return False
        Playback.objects.create(played_at=now, **key)

    logger.debug('Playback recorded user=%s %s=%s', user_id, item_type, item_id)
    return True


def record_quietly(user, item_type, item_id) -> bool:
    """Record a playback from a read view without ever failing the request."""
    if user is None or not user.is_authenticated:
        return False
    try:
        return record(user.id, item_type, item_id)
    except Exception:
        logger.exception('Failed to record playback user=%s %s=%s', user.id, item_type, item_id)
        return False
