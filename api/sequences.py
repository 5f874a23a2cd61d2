import logging

from django.db import transaction
from django.db.models import F

from .models import Sequence

logger = logging.getLogger(__name__)


def next_sequence(name: str) -> int:
    """Atomically increment the named counter and return the new value.

    A missing counter is created at 0 first; a concurrent creator loses on the
    unique name and get_or_create hands back the winner's row. The increment is
    a single UPDATE, so the row stays locked until this transaction commits and
    the value read back is ours alone.
    """
    with transaction.atomic():
        _, created = Sequence.objects.get_or_create(name=name)
        if created:
            logger.info('Created sequence counter %s', name)
        Sequence.objects.filter(name=name).update(value=F('value') + 1)
        return Sequence.objects.filter(name=name).values_list('value', flat=True).get()


def next_code(name: str, prefix: str, width: int = 6) -> str:
    """Mint a human-readable code such as TRK000042."""
    return f"{prefix}{next_sequence(name):0{width}d}"
