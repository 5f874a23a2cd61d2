import re

_WHITESPACE_RE = re.compile(r'\s+')
_DISALLOWED_RE = re.compile(r'[^a-z0-9-]')
_HYPHENS_RE = re.compile(r'-+')
_TOKEN_SPLIT_RE = re.compile(r'[-\s_]+')


def slugify(value) -> str:
    """Turn free text into a taxonomy slug.

    The steps run in a fixed order: trim, lowercase, '&' -> 'and',
    whitespace runs -> '-', '_' -> '-', drop anything outside [a-z0-9-],
    collapse repeated hyphens. Leading or trailing hyphens are kept.
    """
    if value is None:
        return ''
    s = str(value).strip().lower()
    s = s.replace('&', 'and')
    s = _WHITESPACE_RE.sub('-', s)
    s = s.replace('_', '-')
    s = _DISALLOWED_RE.sub('', s)
    return _HYPHENS_RE.sub('-', s)


def title_case(value) -> str:
    """Display name for a slug or raw name: 'hip-hop' -> 'Hip Hop'."""
    if value is None:
        return ''
    tokens = _TOKEN_SPLIT_RE.split(str(value).strip().lower())
    return ' '.join(t[:1].upper() + t[1:] for t in tokens)


def normalize_many(value) -> list:
    """Slugify a scalar or a list of raw names into an ordered, de-duplicated list."""
    if not value:
        return []
    if isinstance(value, (list, tuple)):
        items = value
    else:
        items = [value]
    slugs = []
    for item in items:
        slug = slugify(item)
        if slug and slug not in slugs:
            slugs.append(slug)
    return slugs


def parse_limit(value, default=7, maximum=50) -> int:
    """Coerce a query-string limit into 1..maximum, falling back to default."""
    try:
        limit = int(value)
    except (TypeError, ValueError):
        return default
    return max(1, min(limit, maximum))
