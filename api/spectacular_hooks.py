API_PREFIX = 'api/'

# mapping of path prefix -> tag name (order matters; first match wins)
TAG_MAPPING = [
    (('auth/', 'users/'), 'Authentication'),
    (('discover/', 'playback/'), 'Discover'),
    (('songs/',), 'Songs'),
    (('albums/',), 'Albums'),
    (('categories/', 'genres/'), 'Classification'),
    (('user-playlists/',), 'Library'),
    (('artist/', 'artists/'), 'Artist'),
    (('admin/',), 'Admin'),
    (('health/',), 'Utility'),
]


def tag_for_path(path):
    normalized = path.lstrip('/')
    if normalized.startswith(API_PREFIX):
        normalized = normalized[len(API_PREFIX):]
    for prefixes, tag in TAG_MAPPING:
        if normalized.startswith(prefixes):
            return tag
    return 'Other'


def tag_operations(result, generator, request=None, public=False):
    """Post-processing hook for drf-spectacular to add tags to operations.

    This assigns human-friendly group names based on URL path prefixes
    matching the section comments in `api/urls.py`.
    """
    if not result or 'paths' not in result:
        return result

    for path, path_item in result.get('paths', {}).items():
        assigned = tag_for_path(path)

        # apply tag to all operations under this path
        for method_name, operation in list(path_item.items()):
            if method_name.startswith('x-'):
                continue
            if isinstance(operation, dict):
                # respect existing tags if present (prepend our tag)
                existing = operation.get('tags') or []
                if assigned not in existing:
                    operation['tags'] = [assigned] + existing

    return result
