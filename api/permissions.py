from rest_framework import permissions


class IsArtist(permissions.BasePermission):
    """Only authenticated users holding the artist role."""
    message = 'Artist account required.'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_artist)


class IsAdmin(permissions.BasePermission):
    message = 'Admin account required.'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_admin)


class IsOwnerOrAdmin(permissions.BasePermission):
    """Object-level check: the owner of a song, album or playlist, or an admin."""
    message = 'Only the owner or an admin can change this item.'
    owner_fields = ('uploader_id', 'artist_id', 'user_id')

    def has_object_permission(self, request, view, obj):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        if user.is_admin:
            return True
        for field in self.owner_fields:
            if hasattr(obj, field):
                return getattr(obj, field) == user.id
        return False
