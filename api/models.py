from django.db import models
from django.contrib.auth.models import (
    AbstractBaseUser,
    BaseUserManager,
    PermissionsMixin,
)
from django.utils import timezone


class UserManager(BaseUserManager):
    def create_user(self, email, password=None, roles='listener', **extra_fields):
        if not email:
            raise ValueError('The email must be set')
        email = self.normalize_email(email)
        user = self.model(email=email, roles=roles, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        return self.create_user(email, password=password, roles='admin', **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    ROLE_LISTENER = 'listener'
    ROLE_ARTIST = 'artist'
    ROLE_ADMIN = 'admin'

    ROLE_CHOICES = [
        (ROLE_LISTENER, 'Listener'),
        (ROLE_ARTIST, 'Artist'),
        (ROLE_ADMIN, 'Admin'),
    ]

    email = models.EmailField(unique=True)
    name = models.CharField(max_length=150, blank=True)
    roles = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_LISTENER)
    is_verified = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)
    date_joined = models.DateTimeField(auto_now_add=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    def __str__(self):
        return self.email

    @property
    def is_artist(self):
        return self.roles == self.ROLE_ARTIST

    @property
    def is_admin(self):
        return self.roles == self.ROLE_ADMIN or self.is_staff


class Taxonomy(models.Model):
    """Shared shape of the category and genre collections."""
    name = models.CharField(max_length=100)
    slug = models.SlugField(max_length=100, unique=True)
    image = models.URLField(max_length=500, blank=True, help_text="Optional cover image URL")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        abstract = True
        ordering = ['name']

    def __str__(self):
        return self.name


class Category(Taxonomy):
    """Editorial category (mood, occasion, scene...)"""

    class Meta(Taxonomy.Meta):
        verbose_name_plural = "Categories"


class Genre(Taxonomy):
    """Music genre classification"""


class Sequence(models.Model):
    """Named counter used to mint human-readable codes"""
    name = models.CharField(max_length=50, unique=True)
    value = models.BigIntegerField(default=0)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.name}={self.value}"


class Album(models.Model):
    """Album model for grouping an artist's songs"""
    album_code = models.CharField(max_length=20, unique=True, editable=False)
    title = models.CharField(max_length=400)
    artist = models.ForeignKey(User, on_delete=models.CASCADE, related_name='albums')
    cover_image = models.URLField(max_length=500, blank=True)
    release_date = models.DateField(null=True, blank=True)
    description = models.TextField(blank=True)
    hidden = models.BooleanField(default=False)

    categories = models.ManyToManyField(Category, through='AlbumCategory', blank=True, related_name='albums')
    genres = models.ManyToManyField(Genre, through='AlbumGenre', blank=True, related_name='albums')
    liked_by = models.ManyToManyField(User, blank=True, related_name='liked_albums', through='AlbumLike')

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.title} ({self.album_code})"

    def save(self, *args, **kwargs):
        if not self.album_code:
            from .sequences import next_code
            self.album_code = next_code('album', 'ALB')
        super().save(*args, **kwargs)

    @property
    def category(self):
        return [link.category_id for link in self.category_links.all()]

    @property
    def genre(self):
        return [link.genre_id for link in self.genre_links.all()]


class Song(models.Model):
    """A published track with its ordered taxonomy"""
    track_code = models.CharField(max_length=20, unique=True, editable=False)
    title = models.CharField(max_length=400)
    artist_name = models.CharField(max_length=255, blank=True)
    uploader = models.ForeignKey(User, on_delete=models.CASCADE, related_name='uploaded_songs')
    album = models.ForeignKey(Album, on_delete=models.SET_NULL, null=True, blank=True, related_name='songs')
    track_number = models.PositiveSmallIntegerField(null=True, blank=True)

    # Files are uploaded by the client; only the CDN URLs are stored
    audio_url = models.URLField(max_length=500, blank=True)
    cover_image = models.URLField(max_length=500, blank=True)
    duration_seconds = models.PositiveIntegerField(null=True, blank=True)

    description = models.TextField(blank=True)
    lyrics = models.TextField(blank=True)
    hidden = models.BooleanField(default=False)

    categories = models.ManyToManyField(Category, through='SongCategory', blank=True, related_name='songs')
    genres = models.ManyToManyField(Genre, through='SongGenre', blank=True, related_name='songs')
    liked_by = models.ManyToManyField(User, blank=True, related_name='liked_songs', through='SongLike')

    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=["hidden"], name='api_song_hidden_idx'),
        ]
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.title} ({self.track_code})"

    def save(self, *args, **kwargs):
        if not self.track_code:
            from .sequences import next_code
            self.track_code = next_code('song', 'TRK')
        super().save(*args, **kwargs)

    @property
    def category(self):
        return [link.category_id for link in self.category_links.all()]

    @property
    def genre(self):
        return [link.genre_id for link in self.genre_links.all()]

    @property
    def duration_display(self) -> str:
        """Return duration in H:MM:SS or M:SS format if duration_seconds set."""
        if not self.duration_seconds:
            return "0:00"
        s = int(self.duration_seconds)
        h, rem = divmod(s, 3600)
        m, sec = divmod(rem, 60)
        if h:
            return f"{h}:{m:02d}:{sec:02d}"
        return f"{m}:{sec:02d}"


class TaxonomyLink(models.Model):
    """Ordered membership of a song or album in a taxonomy entry.

    The foreign key points at the taxonomy slug, so a song can only carry
    slugs that exist, and the unique pair keeps the list free of duplicates.
    """
    position = models.PositiveSmallIntegerField(default=0)

    class Meta:
        abstract = True
        ordering = ['position']


class SongCategory(TaxonomyLink):
    song = models.ForeignKey(Song, on_delete=models.CASCADE, related_name='category_links')
    category = models.ForeignKey(Category, on_delete=models.CASCADE, to_field='slug', related_name='song_links')

    class Meta(TaxonomyLink.Meta):
        unique_together = ('song', 'category')


class SongGenre(TaxonomyLink):
    song = models.ForeignKey(Song, on_delete=models.CASCADE, related_name='genre_links')
    genre = models.ForeignKey(Genre, on_delete=models.CASCADE, to_field='slug', related_name='song_links')

    class Meta(TaxonomyLink.Meta):
        unique_together = ('song', 'genre')


class AlbumCategory(TaxonomyLink):
    album = models.ForeignKey(Album, on_delete=models.CASCADE, related_name='category_links')
    category = models.ForeignKey(Category, on_delete=models.CASCADE, to_field='slug', related_name='album_links')

    class Meta(TaxonomyLink.Meta):
        unique_together = ('album', 'category')


class AlbumGenre(TaxonomyLink):
    album = models.ForeignKey(Album, on_delete=models.CASCADE, related_name='genre_links')
    genre = models.ForeignKey(Genre, on_delete=models.CASCADE, to_field='slug', related_name='album_links')

    class Meta(TaxonomyLink.Meta):
        unique_together = ('album', 'genre')


class SongLike(models.Model):
    user = models.ForeignKey(User, on_delete=models.CASCADE)
    song = models.ForeignKey(Song, on_delete=models.CASCADE)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ('user', 'song')
        ordering = ['-created_at']


class AlbumLike(models.Model):
    user = models.ForeignKey(User, on_delete=models.CASCADE)
    album = models.ForeignKey(Album, on_delete=models.CASCADE)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ('user', 'album')
        ordering = ['-created_at']


class Artist(models.Model):
    """Public profile of an artist account"""
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='artist_profile')
    name = models.CharField(max_length=255, help_text="Artistic/stage name")
    bio = models.TextField(blank=True)
    city = models.CharField(max_length=200, blank=True)
    profile_image = models.URLField(max_length=500, blank=True)
    banner_image = models.URLField(max_length=500, blank=True)
    verified = models.BooleanField(default=False)

    followers = models.ManyToManyField(User, blank=True, related_name='followed_artists', through='ArtistFollow')
    liked_by = models.ManyToManyField(User, blank=True, related_name='liked_artists', through='ArtistLike')

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name', 'id']

    def __str__(self):
        return self.name

    @classmethod
    def ensure_for(cls, user):
        """Return the user's profile, creating it from the account name if missing."""
        profile, _ = cls.objects.get_or_create(
            user=user,
            defaults={'name': user.name or user.email.split('@')[0]},
        )
        return profile


class ArtistFollow(models.Model):
    user = models.ForeignKey(User, on_delete=models.CASCADE)
    artist = models.ForeignKey(Artist, on_delete=models.CASCADE)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ('user', 'artist')
        ordering = ['-created_at']


class ArtistLike(models.Model):
    user = models.ForeignKey(User, on_delete=models.CASCADE)
    artist = models.ForeignKey(Artist, on_delete=models.CASCADE)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ('user', 'artist')
        ordering = ['-created_at']


class UserPlaylist(models.Model):
    """User-created playlist model"""
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='user_playlists')
    title = models.CharField(max_length=255)
    public = models.BooleanField(default=False)
    songs = models.ManyToManyField(Song, blank=True, related_name='user_playlists')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.title} by {self.user.email}"


class Playback(models.Model):
    """Append-only log of a user engaging with a song, album or category"""
    TYPE_SONG = 'song'
    TYPE_ALBUM = 'album'
    TYPE_CATEGORY = 'category'

    TYPE_CHOICES = [
        (TYPE_SONG, 'Song'),
        (TYPE_ALBUM, 'Album'),
        (TYPE_CATEGORY, 'Category'),
    ]

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='playbacks')
    item_type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    item_id = models.PositiveBigIntegerField()
    played_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        ordering = ['-played_at']
        indexes = [
            models.Index(fields=['user', '-played_at'], name='api_playback_user_recent_idx'),
            models.Index(fields=['item_type', 'item_id'], name='api_playback_item_idx'),
        ]

    def __str__(self):
        return f"Playback(user={self.user_id}, {self.item_type}={self.item_id}, {self.played_at})"


class PlaybackWindow(models.Model):
    """Anchor of the deduplication window for one (user, item) pair.

    opened_at is the timestamp of the last Playback row inserted for the key.
    """
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='playback_windows')
    item_type = models.CharField(max_length=20, choices=Playback.TYPE_CHOICES)
    item_id = models.PositiveBigIntegerField()
    opened_at = models.DateTimeField()

    class Meta:
        unique_together = ('user', 'item_type', 'item_id')

    def __str__(self):
        return f"PlaybackWindow(user={self.user_id}, {self.item_type}={self.item_id}, opened={self.opened_at})"
