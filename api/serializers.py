from rest_framework import serializers
from django.contrib.auth import get_user_model
from django.db import transaction
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from .models import (
    Album, Artist, ArtistFollow, ArtistLike, Category, Genre, Playback, Song, SongLike,
    User, UserPlaylist,
)
from .taxonomy import assign_taxonomy, ensure_categories_exist, ensure_genres_exist


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = get_user_model()
        fields = ['id', 'email', 'name', 'roles', 'is_verified', 'date_joined']
        read_only_fields = ['id', 'email', 'roles', 'is_verified', 'date_joined']


class RegisterSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, min_length=8)
    roles = serializers.ChoiceField(
        choices=[User.ROLE_LISTENER, User.ROLE_ARTIST],
        default=User.ROLE_LISTENER,
    )

    class Meta:
        model = User
        fields = ['email', 'password', 'name', 'roles']

    def validate_email(self, value):
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError('A user with that email already exists')
        return value

    @transaction.atomic
    def create(self, validated_data):
        password = validated_data.pop('password')
        user = User.objects.create_user(password=password, **validated_data)
        if user.is_artist:
            Artist.ensure_for(user)
        return user


class CustomTokenObtainPairSerializer(TokenObtainPairSerializer):
    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        token['role'] = user.roles
        return token

    def validate(self, attrs):
        data = super().validate(attrs)
        data['user'] = UserSerializer(self.user).data
        return data


class LogoutSerializer(serializers.Serializer):
    refreshToken = serializers.CharField()


class TaxonomyField(serializers.Field):
    """Accepts a single raw name or a list of raw names; renders the slug list."""
    default_error_messages = {
        'invalid': 'Expected a string or a list of strings.',
    }

    def to_internal_value(self, data):
        if data is None or isinstance(data, str):
            return data
        if isinstance(data, (list, tuple)) and all(isinstance(v, str) for v in data):
            return list(data)
        self.fail('invalid')

    def to_representation(self, value):
        return list(value)


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ['id', 'name', 'slug', 'image', 'created_at']
        read_only_fields = ['id', 'slug', 'created_at']


class GenreSerializer(serializers.ModelSerializer):
    class Meta:
        model = Genre
        fields = ['id', 'name', 'slug', 'image', 'created_at']
        read_only_fields = ['id', 'slug', 'created_at']


class TaxonomyWriteMixin:
    """Provision category/genre input and write the ordered links after save."""

    def _pop_taxonomy(self, validated_data):
        taxonomy = {}
        if 'category' in validated_data:
            taxonomy['categories'] = ensure_categories_exist(validated_data.pop('category'))
        if 'genre' in validated_data:
            taxonomy['genres'] = ensure_genres_exist(validated_data.pop('genre'))
        return taxonomy

    def _write_taxonomy(self, instance, taxonomy):
        for relation, slugs in taxonomy.items():
            assign_taxonomy(instance, relation, slugs)
        if taxonomy and getattr(instance, '_prefetched_objects_cache', None):
            # links were rewritten underneath the prefetched ones
            instance._prefetched_objects_cache = {}


class SongSerializer(TaxonomyWriteMixin, serializers.ModelSerializer):
    """Serializer for Song model with full details"""
    category = TaxonomyField(required=False)
    genre = TaxonomyField(required=False)
    album_title = serializers.CharField(source='album.title', read_only=True, allow_null=True)
    duration_display = serializers.ReadOnlyField()
    likes_count = serializers.SerializerMethodField()
    is_liked = serializers.SerializerMethodField()

    class Meta:
        model = Song
        fields = [
            'id', 'track_code', 'title', 'artist_name', 'uploader', 'album', 'album_title',
            'track_number', 'audio_url', 'cover_image', 'duration_seconds', 'duration_display',
            'description', 'lyrics', 'hidden', 'category', 'genre', 'likes_count', 'is_liked',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'track_code', 'uploader', 'likes_count', 'is_liked', 'created_at', 'updated_at']

    def get_likes_count(self, obj):
        annotated = getattr(obj, 'likes_total', None)
        if annotated is not None:
            return annotated
        return obj.liked_by.count()

    def get_is_liked(self, obj):
        return obj.id in self._liked_song_ids()

    def _liked_song_ids(self):
        request = self.context.get('request')
        if not request or not request.user.is_authenticated:
            return frozenset()
        # looked up once and shared by every song rendered with this context
        if 'liked_song_ids' not in self.context:
            self.context['liked_song_ids'] = set(
                SongLike.objects.filter(user=request.user).values_list('song_id', flat=True)
            )
        return self.context['liked_song_ids']

    def validate_album(self, album):
        request = self.context.get('request')
        if album and request and not request.user.is_admin and album.artist_id != request.user.id:
            raise serializers.ValidationError('You can only add songs to your own albums')
        return album

    @transaction.atomic
    def create(self, validated_data):
        taxonomy = self._pop_taxonomy(validated_data)
        song = Song.objects.create(**validated_data)
        self._write_taxonomy(song, taxonomy)
        return song

    @transaction.atomic
    def update(self, instance, validated_data):
        taxonomy = self._pop_taxonomy(validated_data)
        instance = super().update(instance, validated_data)
        self._write_taxonomy(instance, taxonomy)
        return instance


class AlbumSerializer(TaxonomyWriteMixin, serializers.ModelSerializer):
    """Serializer for Album model; track_ids sets the ordered track list"""
    category = TaxonomyField(required=False)
    genre = TaxonomyField(required=False)
    track_ids = serializers.ListField(child=serializers.IntegerField(min_value=1), write_only=True, required=False)
    tracks = serializers.SerializerMethodField()
    likes_count = serializers.SerializerMethodField()

    class Meta:
        model = Album
        fields = [
            'id', 'album_code', 'title', 'artist', 'cover_image', 'release_date', 'description',
            'hidden', 'category', 'genre', 'track_ids', 'tracks', 'likes_count', 'created_at',
        ]
        read_only_fields = ['id', 'album_code', 'artist', 'tracks', 'likes_count', 'created_at']

    def get_tracks(self, obj):
        songs = sorted(obj.songs.all(), key=lambda s: (s.track_number is None, s.track_number or 0, s.id))
        return [{'id': s.id, 'track_code': s.track_code, 'title': s.title, 'track_number': s.track_number} for s in songs]

    def get_likes_count(self, obj):
        annotated = getattr(obj, 'likes_total', None)
        if annotated is not None:
            return annotated
        return obj.liked_by.count()

    def _write_tracks(self, album, track_ids):
        owned = Song.objects.filter(id__in=track_ids, uploader_id=album.artist_id).in_bulk()
        Song.objects.filter(album=album).exclude(id__in=owned.keys()).update(album=None, track_number=None)
        number = 1
        for song_id in dict.fromkeys(track_ids):
            song = owned.get(song_id)
            if song is None:
                continue
            song.album = album
            song.track_number = number
            song.save(update_fields=['album', 'track_number', 'updated_at'])
            number += 1
        if getattr(album, '_prefetched_objects_cache', None):
            album._prefetched_objects_cache.pop('songs', None)

    @transaction.atomic
    def create(self, validated_data):
        track_ids = validated_data.pop('track_ids', None)
        taxonomy = self._pop_taxonomy(validated_data)
        album = Album.objects.create(**validated_data)
        self._write_taxonomy(album, taxonomy)
        if track_ids is not None:
            self._write_tracks(album, track_ids)
        return album

    @transaction.atomic
    def update(self, instance, validated_data):
        track_ids = validated_data.pop('track_ids', None)
        taxonomy = self._pop_taxonomy(validated_data)
        instance = super().update(instance, validated_data)
        self._write_taxonomy(instance, taxonomy)
        if track_ids is not None:
            self._write_tracks(instance, track_ids)
        return instance


class ArtistSerializer(serializers.ModelSerializer):
    """Public artist profile with follower, like and catalogue totals"""
    followers_count = serializers.SerializerMethodField()
    likes_count = serializers.SerializerMethodField()
    songs_count = serializers.SerializerMethodField()
    albums_count = serializers.SerializerMethodField()
    is_following = serializers.SerializerMethodField()
    is_liked = serializers.SerializerMethodField()

    class Meta:
        model = Artist
        fields = [
            'id', 'user', 'name', 'bio', 'city', 'profile_image', 'banner_image', 'verified',
            'followers_count', 'likes_count', 'songs_count', 'albums_count',
            'is_following', 'is_liked', 'created_at',
        ]
        read_only_fields = ['id', 'user', 'name', 'bio', 'city', 'profile_image', 'banner_image', 'verified', 'created_at']

    def get_followers_count(self, obj):
        annotated = getattr(obj, 'followers_total', None)
        return annotated if annotated is not None else obj.followers.count()

    def get_likes_count(self, obj):
        annotated = getattr(obj, 'likes_total', None)
        return annotated if annotated is not None else obj.liked_by.count()

    def get_songs_count(self, obj):
        annotated = getattr(obj, 'songs_total', None)
        return annotated if annotated is not None else obj.user.uploaded_songs.filter(hidden=False).count()

    def get_albums_count(self, obj):
        annotated = getattr(obj, 'albums_total', None)
        return annotated if annotated is not None else obj.user.albums.filter(hidden=False).count()

    def get_is_following(self, obj):
        return obj.id in self._artist_ids('followed_artist_ids', ArtistFollow)

    def get_is_liked(self, obj):
        return obj.id in self._artist_ids('liked_artist_ids', ArtistLike)

    def _artist_ids(self, key, model):
        request = self.context.get('request')
        if not request or not request.user.is_authenticated:
            return frozenset()
        if key not in self.context:
            self.context[key] = set(model.objects.filter(user=request.user).values_list('artist_id', flat=True))
        return self.context[key]


class ArtistProfileSerializer(serializers.ModelSerializer):
    """The signed-in artist's own editable profile"""

    class Meta:
        model = Artist
        fields = ['id', 'user', 'name', 'bio', 'city', 'profile_image', 'banner_image', 'verified', 'created_at', 'updated_at']
        read_only_fields = ['id', 'user', 'verified', 'created_at', 'updated_at']


class UserPlaylistSerializer(serializers.ModelSerializer):
    songs = serializers.PrimaryKeyRelatedField(many=True, read_only=True)

    class Meta:
        model = UserPlaylist
        fields = ['id', 'user', 'title', 'public', 'songs', 'created_at', 'updated_at']
        read_only_fields = ['id', 'user', 'songs', 'created_at', 'updated_at']


class PlaylistSongSerializer(serializers.Serializer):
    song_id = serializers.IntegerField(min_value=1)


class PlaybackInputSerializer(serializers.Serializer):
    """Body of a playback record request; type and id are checked by the recorder."""
    item_type = serializers.CharField()
    item_id = serializers.CharField()


class DiscoverQuerySerializer(serializers.Serializer):
    type = serializers.CharField(required=False, allow_blank=True)
    limit = serializers.IntegerField(required=False, min_value=1)


class DiscoverItemSerializer(serializers.Serializer):
    """Renders a discover.DiscoverItem with the serializer matching its type."""
    item_serializers = {
        Playback.TYPE_SONG: SongSerializer,
        Playback.TYPE_ALBUM: AlbumSerializer,
        Playback.TYPE_CATEGORY: CategorySerializer,
    }

    def to_representation(self, instance):
        serializer_class = self.item_serializers[instance.type]
        data = {
            'type': instance.type,
            'item': serializer_class(instance.item, context=self.context).data,
        }
        if instance.played_at is not None:
            data['played_at'] = serializers.DateTimeField().to_representation(instance.played_at)
        if instance.count is not None:
            data['count'] = instance.count
        return data
