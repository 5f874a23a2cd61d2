import logging

from django.db import DatabaseError, connection, transaction
from django.db.models import Count, Q
from django.shortcuts import get_object_or_404
from rest_framework import generics, status
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from . import discover, playback
from .models import (
    Album, AlbumLike, Artist, ArtistFollow, ArtistLike, Category, Genre, Playback, Song,
    SongCategory, SongGenre, SongLike, User, UserPlaylist,
)
from .permissions import IsAdmin, IsArtist, IsOwnerOrAdmin
from .serializers import (
    AlbumSerializer,
    ArtistProfileSerializer,
    ArtistSerializer,
    CategorySerializer,
    DiscoverItemSerializer,
    DiscoverQuerySerializer,
    GenreSerializer,
    PlaybackInputSerializer,
    PlaylistSongSerializer,
    SongSerializer,
    UserPlaylistSerializer,
)
from .taxonomy import create_taxon

logger = logging.getLogger(__name__)


class StandardResultsSetPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


def visible_songs(user):
    """Songs the requesting user may see: all for admins, own hidden ones for uploaders."""
    queryset = (
        Song.objects.select_related('album')
        .prefetch_related('category_links', 'genre_links')
        .annotate(likes_total=Count('liked_by', distinct=True))
    )
    if user.is_authenticated and user.is_admin:
        return queryset
    if user.is_authenticated:
        return queryset.filter(Q(hidden=False) | Q(uploader=user))
    return queryset.filter(hidden=False)


def visible_albums(user):
    queryset = (
        Album.objects.prefetch_related('category_links', 'genre_links', 'songs')
        .annotate(likes_total=Count('liked_by', distinct=True))
    )
    if user.is_authenticated and user.is_admin:
        return queryset
    if user.is_authenticated:
        return queryset.filter(Q(hidden=False) | Q(artist=user))
    return queryset.filter(hidden=False)


# ---------------------------------------------------------------------------
# Core: playback and discover
# ---------------------------------------------------------------------------

class PlaybackView(APIView):
    """Record that the signed-in user played a song, album or category."""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = PlaybackInputSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        recorded = playback.record(
            request.user.id,
            serializer.validated_data['item_type'],
            serializer.validated_data['item_id'],
        )
        return Response({'recorded': recorded}, status=status.HTTP_201_CREATED)


class DiscoverView(APIView):
    """Ranked discover sections.

    recently-interacted requires a signed-in user; the other sections are public.
    Query params: type (song, album, category; 'audio' is accepted) and limit.
    """
    permission_classes = [AllowAny]

    def get(self, request, section):
        query = DiscoverQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return Response(query.errors, status=status.HTTP_400_BAD_REQUEST)
        user_id = request.user.id if request.user.is_authenticated else None
        items = discover.get_section(
            section,
            user_id=user_id,
            item_type=query.validated_data.get('type') or None,
            limit=query.validated_data.get('limit'),
        )
        serializer = DiscoverItemSerializer(items, many=True, context={'request': request})
        return Response({'section': section, 'items': serializer.data})


# ---------------------------------------------------------------------------
# Songs
# ---------------------------------------------------------------------------

class SongListView(generics.ListCreateAPIView):
    """List visible songs, create a song, or bulk delete own songs"""
    serializer_class = SongSerializer
    pagination_class = StandardResultsSetPagination

    def get_permissions(self):
        if self.request.method == 'GET':
            return [AllowAny()]
        if self.request.method == 'DELETE':
            return [IsAuthenticated()]
        return [IsArtist()]

    def get_queryset(self):
        return visible_songs(self.request.user)

    def perform_create(self, serializer):
        serializer.save(uploader=self.request.user)

    def delete(self, request):
        ids = request.data.get('ids')
        if not isinstance(ids, list) or not ids:
            return Response({'error': 'ids must be a non-empty list'}, status=status.HTTP_400_BAD_REQUEST)
        songs = Song.objects.filter(id__in=ids)
        if not request.user.is_admin:
            songs = songs.filter(uploader=request.user)
        deleted = songs.count()
        songs.delete()
        logger.info('User %s bulk deleted %d songs', request.user.id, deleted)
        return Response({'deleted': deleted})


class SongDetailView(APIView):
    """Retrieve, update and delete a song; a signed-in GET counts as a playback"""

    def get_permissions(self):
        if self.request.method == 'GET':
            return [AllowAny()]
        return [IsAuthenticated(), IsOwnerOrAdmin()]

    def get_object(self, pk):
        song = get_object_or_404(visible_songs(self.request.user), pk=pk)
        self.check_object_permissions(self.request, song)
        return song

    def get(self, request, pk):
        song = self.get_object(pk)
        playback.record_quietly(request.user, Playback.TYPE_SONG, song.id)
        serializer = SongSerializer(song, context={'request': request})
        return Response(serializer.data)

    def put(self, request, pk):
        song = self.get_object(pk)
        serializer = SongSerializer(song, data=request.data, context={'request': request})
        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    def patch(self, request, pk):
        song = self.get_object(pk)
        serializer = SongSerializer(song, data=request.data, partial=True, context={'request': request})
        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    def delete(self, request, pk):
        song = self.get_object(pk)
        song.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


class SongByTrackCodeView(APIView):
    permission_classes = [AllowAny]

    def get(self, request, track_code):
        song = get_object_or_404(visible_songs(request.user), track_code=track_code.upper())
        serializer = SongSerializer(song, context={'request': request})
        return Response(serializer.data)


class SongLyricsView(APIView):
    """Read or replace the lyrics of a song"""

    def get_permissions(self):
        if self.request.method == 'GET':
            return [AllowAny()]
        return [IsAuthenticated(), IsOwnerOrAdmin()]

    def get(self, request, pk):
        song = get_object_or_404(visible_songs(request.user), pk=pk)
        return Response({'id': song.id, 'title': song.title, 'lyrics': song.lyrics})

    def put(self, request, pk):
        song = get_object_or_404(Song, pk=pk)
        self.check_object_permissions(request, song)
        lyrics = request.data.get('lyrics')
        if not isinstance(lyrics, str):
            return Response({'error': 'lyrics must be a string'}, status=status.HTTP_400_BAD_REQUEST)
        song.lyrics = lyrics
        song.save(update_fields=['lyrics', 'updated_at'])
        return Response({'id': song.id, 'title': song.title, 'lyrics': song.lyrics})


class SongLikeView(APIView):
    """Toggle like status for a song"""
    permission_classes = [IsAuthenticated]

    def post(self, request, pk=None):
        song = get_object_or_404(visible_songs(request.user), pk=pk)
        like, created = SongLike.objects.get_or_create(user=request.user, song=song)
        if not created:
            like.delete()

        return Response({
            'liked': created,
            'likes_count': SongLike.objects.filter(song=song).count()
        })


class SongVisibilityView(APIView):
    """Hide or unhide a song; the flag is fixed per route"""
    permission_classes = [IsAuthenticated, IsOwnerOrAdmin]
    hidden = True

    def post(self, request, pk):
        song = get_object_or_404(Song, pk=pk)
        self.check_object_permissions(request, song)
        song.hidden = self.hidden
        song.save(update_fields=['hidden', 'updated_at'])
        return Response({'id': song.id, 'hidden': song.hidden})


class SongSearchView(generics.ListAPIView):
    """Search visible songs by title, artist name or taxonomy slug"""
    serializer_class = SongSerializer
    permission_classes = [AllowAny]
    pagination_class = StandardResultsSetPagination

    def get_queryset(self):
        q = (self.request.query_params.get('q') or '').strip()
        queryset = visible_songs(self.request.user)
        if not q:
            return queryset.none()
        return queryset.filter(
            Q(title__icontains=q)
            | Q(artist_name__icontains=q)
            | Q(category_links__category__name__icontains=q)
            | Q(genre_links__genre__name__icontains=q)
        ).distinct()


class SongsByCategoryView(generics.ListAPIView):
    serializer_class = SongSerializer
    permission_classes = [AllowAny]
    pagination_class = StandardResultsSetPagination

    def get_queryset(self):
        category = get_object_or_404(Category, slug=self.kwargs['slug'])
        song_ids = SongCategory.objects.filter(category=category).values('song_id')
        return visible_songs(self.request.user).filter(id__in=song_ids)


class LikedSongsView(generics.ListAPIView):
    """Songs liked by the current user, most recently liked first"""
    serializer_class = SongSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = StandardResultsSetPagination

    def get_queryset(self):
        return (
            visible_songs(self.request.user)
            .filter(songlike__user=self.request.user)
            .order_by('-songlike__created_at')
        )


class MySongsView(generics.ListAPIView):
    serializer_class = SongSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = StandardResultsSetPagination

    def get_queryset(self):
        return (
            Song.objects.filter(uploader=self.request.user)
            .select_related('album')
            .prefetch_related('category_links', 'genre_links')
            .annotate(likes_total=Count('liked_by', distinct=True))
        )


# ---------------------------------------------------------------------------
# Albums
# ---------------------------------------------------------------------------

class AlbumListView(generics.ListCreateAPIView):
    serializer_class = AlbumSerializer
    pagination_class = StandardResultsSetPagination

    def get_permissions(self):
        if self.request.method == 'GET':
            return [AllowAny()]
        return [IsArtist()]

    def get_queryset(self):
        return visible_albums(self.request.user)

    def perform_create(self, serializer):
        serializer.save(artist=self.request.user)


class AlbumDetailView(APIView):
    """Retrieve, update and delete an album; a signed-in GET counts as a playback"""

    def get_permissions(self):
        if self.request.method == 'GET':
            return [AllowAny()]
        return [IsAuthenticated(), IsOwnerOrAdmin()]

    def get_object(self, pk):
        album = get_object_or_404(visible_albums(self.request.user), pk=pk)
        self.check_object_permissions(self.request, album)
        return album

    def get(self, request, pk):
        album = self.get_object(pk)
        playback.record_quietly(request.user, Playback.TYPE_ALBUM, album.id)
        serializer = AlbumSerializer(album, context={'request': request})
        return Response(serializer.data)

    def put(self, request, pk):
        album = self.get_object(pk)
        serializer = AlbumSerializer(album, data=request.data, context={'request': request})
        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    def patch(self, request, pk):
        album = self.get_object(pk)
        serializer = AlbumSerializer(album, data=request.data, partial=True, context={'request': request})
        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    def delete(self, request, pk):
        album = self.get_object(pk)
        album.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


class AlbumLikeView(APIView):
    """Toggle like status for an album"""
    permission_classes = [IsAuthenticated]

    def post(self, request, pk=None):
        album = get_object_or_404(visible_albums(request.user), pk=pk)
        like, created = AlbumLike.objects.get_or_create(user=request.user, album=album)
        if not created:
            like.delete()

        return Response({
            'liked': created,
            'likes_count': AlbumLike.objects.filter(album=album).count()
        })


class AlbumVisibilityView(APIView):
    """Hide or unhide an album together with its tracks"""
    permission_classes = [IsAuthenticated, IsOwnerOrAdmin]
    hidden = True

    def post(self, request, pk):
        album = get_object_or_404(Album, pk=pk)
        self.check_object_permissions(request, album)
        with transaction.atomic():
            album.hidden = self.hidden
            album.save(update_fields=['hidden', 'updated_at'])
            tracks = album.songs.update(hidden=self.hidden)
        return Response({'id': album.id, 'hidden': album.hidden, 'tracks_updated': tracks})


class MyAlbumsView(generics.ListAPIView):
    serializer_class = AlbumSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = StandardResultsSetPagination

    def get_queryset(self):
        return (
            Album.objects.filter(artist=self.request.user)
            .prefetch_related('category_links', 'genre_links', 'songs')
            .annotate(likes_total=Count('liked_by', distinct=True))
        )


# ---------------------------------------------------------------------------
# Categories and genres
# ---------------------------------------------------------------------------

class TaxonomyListView(APIView):
    """List entries of one taxonomy, or create one (admin)"""
    model = None
    serializer_class = None

    def get_permissions(self):
        if self.request.method == 'GET':
            return [AllowAny()]
        return [IsAdmin()]

    def get(self, request):
        serializer = self.serializer_class(self.model.objects.all(), many=True, context={'request': request})
        return Response(serializer.data)

    def post(self, request):
        serializer = self.serializer_class(data=request.data, context={'request': request})
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        taxon = create_taxon(
            self.model,
            serializer.validated_data.get('name'),
            image=serializer.validated_data.get('image', ''),
        )
        return Response(self.serializer_class(taxon).data, status=status.HTTP_201_CREATED)


class TaxonomyDetailView(APIView):
    """Retrieve, rename or delete one taxonomy entry by slug; the slug never changes"""
    model = None
    serializer_class = None
    record_type = None

    def get_permissions(self):
        if self.request.method == 'GET':
            return [AllowAny()]
        return [IsAdmin()]

    def get(self, request, slug):
        taxon = get_object_or_404(self.model, slug=slug)
        if self.record_type:
            playback.record_quietly(request.user, self.record_type, taxon.id)
        serializer = self.serializer_class(taxon, context={'request': request})
        return Response(serializer.data)

    def patch(self, request, slug):
        taxon = get_object_or_404(self.model, slug=slug)
        serializer = self.serializer_class(taxon, data=request.data, partial=True, context={'request': request})
        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    def delete(self, request, slug):
        taxon = get_object_or_404(self.model, slug=slug)
        taxon.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


class CategoryListView(TaxonomyListView):
    model = Category
    serializer_class = CategorySerializer


class CategoryDetailView(TaxonomyDetailView):
    model = Category
    serializer_class = CategorySerializer
    record_type = Playback.TYPE_CATEGORY


class GenreListView(TaxonomyListView):
    model = Genre
    serializer_class = GenreSerializer


class GenreDetailView(TaxonomyDetailView):
    model = Genre
    serializer_class = GenreSerializer


# ---------------------------------------------------------------------------
# User playlists
# ---------------------------------------------------------------------------

class UserPlaylistListCreateView(APIView):
    """List all user playlists or create a new one"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        playlists = UserPlaylist.objects.filter(user=request.user).prefetch_related('songs')
        serializer = UserPlaylistSerializer(playlists, many=True, context={'request': request})
        return Response(serializer.data)

    def post(self, request):
        serializer = UserPlaylistSerializer(data=request.data, context={'request': request})
        if serializer.is_valid():
            serializer.save(user=request.user)
            return Response(serializer.data, status=status.HTTP_201_CREATED)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


class UserPlaylistDetailView(APIView):
    """Retrieve, update, or delete a specific user playlist"""
    permission_classes = [IsAuthenticated]

    def get_object(self, pk, user):
        try:
            return UserPlaylist.objects.get(pk=pk, user=user)
        except UserPlaylist.DoesNotExist:
            return None

    def get(self, request, pk):
        playlist = self.get_object(pk, request.user)
        if not playlist:
            return Response({'error': 'Playlist not found'}, status=status.HTTP_404_NOT_FOUND)
        serializer = UserPlaylistSerializer(playlist, context={'request': request})
        return Response(serializer.data)

    def put(self, request, pk):
        playlist = self.get_object(pk, request.user)
        if not playlist:
            return Response({'error': 'Playlist not found'}, status=status.HTTP_404_NOT_FOUND)
        serializer = UserPlaylistSerializer(playlist, data=request.data, partial=True, context={'request': request})
        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    def delete(self, request, pk):
        playlist = self.get_object(pk, request.user)
        if not playlist:
            return Response({'error': 'Playlist not found'}, status=status.HTTP_404_NOT_FOUND)
        playlist.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


class UserPlaylistAddSongView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, pk):
        try:
            playlist = UserPlaylist.objects.get(pk=pk, user=request.user)
        except UserPlaylist.DoesNotExist:
            return Response({'error': 'Playlist not found'}, status=status.HTTP_404_NOT_FOUND)

        serializer = PlaylistSongSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            song = visible_songs(request.user).get(id=serializer.validated_data['song_id'])
        except Song.DoesNotExist:
            return Response({'error': 'Song not found'}, status=status.HTTP_404_NOT_FOUND)
        playlist.songs.add(song)
        return Response(UserPlaylistSerializer(playlist, context={'request': request}).data)


class UserPlaylistRemoveSongView(APIView):
    permission_classes = [IsAuthenticated]

    def delete(self, request, pk, song_id):
        try:
            playlist = UserPlaylist.objects.get(pk=pk, user=request.user)
        except UserPlaylist.DoesNotExist:
            return Response({'error': 'Playlist not found'}, status=status.HTTP_404_NOT_FOUND)

        if not playlist.songs.filter(id=song_id).exists():
            return Response({'error': 'Song not in playlist'}, status=status.HTTP_404_NOT_FOUND)
        playlist.songs.remove(song_id)
        return Response(UserPlaylistSerializer(playlist, context={'request': request}).data)


# ---------------------------------------------------------------------------
# Artists
# ---------------------------------------------------------------------------

def artist_profiles():
    """Active artist profiles with follower, like and visible catalogue totals."""
    return (
        Artist.objects.filter(user__is_active=True, user__roles=User.ROLE_ARTIST)
        .annotate(
            followers_total=Count('followers', distinct=True),
            likes_total=Count('liked_by', distinct=True),
            songs_total=Count('user__uploaded_songs', filter=Q(user__uploaded_songs__hidden=False), distinct=True),
            albums_total=Count('user__albums', filter=Q(user__albums__hidden=False), distinct=True),
        )
    )


class ArtistListView(generics.ListAPIView):
    """List artists, optionally filtered by name with ?q="""
    serializer_class = ArtistSerializer
    permission_classes = [AllowAny]
    pagination_class = StandardResultsSetPagination

    def get_queryset(self):
        queryset = artist_profiles()
        q = (self.request.query_params.get('q') or '').strip()
        if q:
            queryset = queryset.filter(name__icontains=q)
        return queryset.order_by('name', 'id')


class ArtistDetailView(APIView):
    """An artist profile with their latest visible songs and albums"""
    permission_classes = [AllowAny]
    preview_size = 10

    def get(self, request, pk):
        artist = get_object_or_404(artist_profiles(), pk=pk)
        songs = visible_songs(request.user).filter(uploader_id=artist.user_id)[:self.preview_size]
        albums = visible_albums(request.user).filter(artist_id=artist.user_id)[:self.preview_size]

        context = {'request': request}
        data = ArtistSerializer(artist, context=context).data
        data['latest_songs'] = SongSerializer(songs, many=True, context=context).data
        data['albums'] = AlbumSerializer(albums, many=True, context=context).data
        return Response(data)


class ArtistFollowView(APIView):
    """Follow or unfollow an artist"""
    permission_classes = [IsAuthenticated]

    def post(self, request, pk):
        artist = get_object_or_404(artist_profiles(), pk=pk)
        if artist.user_id == request.user.id:
            return Response({'error': 'You cannot follow yourself.'}, status=status.HTTP_400_BAD_REQUEST)
        follow, created = ArtistFollow.objects.get_or_create(user=request.user, artist=artist)
        if not created:
            follow.delete()

        return Response({
            'following': created,
            'followers_count': ArtistFollow.objects.filter(artist=artist).count()
        })


class ArtistLikeView(APIView):
    """Toggle like status for an artist"""
    permission_classes = [IsAuthenticated]

    def post(self, request, pk):
        artist = get_object_or_404(artist_profiles(), pk=pk)
        like, created = ArtistLike.objects.get_or_create(user=request.user, artist=artist)
        if not created:
            like.delete()

        return Response({
            'liked': created,
            'likes_count': ArtistLike.objects.filter(artist=artist).count()
        })


class FollowedArtistsView(generics.ListAPIView):
    """Artists the current user follows, most recently followed first"""
    serializer_class = ArtistSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = StandardResultsSetPagination

    def get_queryset(self):
        return (
            artist_profiles()
            .filter(artistfollow__user=self.request.user)
            .order_by('-artistfollow__created_at')
        )


class LikedArtistsView(generics.ListAPIView):
    """Artists liked by the current user, most recently liked first"""
    serializer_class = ArtistSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = StandardResultsSetPagination

    def get_queryset(self):
        return (
            artist_profiles()
            .filter(artistlike__user=self.request.user)
            .order_by('-artistlike__created_at')
        )


class ArtistProfileView(APIView):
    """Read or edit the signed-in artist's public profile"""
    permission_classes = [IsArtist]

    def get(self, request):
        profile = Artist.ensure_for(request.user)
        return Response(ArtistProfileSerializer(profile).data)

    def patch(self, request):
        profile = Artist.ensure_for(request.user)
        serializer = ArtistProfileSerializer(profile, data=request.data, partial=True)
        if serializer.is_valid():
            serializer.save()
            logger.info('Artist %s updated their profile', request.user.id)
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


# ---------------------------------------------------------------------------
# Artist dashboard
# ---------------------------------------------------------------------------

class ArtistStatsView(APIView):
    """Totals and top taxonomy across the signed-in artist's catalogue.

    Response:
    {
        "songs": int, "albums": int, "hidden_songs": int, "hidden_albums": int,
        "song_likes": int, "album_likes": int, "plays": int,
        "top_categories": [{"slug": str, "count": int}, ...],
        "top_genres": [{"slug": str, "count": int}, ...]
    }
    """
    permission_classes = [IsArtist]
    top_n = 10

    def get(self, request):
        user = request.user
        songs = Song.objects.filter(uploader=user)
        albums = Album.objects.filter(artist=user)
        song_ids = songs.values('id')

        top_categories = (
            SongCategory.objects.filter(song__uploader=user)
            .values('category_id')
            .annotate(count=Count('id'))
            .order_by('-count', 'category_id')[:self.top_n]
        )
        top_genres = (
            SongGenre.objects.filter(song__uploader=user)
            .values('genre_id')
            .annotate(count=Count('id'))
            .order_by('-count', 'genre_id')[:self.top_n]
        )

        return Response({
            'songs': songs.count(),
            'albums': albums.count(),
            'hidden_songs': songs.filter(hidden=True).count(),
            'hidden_albums': albums.filter(hidden=True).count(),
            'song_likes': SongLike.objects.filter(song__uploader=user).count(),
            'album_likes': AlbumLike.objects.filter(album__artist=user).count(),
            'plays': Playback.objects.filter(item_type=Playback.TYPE_SONG, item_id__in=song_ids).count(),
            'top_categories': [{'slug': row['category_id'], 'count': row['count']} for row in top_categories],
            'top_genres': [{'slug': row['genre_id'], 'count': row['count']} for row in top_genres],
        })


class HealthView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request):
        try:
            with connection.cursor() as cursor:
                cursor.execute('SELECT 1')
        except DatabaseError:
            logger.exception('Health check could not reach the database')
            return Response({'status': 'degraded', 'database': False}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
        return Response({'status': 'ok', 'database': True})
