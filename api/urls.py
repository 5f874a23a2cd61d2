from django.urls import path

from .admin_views import (
    AdminPlaybackSummaryView,
    AdminUserDetailView,
    AdminUserListView,
)
from .auth_views import (
    CustomTokenObtainPairView,
    CustomTokenRefreshView,
    LogoutView,
    RegisterView,
    UserProfileView,
)
from .views import (
    AlbumDetailView,
    AlbumLikeView,
    AlbumListView,
    AlbumVisibilityView,
    ArtistDetailView,
    ArtistFollowView,
    ArtistLikeView,
    ArtistListView,
    ArtistProfileView,
    ArtistStatsView,
    CategoryDetailView,
    CategoryListView,
    DiscoverView,
    FollowedArtistsView,
    GenreDetailView,
    GenreListView,
    HealthView,
    LikedArtistsView,
    LikedSongsView,
    MyAlbumsView,
    MySongsView,
    PlaybackView,
    SongByTrackCodeView,
    SongDetailView,
    SongLikeView,
    SongListView,
    SongLyricsView,
    SongSearchView,
    SongsByCategoryView,
    SongVisibilityView,
    UserPlaylistAddSongView,
    UserPlaylistDetailView,
    UserPlaylistListCreateView,
    UserPlaylistRemoveSongView,
)

urlpatterns = [
    # Authentication
    path('auth/register/', RegisterView.as_view(), name='register'),
    path('auth/login/', CustomTokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('auth/token/refresh/', CustomTokenRefreshView.as_view(), name='token_refresh'),
    path('auth/logout/', LogoutView.as_view(), name='logout'),
    path('users/profile/', UserProfileView.as_view(), name='user-profile'),

    # Discover and playback
    path('playback/', PlaybackView.as_view(), name='playback-record'),
    path('discover/<str:section>/', DiscoverView.as_view(), name='discover-section'),

    # Songs
    path('songs/', SongListView.as_view(), name='song-list'),
    path('songs/search/', SongSearchView.as_view(), name='song-search'),
    path('songs/liked/', LikedSongsView.as_view(), name='song-liked'),
    path('songs/mine/', MySongsView.as_view(), name='song-mine'),
    path('songs/category/<slug:slug>/', SongsByCategoryView.as_view(), name='song-by-category'),
    path('songs/track/<str:track_code>/', SongByTrackCodeView.as_view(), name='song-by-track-code'),
    path('songs/<int:pk>/', SongDetailView.as_view(), name='song-detail'),
    path('songs/<int:pk>/lyrics/', SongLyricsView.as_view(), name='song-lyrics'),
    path('songs/<int:pk>/like/', SongLikeView.as_view(), name='song-like'),
    path('songs/<int:pk>/hide/', SongVisibilityView.as_view(hidden=True), name='song-hide'),
    path('songs/<int:pk>/unhide/', SongVisibilityView.as_view(hidden=False), name='song-unhide'),

    # Albums
    path('albums/', AlbumListView.as_view(), name='album-list'),
    path('albums/mine/', MyAlbumsView.as_view(), name='album-mine'),
    path('albums/<int:pk>/', AlbumDetailView.as_view(), name='album-detail'),
    path('albums/<int:pk>/like/', AlbumLikeView.as_view(), name='album-like'),
    path('albums/<int:pk>/hide/', AlbumVisibilityView.as_view(hidden=True), name='album-hide'),
    path('albums/<int:pk>/unhide/', AlbumVisibilityView.as_view(hidden=False), name='album-unhide'),

    # Classification
    path('categories/', CategoryListView.as_view(), name='category-list'),
    path('categories/<slug:slug>/', CategoryDetailView.as_view(), name='category-detail'),
    path('genres/', GenreListView.as_view(), name='genre-list'),
    path('genres/<slug:slug>/', GenreDetailView.as_view(), name='genre-detail'),

    # User playlists
    path('user-playlists/', UserPlaylistListCreateView.as_view(), name='user-playlist-list-create'),
    path('user-playlists/<int:pk>/', UserPlaylistDetailView.as_view(), name='user-playlist-detail'),
    path('user-playlists/<int:pk>/add-song/', UserPlaylistAddSongView.as_view(), name='user-playlist-add-song'),
    path('user-playlists/<int:pk>/remove-song/<int:song_id>/', UserPlaylistRemoveSongView.as_view(), name='user-playlist-remove-song'),

    # Artists
    path('artists/', ArtistListView.as_view(), name='artist-list'),
    path('artists/followed/', FollowedArtistsView.as_view(), name='artist-followed'),
    path('artists/liked/', LikedArtistsView.as_view(), name='artist-liked'),
    path('artists/<int:pk>/', ArtistDetailView.as_view(), name='artist-detail'),
    path('artists/<int:pk>/follow/', ArtistFollowView.as_view(), name='artist-follow'),
    path('artists/<int:pk>/like/', ArtistLikeView.as_view(), name='artist-like'),

    # Artist
    path('artist/profile/', ArtistProfileView.as_view(), name='artist-profile'),
    path('artist/stats/', ArtistStatsView.as_view(), name='artist-stats'),

    # Admin
    path('admin/users/', AdminUserListView.as_view(), name='admin-user-list'),
    path('admin/users/<int:pk>/', AdminUserDetailView.as_view(), name='admin-user-detail'),
    path('admin/playback/summary/', AdminPlaybackSummaryView.as_view(), name='admin-playback-summary'),

    # Utility
    path('health/', HealthView.as_view(), name='health'),
]
