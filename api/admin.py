from django.contrib import admin
from django.contrib.auth import get_user_model
from .models import (
    Album, AlbumCategory, AlbumGenre, Artist, Category, Genre, Playback, Sequence, Song,
    SongCategory, SongGenre, UserPlaylist,
)

User = get_user_model()


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('id', 'email', 'name', 'roles', 'is_staff', 'is_active', 'date_joined')
    list_filter = ('roles', 'is_staff', 'is_active')
    search_fields = ('email', 'name')


class TaxonomyAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'slug', 'created_at')
    search_fields = ('name', 'slug')
    readonly_fields = ('created_at',)

    def get_readonly_fields(self, request, obj=None):
        # the slug is the foreign key songs and albums point at
        if obj is not None:
            return self.readonly_fields + ('slug',)
        return self.readonly_fields


admin.site.register(Category, TaxonomyAdmin)
admin.site.register(Genre, TaxonomyAdmin)


class SongCategoryInline(admin.TabularInline):
    model = SongCategory
    extra = 0


class SongGenreInline(admin.TabularInline):
    model = SongGenre
    extra = 0


@admin.register(Song)
class SongAdmin(admin.ModelAdmin):
    list_display = ('id', 'track_code', 'title', 'artist_name', 'uploader', 'album', 'hidden', 'created_at')
    list_filter = ('hidden', 'created_at')
    search_fields = ('track_code', 'title', 'artist_name', 'uploader__email')
    readonly_fields = ('track_code', 'created_at', 'updated_at')
    inlines = [SongCategoryInline, SongGenreInline]
    fieldsets = (
        ('Basic Info', {
            'fields': ('track_code', 'title', 'artist_name', 'uploader', 'album', 'track_number', 'hidden')
        }),
        ('Media', {
            'fields': ('audio_url', 'cover_image', 'duration_seconds')
        }),
        ('Text', {
            'fields': ('description', 'lyrics')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at')
        }),
    )


class AlbumCategoryInline(admin.TabularInline):
    model = AlbumCategory
    extra = 0


class AlbumGenreInline(admin.TabularInline):
    model = AlbumGenre
    extra = 0


@admin.register(Album)
class AlbumAdmin(admin.ModelAdmin):
    list_display = ('id', 'album_code', 'title', 'artist', 'release_date', 'hidden', 'created_at')
    list_filter = ('hidden', 'release_date')
    search_fields = ('album_code', 'title', 'artist__email')
    readonly_fields = ('album_code', 'created_at', 'updated_at')
    inlines = [AlbumCategoryInline, AlbumGenreInline]


@admin.register(Artist)
class ArtistAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'user', 'city', 'verified', 'created_at')
    list_filter = ('verified',)
    search_fields = ('name', 'user__email')
    readonly_fields = ('created_at', 'updated_at')


@admin.register(UserPlaylist)
class UserPlaylistAdmin(admin.ModelAdmin):
    list_display = ('id', 'title', 'user', 'public', 'created_at')
    list_filter = ('public', 'created_at')
    search_fields = ('title', 'user__email')
    filter_horizontal = ('songs',)


@admin.register(Playback)
class PlaybackAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'item_type', 'item_id', 'played_at')
    list_filter = ('item_type', 'played_at')
    search_fields = ('user__email',)

    # the playback log is append-only
    def has_change_permission(self, request, obj=None):
        return False


@admin.register(Sequence)
class SequenceAdmin(admin.ModelAdmin):
    list_display = ('name', 'value', 'updated_at')
    readonly_fields = ('name', 'value', 'updated_at')
