"""Tests for the OpenAPI tagging hook."""

from api.spectacular_hooks import tag_for_path, tag_operations


class TestTagOperations:
    """Tests for tag_operations."""

    def test_tags_by_prefix(self):
        result = {
            "paths": {
                "/api/discover/{section}/": {"get": {}},
                "/api/songs/{id}/like/": {"post": {"tags": ["api"]}},
                "/api/genres/": {"get": {}, "post": {}},
                "/api/unknown/": {"get": {}, "x-extra": {}},
            }
        }

        tag_operations(result, generator=None)

        paths = result["paths"]
        assert paths["/api/discover/{section}/"]["get"]["tags"] == ["Discover"]
        assert paths["/api/songs/{id}/like/"]["post"]["tags"] == ["Songs", "api"]
        assert paths["/api/genres/"]["post"]["tags"] == ["Classification"]
        assert paths["/api/unknown/"]["get"]["tags"] == ["Other"]
        assert paths["/api/unknown/"]["x-extra"] == {}

    def test_prefix_without_api_mount(self):
        assert tag_for_path("/user-playlists/1/") == "Library"
        assert tag_for_path("/api/admin/users/") == "Admin"
        assert tag_for_path("/api/artists/3/follow/") == "Artist"

    def test_empty_result(self):
        assert tag_operations({}, generator=None) == {}
