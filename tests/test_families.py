"""
Tests for the core WordPress tool families: content, taxonomies, users,
comments, plugins, the plugin repository and media.
"""
import pytest

from core.errors import UpstreamError
from tests.helpers import is_error, result_json, result_text
from tools import comments, content, media, plugin_repository, plugins, taxonomies, users


class TestContent:
    """Tests for content tools."""

    @pytest.mark.asyncio
    async def test_list_maps_content_type_and_unwraps_title(self, fake_client):
        fake_client.respond([{"id": 1, "title": {"rendered": "Hello"}, "slug": "hello", "content": {"rendered": "<p>long</p>"}}])

        items = result_json(await content.list_content(content_type="post", status="draft"))

        assert fake_client.last_call == ("GET", "wp/v2/posts", {"status": "draft"})
        assert items[0]["title"] == "Hello"
        assert "content" not in items[0]

    @pytest.mark.asyncio
    async def test_list_without_filters(self, fake_client):
        fake_client.respond([])

        await content.list_content(content_type="documentation")

        assert fake_client.last_call == ("GET", "wp/v2/documentation", {})

    @pytest.mark.asyncio
    async def test_get_projects_every_detail_field(self, fake_client):
        fake_client.respond({"id": 4, "title": {"rendered": "About"}, "excerpt": {"rendered": "x"}})

        item = result_json(await content.get_content(content_type="page", id=4))

        assert fake_client.last_call == ("GET", "wp/v2/pages/4", None)
        assert tuple(item) == content.DETAIL_FIELDS
        assert item["title"] == "About"
        assert item["acf"] is None

    @pytest.mark.asyncio
    async def test_create_sends_only_provided_fields(self, fake_client):
        fake_client.respond({"id": 9, "title": {"rendered": "New"}})

        await content.create_content(content_type="post", title="New", status="draft")

        assert fake_client.last_call == ("POST", "wp/v2/posts", {"title": "New", "status": "draft"})

    @pytest.mark.asyncio
    async def test_create_rejects_unknown_status(self, fake_client):
        result = await content.create_content(content_type="post", title="New", status="live")

        assert is_error(result) is True
        assert "'status'" in result_text(result)
        assert fake_client.calls == []

    @pytest.mark.asyncio
    async def test_update(self, fake_client):
        fake_client.respond({"id": 9})

        await content.update_content(content_type="post", id=9, meta={"subtitle": "x"})

        assert fake_client.last_call == ("POST", "wp/v2/posts/9", {"meta": {"subtitle": "x"}})

    @pytest.mark.asyncio
    async def test_force_delete(self, fake_client):
        fake_client.respond({"deleted": True, "previous": {"id": 9, "title": {"rendered": "Gone"}}})

        body = result_json(await content.delete_content(content_type="post", id=9, force=True))

        assert fake_client.last_call == ("DELETE", "wp/v2/posts/9", {"force": True})
        assert body["deleted"] is True
        assert body["previous"]["title"] == "Gone"

    @pytest.mark.asyncio
    async def test_trash_without_force(self, fake_client):
        fake_client.respond({"id": 9, "status": "trash"})

        body = result_json(await content.delete_content(content_type="post", id=9))

        assert fake_client.last_call[2] == {}
        assert body["status"] == "trash"

    @pytest.mark.asyncio
    async def test_list_content_types(self, fake_client):
        fake_client.respond({"post": {"name": "Posts", "slug": "post", "rest_base": "posts", "hierarchical": False, "_links": {}}})

        body = result_json(await content.list_content_types())

        assert body == {"post": {"name": "Posts", "rest_base": "posts", "hierarchical": False}}

    @pytest.mark.asyncio
    async def test_permission_hint(self, fake_client):
        fake_client.respond(UpstreamError(403))

        result = await content.create_content(content_type="post", title="x")

        assert "author/editor role" in result_text(result)


class TestTaxonomies:
    """Tests for taxonomy tools."""

    @pytest.mark.asyncio
    async def test_category_maps_to_categories(self, fake_client):
        fake_client.respond([{"id": 1, "name": "Soap", "slug": "soap", "count": 3, "meta": []}])

        items = result_json(await taxonomies.list_terms(taxonomy="category", hide_empty=True))

        assert fake_client.last_call == ("GET", "wp/v2/categories", {"hide_empty": True})
        assert items[0]["count"] == 3
        assert "meta" not in items[0]

    @pytest.mark.asyncio
    async def test_post_tag_maps_to_tags(self, fake_client):
        fake_client.respond({"id": 2})

        await taxonomies.get_term(taxonomy="post_tag", id=2)

        assert fake_client.last_call == ("GET", "wp/v2/tags/2", None)

    @pytest.mark.asyncio
    async def test_delete_always_forces(self, fake_client):
        fake_client.respond({"deleted": True, "previous": {"id": 2, "name": "Old"}})

        body = result_json(await taxonomies.delete_term(taxonomy="product_cat", id=2))

        assert fake_client.last_call == ("DELETE", "wp/v2/product_cat/2", {"force": True})
        assert body["previous"]["name"] == "Old"

    @pytest.mark.asyncio
    async def test_create(self, fake_client):
        fake_client.respond({"id": 5, "name": "Hair"})

        await taxonomies.create_term(taxonomy="category", name="Hair", parent=1)

        assert fake_client.last_call == ("POST", "wp/v2/categories", {"name": "Hair", "parent": 1})


class TestUsers:
    """Tests for user tools."""

    @pytest.mark.asyncio
    async def test_list(self, fake_client):
        fake_client.respond([{"id": 1, "name": "Admin", "avatar_urls": {}}])

        items = result_json(await users.list_users(roles="administrator"))

        assert fake_client.last_call == ("GET", "wp/v2/users", {"roles": "administrator"})
        assert tuple(items[0]) == users.USER_FIELDS

    @pytest.mark.asyncio
    async def test_current_user_uses_edit_context(self, fake_client):
        fake_client.respond({"id": 1, "username": "admin", "roles": ["administrator"]})

        body = result_json(await users.get_current_user())

        assert fake_client.last_call == ("GET", "wp/v2/users/me", {"context": "edit"})
        assert body["username"] == "admin"

    @pytest.mark.asyncio
    async def test_current_user_401_hint(self, fake_client):
        fake_client.respond(UpstreamError(401))

        assert "WORDPRESS_PASSWORD" in result_text(await users.get_current_user())

    @pytest.mark.asyncio
    async def test_delete_reassigns(self, fake_client):
        fake_client.respond({"deleted": True, "previous": {"id": 3}})

        await users.delete_user(id=3, reassign=1)

        assert fake_client.last_call == ("DELETE", "wp/v2/users/3", {"force": True, "reassign": 1})

    @pytest.mark.asyncio
    async def test_delete_requires_reassign(self, fake_client):
        result = await users.delete_user(id=3)

        assert is_error(result) is True
        assert "'reassign'" in result_text(result)


class TestComments:
    """Tests for comment tools."""

    @pytest.mark.asyncio
    async def test_list_for_post(self, fake_client):
        fake_client.respond([{"id": 1, "post": 7, "content": {"rendered": "<p>Nice</p>"}}])

        items = result_json(await comments.list_comments(post=7))

        assert fake_client.last_call == ("GET", "wp/v2/comments", {"post": 7})
        assert items[0]["content"] == "<p>Nice</p>"

    @pytest.mark.asyncio
    async def test_moderate(self, fake_client):
        fake_client.respond({"id": 1, "status": "approved"})

        await comments.update_comment(id=1, status="approved")

        assert fake_client.last_call == ("POST", "wp/v2/comments/1", {"status": "approved"})

    @pytest.mark.asyncio
    async def test_permission_hint(self, fake_client):
        fake_client.respond(UpstreamError(401))

        assert "moderate_comments" in result_text(await comments.delete_comment(id=1))


class TestPlugins:
    """Tests for plugin tools."""

    @pytest.mark.asyncio
    async def test_list(self, fake_client):
        fake_client.respond([{"plugin": "akismet/akismet", "status": "active", "description": {"raw": "x", "rendered": "Spam"}}])

        items = result_json(await plugins.list_plugins(status="active"))

        assert fake_client.last_call == ("GET", "wp/v2/plugins", {"status": "active"})
        assert items[0]["description"] == "Spam"

    @pytest.mark.asyncio
    async def test_activate_and_deactivate(self, fake_client):
        fake_client.respond({"plugin": "akismet/akismet"}, {"plugin": "akismet/akismet"})

        await plugins.activate_plugin(plugin="akismet/akismet")
        await plugins.deactivate_plugin(plugin="akismet/akismet")

        assert fake_client.calls == [
            ("POST", "wp/v2/plugins/akismet/akismet", {"status": "active"}),
            ("POST", "wp/v2/plugins/akismet/akismet", {"status": "inactive"}),
        ]

    @pytest.mark.asyncio
    async def test_administrator_hint(self, fake_client):
        fake_client.respond(UpstreamError(403))

        assert "administrator" in result_text(await plugins.activate_plugin(plugin="x/x"))


class TestPluginRepository:
    """Tests for the WordPress.org plugin directory tools."""

    @pytest.mark.asyncio
    async def test_search_builds_query_plugins_request(self, fake_client):
        fake_client.respond({
            "info": {"page": 1, "pages": 4, "results": 37},
            "plugins": [{"name": "Yoast SEO", "slug": "wordpress-seo", "active_installs": 10000000, "sections": {}}],
        })

        body = result_json(await plugin_repository.search_plugin_repository(search="seo"))

        assert fake_client.last_call == ("GET", plugin_repository.REPOSITORY_URL, {
            "action": "query_plugins",
            "request[search]": "seo",
            "request[page]": 1,
            "request[per_page]": 10,
        })
        assert body["total_results"] == 37
        assert body["pages"] == 4
        assert body["results_count"] == 1
        assert tuple(body["plugins"][0]) == plugin_repository.SEARCH_FIELDS
        assert body["plugins"][0]["slug"] == "wordpress-seo"

    @pytest.mark.asyncio
    async def test_search_rejects_oversized_page(self, fake_client):
        result = await plugin_repository.search_plugin_repository(search="seo", per_page=500)

        assert is_error(result) is True
        assert "'per_page'" in result_text(result)
        assert fake_client.calls == []

    @pytest.mark.asyncio
    async def test_info_flattens_versions_and_description(self, fake_client):
        fake_client.respond({
            "name": "Akismet",
            "slug": "akismet",
            "version": "5.3",
            "versions": {"5.2": "https://downloads.wordpress.org/a.5.2.zip", "5.3": "https://downloads.wordpress.org/a.5.3.zip"},
            "sections": {"description": "<p>Spam protection</p>", "changelog": "<h4>5.3</h4>"},
        })

        body = result_json(await plugin_repository.get_plugin_repository_info(slug="akismet"))

        assert fake_client.last_call == ("GET", plugin_repository.REPOSITORY_URL, {
            "action": "plugin_information",
            "request[slug]": "akismet",
        })
        assert body["versions"] == ["5.2", "5.3"]
        assert body["description"] == "<p>Spam protection</p>"
        assert "sections" not in body

    @pytest.mark.asyncio
    async def test_unknown_slug_hint(self, fake_client):
        fake_client.respond(UpstreamError(404, {"error": "Plugin not found."}))

        result = await plugin_repository.get_plugin_repository_info(slug="no-such-plugin")

        assert is_error(result) is True
        assert "WordPress.org directory" in result_text(result)


class TestMedia:
    """Tests for media tools."""

    @pytest.mark.asyncio
    async def test_list_rejects_unknown_media_type(self, fake_client):
        result = await media.list_media(media_type="pdf")

        assert is_error(result) is True
        assert fake_client.calls == []

    @pytest.mark.asyncio
    async def test_get_detail(self, fake_client):
        fake_client.respond({"id": 3, "title": {"rendered": "Logo"}, "caption": {"rendered": "c"}, "source_url": "https://shop.test/logo.png"})

        body = result_json(await media.get_media(id=3))

        assert tuple(body) == media.MEDIA_DETAIL_FIELDS
        assert body["caption"] == "c"

    @pytest.mark.asyncio
    async def test_delete_forces(self, fake_client):
        fake_client.respond({"deleted": True, "previous": {"id": 3}})

        await media.delete_media(id=3)

        assert fake_client.last_call == ("DELETE", "wp/v2/media/3", {"force": True})
