"""
Tests for the admin HTTP surface

Write routes require an ``X-Role`` header: EDITOR or ADMIN may edit,
only ADMIN may delete or publish. Errors share one JSON envelope.
"""

import pytest

from galatide.config import settings
from galatide.models.article import ArticleStatus

from conftest import ADMIN_HEADERS, EDITOR_HEADERS


# ══════════════════════════════════════════════════════════════════════════════
# 1. Roles
# ══════════════════════════════════════════════════════════════════════════════


class TestRoles:
    async def test_anonymous_is_forbidden(self, client, languages):
        response = await client.get("/api/admin/articles")

        assert response.status_code == 403
        error = response.json()["error"]
        assert error["error_code"] == "AUTH_PERMISSION_DENIED"
        assert error["details"]["role"] == "ANON"

    async def test_unknown_role_is_anonymous(self, client, languages):
        response = await client.get("/api/admin/articles", headers={"X-Role": "READER"})

        assert response.status_code == 403

    async def test_editor_may_not_delete(self, client, abyssal):
        response = await client.delete(f"/api/admin/articles/{abyssal['article_id']}", headers=EDITOR_HEADERS)

        assert response.status_code == 403

    async def test_role_header_is_case_insensitive(self, client, languages):
        response = await client.get("/api/admin/articles", headers={"X-Role": "editor"})

        assert response.status_code == 200

    async def test_admin_bypass(self, client, languages, monkeypatch):
        monkeypatch.setattr(settings, "admin_bypass", True)

        response = await client.get("/api/admin/articles")

        assert response.status_code == 200


# ══════════════════════════════════════════════════════════════════════════════
# 2. Articles
# ══════════════════════════════════════════════════════════════════════════════


class TestAdminArticles:
    async def test_create(self, client, languages, tags):
        response = await client.post(
            "/api/admin/articles",
            json={
                "title": "Hydrothermal Vents",
                "content": "<p>Black smokers.</p>",
                "language_id": languages["en"],
                "tag_ids": [tags["coral"]],
            },
            headers=EDITOR_HEADERS,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["slug"] == "hydrothermal-vents"
        assert body["status"] == "DRAFT"
        assert body["published_at"] is None
        assert body["original_language"]["code"] == "en"
        assert [tag["slug"] for tag in body["tags"]] == ["coral"]

    async def test_create_same_title_gets_suffix(self, client, abyssal, languages):
        response = await client.post(
            "/api/admin/articles",
            json={"title": "Abyssal Station", "language_id": languages["en"]},
            headers=EDITOR_HEADERS,
        )

        assert response.json()["slug"] == "abyssal-station-1"

    async def test_create_lowercase_status(self, client, languages):
        response = await client.post(
            "/api/admin/articles",
            json={"title": "Tides", "language_id": languages["en"], "status": "published"},
            headers=EDITOR_HEADERS,
        )

        assert response.json()["status"] == "PUBLISHED"
        assert response.json()["published_at"] is not None

    async def test_blank_title_is_400(self, client, languages):
        response = await client.post(
            "/api/admin/articles",
            json={"title": "   ", "language_id": languages["en"]},
            headers=EDITOR_HEADERS,
        )

        assert response.status_code == 400
        assert response.json()["error"]["details"]["field"] == "title"

    async def test_missing_title_is_422(self, client, languages):
        response = await client.post(
            "/api/admin/articles",
            json={"language_id": languages["en"]},
            headers=EDITOR_HEADERS,
        )

        assert response.status_code == 422
        fields = [e["field"] for e in response.json()["error"]["details"]["validation_errors"]]
        assert "title" in fields

    async def test_unknown_tag_is_404(self, client, languages):
        response = await client.post(
            "/api/admin/articles",
            json={"title": "Tides", "language_id": languages["en"], "tag_ids": [999]},
            headers=EDITOR_HEADERS,
        )

        assert response.status_code == 404
        assert response.json()["error"]["error_code"] == "RESOURCE_TAG_NOT_FOUND"

    async def test_patch_slug_conflict(self, client, abyssal, make_article):
        other_id = await make_article("kelp-forests")

        response = await client.patch(
            f"/api/admin/articles/{other_id}",
            json={"slug": "abyssal-station"},
            headers=EDITOR_HEADERS,
        )

        assert response.status_code == 409
        assert response.json()["error"]["error_code"] == "VALIDATION_DUPLICATE_RESOURCE"

    async def test_patch_to_draft_clears_published_at(self, client, abyssal):
        response = await client.patch(
            f"/api/admin/articles/{abyssal['article_id']}",
            json={"status": "DRAFT"},
            headers=EDITOR_HEADERS,
        )

        assert response.status_code == 200
        assert response.json()["published_at"] is None

    async def test_publish(self, client, make_article):
        article_id = await make_article("tides", status=ArticleStatus.DRAFT)

        response = await client.post(f"/api/admin/articles/{article_id}/publish", headers=ADMIN_HEADERS)

        assert response.status_code == 200
        assert response.json()["status"] == "PUBLISHED"

    async def test_delete(self, client, abyssal):
        article_id = abyssal["article_id"]

        deleted = await client.delete(f"/api/admin/articles/{article_id}", headers=ADMIN_HEADERS)
        fetched = await client.get(f"/api/admin/articles/{article_id}", headers=ADMIN_HEADERS)
        translation = await client.get(
            f"/api/admin/translations/{abyssal['translation_id']}", headers=ADMIN_HEADERS
        )

        assert deleted.status_code == 204
        assert fetched.status_code == 404
        assert translation.status_code == 404

    async def test_listing_and_status_filter(self, client, abyssal, make_article):
        await make_article("tides", status=ArticleStatus.DRAFT)

        everything = await client.get("/api/admin/articles", headers=EDITOR_HEADERS)
        drafts = await client.get("/api/admin/articles", params={"status": "draft"}, headers=EDITOR_HEADERS)

        assert everything.json()["pagination"]["total"] == 2
        assert [a["slug"] for a in drafts.json()["articles"]] == ["tides"]

    async def test_unknown_status_filter(self, client, languages):
        response = await client.get("/api/admin/articles", params={"status": "archived"}, headers=EDITOR_HEADERS)

        assert response.status_code == 400

    async def test_stats(self, client, abyssal):
        response = await client.get("/api/admin/articles/stats", headers=EDITOR_HEADERS)

        assert response.json() == {"total": 1, "published": 1, "drafts": 0, "translations": 1}


# ══════════════════════════════════════════════════════════════════════════════
# 3. Translations
# ══════════════════════════════════════════════════════════════════════════════


class TestAdminTranslations:
    async def test_create(self, client, abyssal, languages):
        response = await client.post(
            f"/api/admin/articles/{abyssal['article_id']}/translations",
            json={
                "language_id": languages["de"],
                "title": "Abyssale Station",
                "content": "<p>Tiefsee.</p>",
                "status": "published",
            },
            headers=EDITOR_HEADERS,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["slug"] == "abyssale-station"
        assert body["language"]["code"] == "de"
        assert body["status"] == "PUBLISHED"

    async def test_duplicate_language_is_409(self, client, abyssal, languages):
        response = await client.post(
            f"/api/admin/articles/{abyssal['article_id']}/translations",
            json={"language_id": languages["fr"], "title": "Encore", "content": "<p>x</p>"},
            headers=EDITOR_HEADERS,
        )

        assert response.status_code == 409

    async def test_original_language_is_400(self, client, abyssal, languages):
        response = await client.post(
            f"/api/admin/articles/{abyssal['article_id']}/translations",
            json={"language_id": languages["en"], "title": "Again", "content": "<p>x</p>"},
            headers=EDITOR_HEADERS,
        )

        assert response.status_code == 400
        assert response.json()["error"]["details"]["field"] == "language_id"

    async def test_article_translations_and_available_languages(self, client, abyssal):
        response = await client.get(
            f"/api/admin/articles/{abyssal['article_id']}/translations", headers=EDITOR_HEADERS
        )

        body = response.json()
        assert [t["language"]["code"] for t in body["translations"]] == ["fr"]
        assert [lang["code"] for lang in body["available_languages"]] == ["ar", "de"]

    async def test_unpublish_translation(self, client, abyssal):
        translation_id = abyssal["translation_id"]

        response = await client.patch(
            f"/api/admin/translations/{translation_id}", json={"status": "DRAFT"}, headers=EDITOR_HEADERS
        )
        resolved = await client.get("/api/articles/by-slug/station-abyssale", params={"lang": "fr"})

        assert response.json()["published_at"] is None
        assert resolved.status_code == 404

    async def test_null_slug_is_400(self, client, abyssal):
        url = f"/api/admin/translations/{abyssal['translation_id']}"

        response = await client.patch(url, json={"slug": None}, headers=EDITOR_HEADERS)
        fetched = await client.get(url, headers=EDITOR_HEADERS)

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["error_code"] == "VALIDATION_FAILED"
        assert error["details"]["field"] == "slug"
        assert fetched.json()["slug"] == "station-abyssale"

    async def test_delete_requires_admin(self, client, abyssal):
        url = f"/api/admin/translations/{abyssal['translation_id']}"

        assert (await client.delete(url, headers=EDITOR_HEADERS)).status_code == 403
        assert (await client.delete(url, headers=ADMIN_HEADERS)).status_code == 204
        assert (await client.get(url, headers=ADMIN_HEADERS)).status_code == 404

    async def test_list_all(self, client, abyssal):
        response = await client.get("/api/admin/translations", headers=EDITOR_HEADERS)

        assert [t["slug"] for t in response.json()] == ["station-abyssale"]


# ══════════════════════════════════════════════════════════════════════════════
# 4. Tags and languages
# ══════════════════════════════════════════════════════════════════════════════


class TestAdminTags:
    async def test_create(self, client):
        response = await client.post(
            "/api/admin/tags", json={"name": "Bioluminescence"}, headers=EDITOR_HEADERS
        )

        assert response.status_code == 201
        assert response.json()["slug"] == "bioluminescence"

    async def test_duplicate_name_is_409(self, client, tags):
        response = await client.post("/api/admin/tags", json={"name": "Coral"}, headers=EDITOR_HEADERS)

        assert response.status_code == 409

    async def test_counts(self, client, abyssal):
        response = await client.get("/api/admin/tags", headers=EDITOR_HEADERS)

        counts = {tag["slug"]: tag["article_count"] for tag in response.json()}
        assert counts == {"coral": 1, "deep-sea": 0}

    async def test_replace_translations(self, client, tags):
        url = f"/api/admin/tags/{tags['coral']}/translations"

        response = await client.put(
            url,
            json={
                "translations": [
                    {"language_code": "fr", "name": "Corail"},
                    {"language_code": "DE", "name": "Korallen"},
                    {"language_code": "ar", "name": "  "},
                ]
            },
            headers=EDITOR_HEADERS,
        )
        listed = await client.get(url, headers=EDITOR_HEADERS)

        expected = [{"language_code": "de", "name": "Korallen"}, {"language_code": "fr", "name": "Corail"}]
        assert response.json() == expected
        assert listed.json() == expected

    async def test_delete_keeps_articles(self, client, abyssal, tags):
        deleted = await client.delete(f"/api/admin/tags/{tags['coral']}", headers=ADMIN_HEADERS)
        article = await client.get(f"/api/admin/articles/{abyssal['article_id']}", headers=ADMIN_HEADERS)

        assert deleted.status_code == 204
        assert article.json()["tags"] == []


class TestAdminLanguages:
    async def test_create_derives_direction(self, client, languages):
        response = await client.post(
            "/api/admin/languages",
            json={"code": "HE", "name": "Hebrew", "native_name": "עברית"},
            headers=EDITOR_HEADERS,
        )

        assert response.status_code == 201
        assert response.json()["code"] == "he"
        assert response.json()["is_rtl"] is True

    async def test_duplicate_code_is_409(self, client, languages):
        response = await client.post(
            "/api/admin/languages",
            json={"code": "fr", "name": "French", "native_name": "Français"},
            headers=EDITOR_HEADERS,
        )

        assert response.status_code == 409

    async def test_promote_default(self, client, languages):
        response = await client.patch(
            f"/api/admin/languages/{languages['fr']}", json={"is_default": True}, headers=EDITOR_HEADERS
        )
        listed = await client.get("/api/admin/languages", headers=EDITOR_HEADERS)

        assert response.json()["is_default"] is True
        assert [lang["code"] for lang in listed.json() if lang["is_default"]] == ["fr"]

    async def test_default_cannot_be_deleted(self, client, languages):
        response = await client.delete(f"/api/admin/languages/{languages['en']}", headers=ADMIN_HEADERS)

        assert response.status_code == 400

    @pytest.mark.parametrize("code", ["de", "ar"])
    async def test_delete_unused(self, client, languages, code):
        response = await client.delete(f"/api/admin/languages/{languages[code]}", headers=ADMIN_HEADERS)

        assert response.status_code == 204
