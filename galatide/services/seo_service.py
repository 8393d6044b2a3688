"""
SEO Service

Per-language sitemaps, the sitemap index, robots.txt and article page
metadata (title/description fallbacks, Open Graph, hreflang alternates).

Sitemap generation never raises: when the database is unconfigured or
unreachable it serves the static pages only.
"""

import logging
from datetime import datetime, timezone
from xml.etree.ElementTree import Element, SubElement, tostring  # nosec B405

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from galatide.config import settings
from galatide.database import Store
from galatide.exceptions import StoreUnavailableError
from galatide.models.article import Article, ArticleStatus
from galatide.models.article_translation import ArticleTranslation
from galatide.models.language import Language
from galatide.schemas.content import AlternateLink, ArticleMetadata, ResolvedContent
from galatide.schemas.seo import LanguageSitemap, SitemapUrl

logger = logging.getLogger(__name__)

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

DEFAULT_TITLE = "Galatide Ocean"
DEFAULT_DESCRIPTION = "Explore the mysteries of the ocean depths"
DEFAULT_AUTHOR = "Galatide Team"
NOT_FOUND_TITLE = "Article Not Found"
NOT_FOUND_DESCRIPTION = "The requested article could not be found."

# (path suffix, change frequency, priority)
STATIC_PAGES = [
    ("", "daily", 1.0),
    ("/articles", "daily", 0.8),
    ("/newsletter", "weekly", 0.6),
]


class SEOService:
    """Service for generating SEO-related content."""

    def __init__(self, store: Store, base_url: str | None = None):
        self.store = store
        self.base_url = (base_url or settings.base_url).rstrip("/")

    def article_url(self, language_code: str, slug: str) -> str:
        return f"{self.base_url}/{language_code}/articles/{slug}"

    async def generate_language_sitemap(self, language_code: str) -> list[SitemapUrl]:
        """
        Sitemap entries for one language.

        Static pages first, then published originals written in the language,
        then published translations into it.
        """
        now = datetime.now(timezone.utc)
        urls = [
            SitemapUrl(
                url=f"{self.base_url}/{language_code}{path}",
                last_modified=now,
                change_frequency=freq,
                priority=priority,
            )
            for path, freq, priority in STATIC_PAGES
        ]

        if not self.store.is_configured():
            return urls

        try:
            async with self.store.session() as db:
                language = (
                    await db.execute(select(Language).where(Language.code == language_code))
                ).scalars().first()
                if language is None:
                    return urls

                originals = await db.execute(
                    select(Article.slug, Article.updated_at)
                    .where(
                        Article.status == ArticleStatus.PUBLISHED,
                        Article.original_language_id == language.id,
                    )
                    .order_by(Article.published_at.desc())
                )
                translations = await db.execute(
                    select(ArticleTranslation.slug, ArticleTranslation.updated_at)
                    .join(Article, ArticleTranslation.article_id == Article.id)
                    .where(
                        ArticleTranslation.language_id == language.id,
                        ArticleTranslation.status == ArticleStatus.PUBLISHED,
                        Article.status == ArticleStatus.PUBLISHED,
                    )
                    .order_by(ArticleTranslation.updated_at.desc())
                )
                for slug, updated_at in [*originals.all(), *translations.all()]:
                    urls.append(
                        SitemapUrl(
                            url=self.article_url(language_code, slug),
                            last_modified=updated_at or now,
                            change_frequency="weekly",
                            priority=0.7,
                        )
                    )
        except (StoreUnavailableError, SQLAlchemyError) as e:
            logger.warning(f"Sitemap for '{language_code}' limited to static pages: {e}")

        return urls

    async def sitemap_languages(self) -> list[str]:
        """Codes of the active languages, or the configured ones without a database."""
        if self.store.is_configured():
            try:
                async with self.store.session() as db:
                    result = await db.execute(
                        select(Language.code).where(Language.is_active.is_(True)).order_by(Language.code)
                    )
                    codes = list(result.scalars().all())
                if codes:
                    return codes
            except (StoreUnavailableError, SQLAlchemyError) as e:
                logger.warning(f"Using configured languages for sitemaps: {e}")
        return list(settings.supported_languages)

    async def generate_all_sitemaps(self) -> list[LanguageSitemap]:
        sitemaps = []
        for code in await self.sitemap_languages():
            sitemaps.append(LanguageSitemap(language=code, urls=await self.generate_language_sitemap(code)))
        logger.info(f"Generated sitemaps for {len(sitemaps)} languages")
        return sitemaps

    def render_sitemap_xml(self, urls: list[SitemapUrl]) -> str:
        urlset = Element("urlset")
        urlset.set("xmlns", SITEMAP_NAMESPACE)

        for entry in urls:
            url = SubElement(urlset, "url")
            SubElement(url, "loc").text = entry.url
            SubElement(url, "lastmod").text = entry.last_modified.isoformat()
            SubElement(url, "changefreq").text = entry.change_frequency
            SubElement(url, "priority").text = f"{entry.priority:.1f}"

        return XML_DECLARATION + tostring(urlset, encoding="unicode")

    def render_sitemap_index(self, language_codes: list[str]) -> str:
        """Sitemap index pointing at one sitemap per language."""
        sitemapindex = Element("sitemapindex")
        sitemapindex.set("xmlns", SITEMAP_NAMESPACE)

        lastmod = datetime.now(timezone.utc).isoformat()
        for code in language_codes:
            sitemap = SubElement(sitemapindex, "sitemap")
            SubElement(sitemap, "loc").text = f"{self.base_url}/sitemap-{code}.xml"
            SubElement(sitemap, "lastmod").text = lastmod

        return XML_DECLARATION + tostring(sitemapindex, encoding="unicode")

    def generate_robots_txt(self) -> str:
        lines = [
            "User-agent: *",
            "Allow: /",
            "",
            "# Disallow admin and API paths",
            "Disallow: /admin/",
            "Disallow: /api/",
            "",
            "# Sitemap",
            f"Sitemap: {self.base_url}/sitemap.xml",
        ]
        return "\n".join(lines)

    def build_article_metadata(self, resolved: ResolvedContent | None, language_code: str) -> ArticleMetadata:
        """
        Page metadata for resolved content.

        Each field falls back from the translation's meta field to its plain
        field, then to the article's, then to the site default.
        """
        if resolved is None:
            return ArticleMetadata(
                title=NOT_FOUND_TITLE,
                description=NOT_FOUND_DESCRIPTION,
                og_type="website",
                found=False,
            )

        article, translation = resolved.article, resolved.translation
        title = (
            (translation and (translation.meta_title or translation.title))
            or article.meta_title
            or article.title
            or DEFAULT_TITLE
        )
        description = (
            (translation and (translation.meta_description or translation.excerpt))
            or article.meta_description
            or article.excerpt
            or DEFAULT_DESCRIPTION
        )
        keywords = (translation and translation.keywords) or article.keywords or None

        return ArticleMetadata(
            title=title,
            description=description,
            keywords=keywords,
            canonical_url=self.article_url(language_code, resolved.slug),
            published_time=(translation and translation.published_at) or article.published_at,
            authors=[(article.author and article.author.name) or DEFAULT_AUTHOR],
            images=[article.cover_url] if article.cover_url else [],
            alternates=self._alternates(resolved),
        )

    def _alternates(self, resolved: ResolvedContent) -> list[AlternateLink]:
        article = resolved.article
        original_href = self.article_url(article.original_language.code, article.slug)
        links = [AlternateLink(hreflang=article.original_language.code, href=original_href)]
        links.extend(
            AlternateLink(hreflang=link.language_code, href=self.article_url(link.language_code, link.slug))
            for link in article.translations
        )
        links.append(AlternateLink(hreflang="x-default", href=original_href))
        return links

    def article_json_ld(self, resolved: ResolvedContent, language_code: str) -> dict:
        """Schema.org Article JSON-LD for resolved content."""
        metadata = self.build_article_metadata(resolved, language_code)
        article = resolved.article
        return {
            "@context": "https://schema.org",
            "@type": "Article",
            "headline": resolved.title,
            "description": metadata.description,
            "url": metadata.canonical_url,
            "inLanguage": language_code,
            "datePublished": metadata.published_time.isoformat() if metadata.published_time else None,
            "dateModified": (resolved.translation or article).updated_at.isoformat(),
            "image": metadata.images[0] if metadata.images else None,
            "author": {
                "@type": "Person",
                "name": metadata.authors[0],
            },
            "publisher": {
                "@type": "Organization",
                "name": settings.app_name,
                "url": self.base_url,
            },
            "keywords": metadata.keywords or "",
        }
