"""
SEO Routes

Sitemap index, per-language sitemaps and robots.txt. These never fail on a
missing database: sitemaps fall back to static pages.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from galatide.database import Store, get_store
from galatide.services.seo_service import SEOService

router = APIRouter(tags=["SEO"])


def get_seo_service(store: Store = Depends(get_store)) -> SEOService:
    return SEOService(store)


@router.get("/sitemap.xml")
async def get_sitemap_index(service: SEOService = Depends(get_seo_service)) -> Response:
    """Sitemap index linking one sitemap per language."""
    languages = await service.sitemap_languages()
    return Response(
        content=service.render_sitemap_index(languages),
        media_type="application/xml",
        headers={"Cache-Control": "public, max-age=3600"},
    )


@router.get("/sitemap-{language_code}.xml")
async def get_language_sitemap(language_code: str, service: SEOService = Depends(get_seo_service)) -> Response:
    urls = await service.generate_language_sitemap(language_code.lower())
    return Response(
        content=service.render_sitemap_xml(urls),
        media_type="application/xml",
        headers={"Cache-Control": "public, max-age=1800"},
    )


@router.get("/robots.txt")
async def get_robots_txt(service: SEOService = Depends(get_seo_service)) -> Response:
    return Response(
        content=service.generate_robots_txt(),
        media_type="text/plain",
        headers={"Cache-Control": "public, max-age=86400"},
    )
