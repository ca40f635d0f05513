"""
Fragment-identifier constructors.

Every producer and consumer of an ``@id`` convention goes through these, so
code that builds matching references by hand only has one format to follow.
"""

from __future__ import annotations

DEFAULT_CITY_BASE_PATH = "/areas-we-serve/"
DEFAULT_CONTACT_PAGE_PATH = "/contact/"
DEFAULT_PERSON_BASE_PATH = "/about/"


# ---------------------------------------------------------------------------
# Site-level ids: <siteUrl>/#<name>
# ---------------------------------------------------------------------------

def _site_fragment(site_url: str, name: str) -> str:
    return f"{site_url}/#{name}"


def brand_id(site_url: str) -> str:
    return _site_fragment(site_url, "brand")


def organization_id(site_url: str) -> str:
    return _site_fragment(site_url, "organization")


def website_id(site_url: str) -> str:
    return _site_fragment(site_url, "website")


def brand_from_website(website: str | None) -> str | None:
    """Derive the brand id from a website id (``.../#website`` -> ``.../#brand``).

    Returns None when there is no website id or it does not follow the
    ``#website`` convention.
    """
    if not website or not website.endswith("#website"):
        return None
    return website[: -len("website")] + "brand"


# ---------------------------------------------------------------------------
# Page-level ids: <pageUrl>#<name>
# ---------------------------------------------------------------------------

def _page_fragment(page_url: str, name: str) -> str:
    return f"{page_url}#{name}"


def webpage_id(page_url: str) -> str:
    return _page_fragment(page_url, "webpage")


def breadcrumb_id(page_url: str) -> str:
    return _page_fragment(page_url, "breadcrumb")


def faq_id(page_url: str) -> str:
    return _page_fragment(page_url, "faq")


def service_id(page_url: str) -> str:
    return _page_fragment(page_url, "service")


def project_id(page_url: str) -> str:
    return _page_fragment(page_url, "project")


def blog_id(page_url: str) -> str:
    return _page_fragment(page_url, "blog")


def article_id(page_url: str) -> str:
    return _page_fragment(page_url, "article")


def gallery_id(page_url: str) -> str:
    return _page_fragment(page_url, "gallery")


def gallery_image_id(page_url: str, project: str, index: int) -> str:
    return _page_fragment(page_url, f"gallery-image-{project}-{index}")


# ---------------------------------------------------------------------------
# City & person ids
# ---------------------------------------------------------------------------

def city_page_url(base_url: str, city_base_path: str | None, city_slug: str) -> str:
    return f"{base_url}{city_base_path or DEFAULT_CITY_BASE_PATH}{city_slug}/"


def local_business_id(base_url: str, city_base_path: str | None, city_slug: str) -> str:
    return f"{city_page_url(base_url, city_base_path, city_slug)}#localbusiness"


def person_base_url(site_url: str, person_base_path: str | None = None) -> str:
    """``<siteUrl>/about/`` by default; the path always starts and ends with ``/``."""
    base = site_url.rstrip("/")
    path = person_base_path or DEFAULT_PERSON_BASE_PATH
    if not path.startswith("/"):
        path = f"/{path}"
    if not path.endswith("/"):
        path = f"{path}/"
    return f"{base}{path}"


def person_id(base_url: str, member_id: str) -> str:
    return f"{base_url}#{member_id}"
