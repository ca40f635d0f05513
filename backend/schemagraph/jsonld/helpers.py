"""
Small node builders shared by generators and graph builders.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Iterable, Literal

from .fields import compact, ref
from .ids import DEFAULT_CONTACT_PAGE_PATH, city_page_url
from .models import (
    AggregateRatingInput,
    CredentialInput,
    EventAddress,
    LocalBusinessConfig,
    Number,
    OpeningHoursInput,
    PostalAddressInput,
    ServiceAreaData,
    SiteInfo,
)

IMAGE_LICENSE_URL = "https://creativecommons.org/licenses/by-nd/4.0/"
DEFAULT_BEST_RATING = 5
DEFAULT_WORST_RATING = 1

CountKey = Literal["reviewCount", "ratingCount"]


def current_year() -> int:
    """The only clock read in the package (copyright notices)."""
    return datetime.now(timezone.utc).year


# ---------------------------------------------------------------------------
# Ratings & reviews
# ---------------------------------------------------------------------------

def build_aggregate_rating(
    rating: AggregateRatingInput, count_key: CountKey = "reviewCount"
) -> dict[str, Any]:
    """AggregateRating with the count written under *count_key*.

    ``reviewCount`` and ``ratingCount`` are aliases of one count: the field
    named by *count_key* wins, the other is the fallback.
    """
    if count_key == "ratingCount":
        count = rating.rating_count if rating.rating_count is not None else rating.review_count
    else:
        count = rating.review_count if rating.review_count is not None else rating.rating_count

    return compact({
        "@type": "AggregateRating",
        "ratingValue": rating.rating_value,
        count_key: count,
        "bestRating": _or_default(rating.best_rating, DEFAULT_BEST_RATING),
        "worstRating": _or_default(rating.worst_rating, DEFAULT_WORST_RATING),
    })


def build_rating(
    value: Number, best: Number | None = None, worst: Number | None = None
) -> dict[str, Any]:
    return {
        "@type": "Rating",
        "ratingValue": value,
        "bestRating": _or_default(best, DEFAULT_BEST_RATING),
        "worstRating": _or_default(worst, DEFAULT_WORST_RATING),
    }


def build_review(
    *,
    author: str,
    rating: dict[str, Any],
    date_published: str | None = None,
    body: str | None = None,
    publisher: str | None = None,
) -> dict[str, Any]:
    return compact({
        "@type": "Review",
        "author": {"@type": "Person", "name": author},
        "datePublished": date_published,
        "reviewRating": rating,
        "reviewBody": body,
        "publisher": {"@type": "Organization", "name": publisher} if publisher else None,
    })


def _or_default(value, default):
    return default if value is None else value


# ---------------------------------------------------------------------------
# Places
# ---------------------------------------------------------------------------

def build_postal_address(address: PostalAddressInput) -> dict[str, Any]:
    return {
        "@type": "PostalAddress",
        "streetAddress": address.street_address,
        "addressLocality": address.address_locality,
        "addressRegion": address.address_region,
        "postalCode": address.postal_code,
        "addressCountry": address.address_country or "US",
    }


def build_partial_address(address: EventAddress) -> dict[str, Any]:
    """PostalAddress where only street and postal code may be missing."""
    return compact(
        {
            "@type": "PostalAddress",
            "streetAddress": address.street_address,
            "addressLocality": address.address_locality,
            "addressRegion": address.address_region,
            "postalCode": address.postal_code,
            "addressCountry": address.address_country,
        },
        required=("addressLocality", "addressRegion", "addressCountry"),
    )


def build_geo(latitude: float | None, longitude: float | None) -> dict[str, Any] | None:
    """GeoCoordinates, or None unless both coordinates are known."""
    if latitude is None or longitude is None:
        return None
    return {"@type": "GeoCoordinates", "latitude": latitude, "longitude": longitude}


def build_opening_hours(rows: Iterable[OpeningHoursInput] | None) -> list[dict[str, Any]]:
    return [
        {
            "@type": "OpeningHoursSpecification",
            "dayOfWeek": row.day_of_week,
            "opens": row.opens,
            "closes": row.closes,
        }
        for row in rows or ()
    ]


def build_credentials(
    credentials: Iterable[CredentialInput] | None, default_type: str = "Organization"
) -> list[dict[str, Any]]:
    return [
        {
            "@type": "EducationalOccupationalCredential",
            "name": cred.name,
            "recognizedBy": {
                "@type": cred.recognized_by_type or default_type,
                "name": cred.recognized_by,
            },
        }
        for cred in credentials or ()
    ]


# ---------------------------------------------------------------------------
# Licensed images
# ---------------------------------------------------------------------------

def license_fields(site_info: SiteInfo, creator_id: str | None = None) -> dict[str, Any]:
    """License, copyright and creator properties stamped on every ImageObject."""
    contact_path = site_info.contact_page_path or DEFAULT_CONTACT_PAGE_PATH
    return compact({
        "license": IMAGE_LICENSE_URL,
        "acquireLicensePage": f"{site_info.url}{contact_path}",
        "copyrightNotice": f"© {current_year()} {site_info.legal_name}",
        "creditText": site_info.legal_name,
        "creator": (
            {"@type": "Organization", "@id": creator_id, "name": site_info.legal_name}
            if creator_id else None
        ),
    })


# ---------------------------------------------------------------------------
# City-level LocalBusiness
# ---------------------------------------------------------------------------

def build_local_business(
    local_business_id: str,
    parent_organization_id: str,
    city: ServiceAreaData,
    config: LocalBusinessConfig,
) -> dict[str, Any]:
    """LocalBusiness for one city, carrying its own trust signals.

    Search engines should not need to follow ``parentOrganization`` to find
    the address, hours or credentials.
    """
    state_name = config.state_name or config.address.address_region
    return compact({
        "@type": config.business_type or "LocalBusiness",
        "@id": local_business_id,
        "parentOrganization": ref(parent_organization_id),
        "name": f"{config.legal_name} of {city.name}",
        "description": f"Expert services in {city.name}, {state_name}.",
        "url": city_page_url(config.base_url, config.city_page_base_path, city.slug),
        "image": config.image_url,
        "telephone": config.phone,
        "address": build_postal_address(config.address),
        "areaServed": {
            "@type": "City",
            "name": city.name,
            "containedInPlace": {"@type": "State", "name": state_name},
        },
        "geo": build_geo(city.lat, city.lng),
        "priceRange": config.price_range,
        "openingHoursSpecification": build_opening_hours(config.opening_hours),
        "hasCredential": build_credentials(config.credentials, "GovernmentOrganization"),
    }, required=("telephone", "openingHoursSpecification"))
