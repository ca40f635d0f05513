from __future__ import annotations

import pytest

from schemagraph.jsonld.models import LocalBusinessConfig, OrganizationProfile, SiteInfo

SITE = "https://x.test"


@pytest.fixture
def site_info() -> SiteInfo:
    return SiteInfo(url=SITE, legal_name="X Plumbing LLC")


@pytest.fixture
def local_business_config() -> LocalBusinessConfig:
    return LocalBusinessConfig.of({
        "businessType": "Plumber",
        "legalName": "X Plumbing LLC",
        "baseUrl": SITE,
        "phone": "+1-555-0198",
        "address": {
            "streetAddress": "123 Pipe Way",
            "addressLocality": "Brooklyn",
            "addressRegion": "NY",
            "postalCode": "11201",
        },
        "openingHours": [
            {"dayOfWeek": ["Monday", "Tuesday"], "opens": "08:00", "closes": "18:00"},
            {"dayOfWeek": ["Saturday"], "opens": "09:00", "closes": "14:00"},
        ],
    })


@pytest.fixture
def profile() -> OrganizationProfile:
    return OrganizationProfile.of({
        "name": "X Pipes & Drains",
        "legalName": "X Plumbing LLC",
        "url": SITE,
        "businessType": "Plumber",
        "contact": {
            "telephone": "+1-555-0198",
            "address": {
                "streetAddress": "123 Pipe Way",
                "addressLocality": "Brooklyn",
                "addressRegion": "NY",
                "postalCode": "11201",
            },
        },
    })


@pytest.fixture
def breadcrumbs() -> list[dict]:
    return [
        {"name": "Home", "item": f"{SITE}/"},
        {"name": "Services", "item": f"{SITE}/services/"},
        {"name": "Drain Cleaning", "item": f"{SITE}/drain-cleaning/"},
    ]
