from __future__ import annotations

import pytest

from schemagraph.jsonld import graphs, helpers
from schemagraph.jsonld.graphs import NodeGraph

SITE = "https://x.test"
PAGE = f"{SITE}/drain-cleaning/"
WEBSITE = f"{SITE}/#website"
ORG = f"{SITE}/#organization"
BRAND = f"{SITE}/#brand"


def _page(breadcrumbs, **extra) -> dict:
    return {
        "pageUrl": PAGE,
        "title": "Drain Cleaning",
        "breadcrumbItems": breadcrumbs,
        "websiteId": WEBSITE,
        "organizationId": ORG,
        **extra,
    }


def _ids(items: list[dict]) -> list[str]:
    return [item.get("@id") for item in items]


# ---------------------------------------------------------------------------
# NodeGraph
# ---------------------------------------------------------------------------

def test_node_graph_replace_keeps_position() -> None:
    graph = NodeGraph([{"@id": "a", "v": 1}, {"@id": "b"}, {"name": "anon"}])
    graph.replace({"@id": "a", "v": 2})
    assert graph.nodes()[0] == {"@id": "a", "v": 2}
    assert len(graph) == 3
    assert "b" in graph
    assert graph.get("missing") is None


def test_node_graph_rejects_duplicates_and_unknown_replacements() -> None:
    graph = NodeGraph([{"@id": "a"}])
    with pytest.raises(ValueError):
        graph.add({"@id": "a"})
    with pytest.raises(KeyError):
        graph.replace({"@id": "zzz"})


# ---------------------------------------------------------------------------
# Standard page
# ---------------------------------------------------------------------------

def test_standard_page_defaults_links_to_organization(breadcrumbs) -> None:
    page = graphs.generate_standard_page_graph(_page(breadcrumbs))
    webpage = page.webpage
    assert webpage["mainEntity"] == {"@id": ORG}
    assert webpage["about"] == {"@id": ORG}
    assert webpage["breadcrumb"] == {"@id": f"{PAGE}#breadcrumb"}
    assert "hasPart" not in webpage
    assert page.faq is None
    assert _ids(page.items) == [f"{PAGE}#webpage", f"{PAGE}#breadcrumb"]
    assert "faqSchema" not in page.to_dict()


def test_standard_page_faq_is_published_by_brand(breadcrumbs) -> None:
    page = graphs.generate_standard_page_graph(_page(
        breadcrumbs, faqQuestions=[{"question": "Q?", "answer": "A."}],
    ))
    assert page.faq["publisher"] == {"@id": BRAND}
    assert page.webpage["hasPart"] == [{"@id": f"{PAGE}#faq"}]
    assert _ids(page.items)[-1] == f"{PAGE}#faq"


def test_standard_page_explicit_brand_and_about(breadcrumbs) -> None:
    page = graphs.generate_standard_page_graph(_page(
        breadcrumbs,
        brandId="https://brand.test/#brand",
        aboutId=BRAND,
        mainEntityId="https://x.test/#thing",
        faqQuestions=[{"question": "Q?", "answer": "A."}],
    ))
    assert page.faq["publisher"] == {"@id": "https://brand.test/#brand"}
    assert page.webpage["about"] == {"@id": BRAND}
    assert page.webpage["mainEntity"] == {"@id": "https://x.test/#thing"}


def test_standard_page_without_website_has_no_brand_link(breadcrumbs) -> None:
    options = _page(breadcrumbs, faqQuestions=[{"question": "Q?", "answer": "A."}])
    del options["websiteId"]
    page = graphs.generate_standard_page_graph(options)
    assert "publisher" not in page.faq
    assert "isPartOf" not in page.webpage


def test_ids_are_deterministic(breadcrumbs) -> None:
    first = graphs.generate_service_page_graph(_service_options(breadcrumbs))
    second = graphs.generate_service_page_graph(_service_options(breadcrumbs))
    assert first.items == second.items


# ---------------------------------------------------------------------------
# Service page
# ---------------------------------------------------------------------------

def _service_options(breadcrumbs, **extra) -> dict:
    return _page(
        breadcrumbs,
        serviceName="Drain Cleaning",
        serviceType="PlumbingService",
        serviceDescription="We clear drains.",
        offerCatalogName="Drain Services",
        offerItems=["Hydro-Jetting", {"name": "Snaking", "url": f"{SITE}/snaking/"}],
        **extra,
    )


def test_service_page_graph(breadcrumbs) -> None:
    page = graphs.generate_service_page_graph(_service_options(
        breadcrumbs, aggregateRating={"ratingValue": 4.9, "reviewCount": 87},
    ))
    service = page.service
    assert service["@id"] == f"{PAGE}#service"
    assert service["provider"] == {"@id": ORG}
    assert service["availableChannel"]["serviceLocation"]["name"] == "On-site at Customer Location"
    assert service["aggregateRating"]["reviewCount"] == 87
    assert page.webpage["mainEntity"] == {"@id": f"{PAGE}#service"}
    assert page.webpage["about"] == {"@id": ORG}
    assert _ids(page.items) == [f"{PAGE}#webpage", f"{PAGE}#breadcrumb", f"{PAGE}#service"]
    assert page.to_dict()["serviceSchema"] is service


def test_service_channel_is_fresh_per_graph(breadcrumbs) -> None:
    first = graphs.generate_service_page_graph(_service_options(breadcrumbs))
    first.service["availableChannel"]["serviceLocation"]["name"] = "Remote"

    second = graphs.generate_service_page_graph(_service_options(breadcrumbs))
    assert second.service["availableChannel"] == {
        "@type": "ServiceChannel",
        "serviceLocation": {"@type": "Place", "name": "On-site at Customer Location"},
    }


# ---------------------------------------------------------------------------
# Collection & project pages
# ---------------------------------------------------------------------------

def _images() -> list[dict]:
    return [
        {"id": f"{PAGE}#img-0", "url": f"{SITE}/a.webp", "name": "Before", "locationName": "Park Slope"},
        {"id": f"{PAGE}#img-1", "url": f"{SITE}/b.webp"},
    ]


def test_collection_page_replaces_webpage_by_id(breadcrumbs, site_info, monkeypatch) -> None:
    monkeypatch.setattr(helpers, "current_year", lambda: 2030)
    page = graphs.generate_collection_page_graph({
        **_page(breadcrumbs),
        "pageType": "WebPage",
        "siteInfo": site_info.model_dump(),
        "images": _images(),
        "items": [
            {"url": f"{SITE}/p/1/", "name": "One"},
            {"url": f"{SITE}/p/2/", "name": "Two"},
        ],
    })
    webpages = [n for n in page.items if n.get("@id") == f"{PAGE}#webpage"]
    assert len(webpages) == 1
    webpage = webpages[0]
    assert webpage is page.webpage
    assert webpage["@type"] == "CollectionPage"
    assert webpage["primaryImageOfPage"] == {"@id": f"{PAGE}#img-0"}
    assert [i["position"] for i in webpage["mainEntity"]["itemListElement"]] == [1, 2]

    first, second = page.images
    assert first["copyrightNotice"] == "© 2030 X Plumbing LLC"
    assert first["creator"] == {"@type": "Organization", "@id": ORG, "name": "X Plumbing LLC"}
    assert first["contentLocation"] == {"@type": "Place", "name": "Park Slope"}
    assert "name" not in second and "caption" not in second
    assert _ids(page.items)[-2:] == [f"{PAGE}#img-0", f"{PAGE}#img-1"]


def test_collection_page_without_images_keeps_base_webpage_shape(breadcrumbs, site_info) -> None:
    page = graphs.generate_collection_page_graph({
        **_page(breadcrumbs), "siteInfo": site_info.model_dump(), "images": [], "items": [],
    })
    assert "primaryImageOfPage" not in page.webpage
    assert page.webpage["mainEntity"] == {"@type": "ItemList", "itemListElement": []}


def test_collection_page_does_not_touch_the_base_webpage(breadcrumbs, site_info, monkeypatch) -> None:
    seen = {}
    build_standard = graphs.generate_standard_page_graph

    def spy(options):
        page = build_standard(options)
        seen["webpage"] = page.webpage
        return page

    monkeypatch.setattr(graphs, "generate_standard_page_graph", spy)
    page = graphs.generate_collection_page_graph({
        **_page(breadcrumbs), "siteInfo": site_info.model_dump(), "images": _images(), "items": [],
    })
    assert "primaryImageOfPage" not in seen["webpage"]
    assert seen["webpage"] is not page.webpage


def test_project_page_graph(breadcrumbs, site_info) -> None:
    page = graphs.generate_project_page_graph({
        **_page(breadcrumbs),
        "siteInfo": site_info.model_dump(),
        "projectName": "Re-Pipe",
        "projectDescription": "Copper re-pipe",
        "images": _images(),
        "locationCreated": {"name": "Park Slope", "latitude": 40.67, "longitude": -73.97},
        "aboutServiceIds": [f"{SITE}/pipe-repair/#service"],
        "review": {"authorName": "Jane", "ratingValue": 5, "reviewBody": "Great"},
    })
    work = page.project
    image_refs = [{"@id": f"{PAGE}#img-0"}, {"@id": f"{PAGE}#img-1"}]
    assert work["@id"] == f"{PAGE}#project"
    assert work["image"] == image_refs
    assert work["hasPart"] == image_refs
    assert work["creator"] == {"@id": ORG}
    assert work["locationCreated"]["geo"]["latitude"] == 40.67
    assert work["about"] == [{"@id": f"{SITE}/pipe-repair/#service"}]
    assert work["review"]["reviewRating"]["bestRating"] == 5
    assert "datePublished" not in work

    assert page.webpage["mainEntity"] == {"@id": f"{PAGE}#project"}
    assert page.webpage["primaryImageOfPage"] == {"@id": f"{PAGE}#img-0"}
    assert "hasPart" not in page.webpage
    assert _ids(page.items) == [
        f"{PAGE}#webpage", f"{PAGE}#breadcrumb", f"{PAGE}#project", f"{PAGE}#img-0", f"{PAGE}#img-1",
    ]


def test_project_location_geo_needs_both_coordinates(breadcrumbs, site_info) -> None:
    page = graphs.generate_project_page_graph({
        **_page(breadcrumbs),
        "siteInfo": site_info.model_dump(),
        "projectName": "P",
        "projectDescription": "D",
        "locationCreated": {"name": "Somewhere", "latitude": 40.0},
    })
    assert page.project["locationCreated"] == {"@type": "Place", "name": "Somewhere"}
    assert page.project["image"] == []


# ---------------------------------------------------------------------------
# Blog & article
# ---------------------------------------------------------------------------

def test_blog_hub_graph(breadcrumbs) -> None:
    page = graphs.generate_blog_hub_graph({
        **_page(breadcrumbs, mainEntityId="https://x.test/#ignored"),
        "blogName": "Tips",
        "blogDescription": "Plumbing tips",
        "blogPosts": [{"headline": "Fix it", "url": f"{SITE}/blog/fix-it/"}],
    })
    blog = page.blog
    assert blog["@id"] == f"{PAGE}#blog"
    assert blog["publisher"] == {"@id": BRAND}
    assert blog["blogPost"] == [{"@type": "BlogPosting", "headline": "Fix it", "url": f"{SITE}/blog/fix-it/"}]
    assert page.webpage["mainEntity"] == {"@id": f"{PAGE}#blog"}
    assert len([n for n in page.items if n.get("@id") == f"{PAGE}#webpage"]) == 1


def test_article_page_inline_author_works_for_brand(breadcrumbs) -> None:
    page = graphs.generate_article_page_graph({
        **_page(breadcrumbs, imageUrl=f"{SITE}/hero.webp"),
        "headline": "How drains clog",
        "authorName": "Ann",
        "authorJobTitle": "Lead Plumber",
    })
    article = page.article
    assert article["@type"] == "Article"
    assert article["@id"] == f"{PAGE}#article"
    assert article["author"] == {
        "@type": "Person", "name": "Ann", "jobTitle": "Lead Plumber", "worksFor": {"@id": BRAND},
    }
    assert article["publisher"] == {"@id": ORG}
    assert article["isPartOf"] == {"@id": f"{PAGE}#webpage"}
    assert article["mainEntityOfPage"] == {"@id": f"{PAGE}#webpage"}
    assert article["image"] == [f"{SITE}/hero.webp"]
    assert page.webpage["mainEntity"] == {"@id": f"{PAGE}#article"}


def test_article_page_author_reference(breadcrumbs) -> None:
    page = graphs.generate_article_page_graph({
        **_page(breadcrumbs),
        "articleType": "BlogPosting",
        "headline": "H",
        "authorName": "Ann",
        "authorId": f"{SITE}/about/#ann",
    })
    assert page.article["@type"] == "BlogPosting"
    assert page.article["author"] == {"@id": f"{SITE}/about/#ann"}
    assert "datePublished" not in page.article


# ---------------------------------------------------------------------------
# City pages
# ---------------------------------------------------------------------------

def test_city_hub_graph(breadcrumbs, local_business_config) -> None:
    page = graphs.generate_city_hub_graph({
        **_page(breadcrumbs, aboutId="https://x.test/#caller-choice"),
        "pageUrl": f"{SITE}/areas-we-serve/brooklyn/",
        "city": {"slug": "brooklyn", "name": "Brooklyn"},
        "serviceCategories": [
            {"categoryName": "Indoor", "services": [
                {"slug": "drain-cleaning", "name": "Drain Cleaning"},
                {"slug": "pipe-repair", "name": "Pipe Repair"},
            ]},
            {"categoryName": "Outdoor", "services": [{"slug": "sewer", "name": "Sewer"}]},
        ],
        "localBusinessConfig": local_business_config.model_dump(),
    })
    local_id = "https://x.test/areas-we-serve/brooklyn/#localbusiness"
    assert page.local_business["@id"] == local_id
    assert page.local_business["parentOrganization"] == {"@id": ORG}
    assert page.service["provider"] == {"@id": local_id}
    assert page.webpage["about"] == {"@id": local_id}
    assert page.service["name"] == "Services in Brooklyn"
    assert page.service["serviceType"] == "General Services"
    assert "geo" not in page.service["areaServed"]

    catalog = page.service["hasOfferCatalog"]
    assert catalog["name"] == "Services Available in Brooklyn"
    assert [c["name"] for c in catalog["itemListElement"]] == ["Indoor", "Outdoor"]
    assert catalog["itemListElement"][0]["itemListElement"][1]["itemOffered"] == {
        "@type": "Service",
        "name": "Pipe Repair",
        "url": "https://x.test/areas-we-serve/brooklyn/pipe-repair/",
    }
    assert _ids(page.items)[-2:] == [f"{SITE}/areas-we-serve/brooklyn/#service", local_id]


def test_city_service_page_graph(breadcrumbs, local_business_config) -> None:
    page = graphs.generate_city_service_page_graph({
        **_service_options(breadcrumbs),
        "city": {"slug": "brooklyn", "name": "Brooklyn", "lat": 40.67, "lng": -73.94},
        "service": {"slug": "drain-cleaning", "name": "Drain Cleaning"},
        "localBusinessConfig": local_business_config.model_dump(),
    })
    local_id = "https://x.test/areas-we-serve/brooklyn/#localbusiness"
    assert page.service["provider"] == {"@id": local_id}
    assert page.webpage["about"] == {"@id": local_id}
    assert page.local_business["parentOrganization"] == {"@id": ORG}
    assert page.local_business["geo"]["latitude"] == 40.67
    assert _ids(page.items)[-1] == local_id


# ---------------------------------------------------------------------------
# Image gallery
# ---------------------------------------------------------------------------

def test_empty_gallery_renders_nothing(site_info) -> None:
    assert graphs.generate_image_gallery_graph({
        "projects": [], "pathname": "/gallery", "siteInfo": site_info.model_dump(),
    }) is None


def test_image_gallery_graph(site_info) -> None:
    gallery = graphs.generate_image_gallery_graph({
        "pathname": "/gallery",
        "siteInfo": site_info.model_dump(),
        "projects": [
            {
                "id": "p1",
                "title": "Kitchen",
                "images": [
                    {"storage_path": "/img/a.webp", "alt_text": "Sink"},
                    {"storage_path": "https://cdn.test/b.webp"},
                ],
                "latitude": 40.6,
                "longitude": -73.9,
                "city": {"name": "Brooklyn"},
                "service": {"name": "Fallback"},
                "services": [{"name": "Pipe Repair"}, {"name": "Drains"}],
            },
            {
                "id": "p2",
                "title": "Bath",
                "description": "Bathroom refit",
                "images": [{"storage_path": "/img/c.webp"}],
                "latitude": 40.6,
                "service": {"name": "Remodel"},
            },
        ],
    })
    page_url = f"{SITE}/gallery/"
    assert gallery["@id"] == f"{page_url}#gallery"
    assert "@context" not in gallery
    assert gallery["isPartOf"] == {"@id": f"{page_url}#webpage"}
    assert gallery["about"] == {"@id": ORG}

    a, b, c = gallery["image"]
    assert [a["@id"], b["@id"], c["@id"]] == [
        f"{page_url}#gallery-image-p1-0",
        f"{page_url}#gallery-image-p1-1",
        f"{page_url}#gallery-image-p2-0",
    ]
    assert a["contentUrl"] == f"{SITE}/img/a.webp"
    assert b["contentUrl"] == "https://cdn.test/b.webp"
    assert a["name"] == "Sink"
    assert b["name"] == "Kitchen – Photo 2"
    assert a["description"] == "Kitchen"
    assert a["contentLocation"]["name"] == "Brooklyn"
    assert a["about"] == [{"@type": "Service", "name": "Pipe Repair"}, {"@type": "Service", "name": "Drains"}]
    assert a["creator"]["@id"] == ORG

    assert c["description"] == "Bathroom refit"
    assert "contentLocation" not in c
    assert c["about"] == [{"@type": "Service", "name": "Remodel"}]
    assert "dateCreated" not in c


# ---------------------------------------------------------------------------
# Organization graph
# ---------------------------------------------------------------------------

def test_organization_graph_with_global_signals(profile, breadcrumbs) -> None:
    extra = graphs.generate_standard_page_graph(_page(breadcrumbs)).items
    nodes = graphs.generate_organization_graph({
        "profile": profile.model_dump(),
        "graphItems": extra,
        "knowsAbout": ["Drain Cleaning"],
        "areaServed": [{"name": "Brooklyn", "region": "NY"}, {"name": "Queens"}],
        "offers": [{"name": "Drains", "url": f"{SITE}/drains/"}],
    })
    assert _ids(nodes) == [BRAND, ORG, WEBSITE, f"{PAGE}#webpage", f"{PAGE}#breadcrumb"]
    local = nodes[1]
    assert local["knowsAbout"] == ["Drain Cleaning"]
    assert local["areaServed"][1] == {"@type": "City", "name": "Queens"}
    assert local["hasOfferCatalog"]["name"] == "X Pipes & Drains Services"
    assert nodes[2]["publisher"] == {"@id": BRAND}


def test_organization_graph_without_global_signals(profile) -> None:
    nodes = graphs.generate_organization_graph({
        "profile": profile.model_dump(),
        "knowsAbout": ["Drain Cleaning"],
        "includeGlobalSignals": False,
    })
    assert "knowsAbout" not in nodes[1]
    assert len(nodes) == 3
