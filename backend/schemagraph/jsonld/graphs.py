"""
Graph builders — compose node generators into one linked ``@graph`` per page kind.

Every builder starts from the standard page graph (WebPage + BreadcrumbList
+ optional FAQPage) and appends its own nodes. When a builder needs to enrich
a node it did not create, it builds a new node and swaps it in by ``@id``;
nodes are never edited in place.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Mapping

from . import ids
from .fields import compact, ref, refs
from .generators import (
    generate_breadcrumb_schema,
    generate_faq_schema,
    generate_organization_schema,
    generate_service_graph_node,
    generate_webpage_schema,
    generate_website_schema,
)
from .helpers import build_geo, build_local_business, build_rating, license_fields
from .models import (
    ArticlePageOptions,
    BlogHubOptions,
    BreadcrumbOptions,
    CityHubOptions,
    CityServicePageOptions,
    CollectionPageOptions,
    FaqOptions,
    GalleryImage,
    GalleryProject,
    ImageGalleryOptions,
    OrganizationGraphOptions,
    PageImage,
    ProjectPageOptions,
    ServiceNodeOptions,
    ServicePageOptions,
    SiteInfo,
    StandardPageOptions,
    WebPageOptions,
    WebSiteOptions,
)

logger = logging.getLogger(__name__)

Node = dict[str, Any]

_ABSOLUTE_URL = re.compile(r"^[a-z][a-z0-9+.\-]*://", re.IGNORECASE)

ON_SITE_LOCATION_NAME = "On-site at Customer Location"


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------

class NodeGraph:
    """Ordered graph members indexed by ``@id``.

    Replacing a node keeps its position; anonymous nodes get a blank key
    and can only be appended.
    """

    def __init__(self, nodes: Iterable[Node] = ()):
        self._nodes: dict[str, Node] = {}
        self._blank_count = 0
        self.extend(nodes)

    def add(self, node: Node) -> Node:
        node_id = node.get("@id")
        if node_id is None:
            key = f"_:b{self._blank_count}"
            self._blank_count += 1
        elif node_id in self._nodes:
            raise ValueError(f"Duplicate @id in graph: {node_id}")
        else:
            key = node_id
        self._nodes[key] = node
        return node

    def extend(self, nodes: Iterable[Node]) -> None:
        for node in nodes:
            self.add(node)

    def replace(self, node: Node) -> Node:
        """Swap in *node* for the member with the same ``@id``."""
        node_id = node["@id"]
        if node_id not in self._nodes:
            raise KeyError(node_id)
        self._nodes[node_id] = node
        return node

    def get(self, node_id: str, default: Node | None = None) -> Node | None:
        return self._nodes.get(node_id, default)

    def nodes(self) -> list[Node]:
        return list(self._nodes.values())

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)


@dataclass
class PageGraph:
    """Named sub-schemas of one page plus the ordered graph holding them all."""

    webpage: Node
    breadcrumb: Node
    graph: NodeGraph
    faq: Node | None = None
    service: Node | None = None
    project: Node | None = None
    blog: Node | None = None
    article: Node | None = None
    local_business: Node | None = None
    images: list[Node] = field(default_factory=list)

    @property
    def items(self) -> list[Node]:
        return self.graph.nodes()

    def attach(self, name: str, node: Node) -> Node:
        setattr(self, name, node)
        return self.graph.add(node)

    def attach_images(self, images: list[Node]) -> None:
        self.images = list(images)
        self.graph.extend(images)

    def set_webpage(self, node: Node) -> None:
        self.graph.replace(node)
        self.webpage = node

    def to_dict(self) -> dict[str, Any]:
        return compact({
            "webPageSchema": self.webpage,
            "breadcrumbSchema": self.breadcrumb,
            "faqSchema": self.faq,
            "serviceSchema": self.service,
            "projectSchema": self.project,
            "blogSchema": self.blog,
            "articleSchema": self.article,
            "localBusinessSchema": self.local_business,
            "graphItems": self.items,
        }, required=("graphItems",))


# ---------------------------------------------------------------------------
# Shared pieces
# ---------------------------------------------------------------------------

def resolve_brand_id(options: StandardPageOptions) -> str | None:
    """Explicit brand id, else the one derived from the website id."""
    if options.brand_id is not None:
        return options.brand_id
    brand = ids.brand_from_website(options.website_id)
    if brand is None and options.website_id:
        logger.debug("No brand id derivable from website id %s", options.website_id)
    return brand


def _on_site_channel() -> Node:
    return {
        "@type": "ServiceChannel",
        "serviceLocation": {"@type": "Place", "name": ON_SITE_LOCATION_NAME},
    }


def _page_image(image: PageImage, site_info: SiteInfo, creator_id: str | None) -> Node:
    return compact({
        "@type": "ImageObject",
        "@id": image.id,
        "url": image.url,
        "contentUrl": image.url,
        "name": image.name,
        "caption": image.caption,
        **license_fields(site_info, creator_id),
        "contentLocation": (
            {"@type": "Place", "name": image.location_name} if image.location_name else None
        ),
    }, required=("url", "contentUrl"))


def _with_primary_image(webpage: Node, images: list[Node]) -> Node:
    if not images:
        return dict(webpage)
    return {**webpage, "primaryImageOfPage": ref(images[0]["@id"])}


# ---------------------------------------------------------------------------
# Standard page
# ---------------------------------------------------------------------------

def generate_standard_page_graph(options: StandardPageOptions | Mapping) -> PageGraph:
    """WebPage + BreadcrumbList (+ FAQPage); the seed every other builder extends."""
    o = StandardPageOptions.of(options)
    crumb_id = ids.breadcrumb_id(o.page_url)
    has_faq = bool(o.faq_questions)

    webpage = generate_webpage_schema(WebPageOptions(
        page_url=o.page_url,
        page_type=o.page_type,
        title=o.title,
        description=o.description,
        website_id=o.website_id,
        main_entity_id=o.main_entity_id or o.organization_id,
        about_id=o.about_id if o.about_id is not None else o.organization_id,
        breadcrumb_id=crumb_id,
        image_url=o.image_url,
        has_part_ids=[ids.faq_id(o.page_url)] if has_faq else None,
    ))
    breadcrumb = generate_breadcrumb_schema(BreadcrumbOptions(id=crumb_id, items=o.breadcrumb_items))

    graph = NodeGraph([webpage, breadcrumb])
    page = PageGraph(webpage=webpage, breadcrumb=breadcrumb, graph=graph)
    if has_faq:
        # FAQ answers speak for the brand, not the local business.
        page.attach("faq", generate_faq_schema(FaqOptions(
            questions=o.faq_questions,
            page_url=o.page_url,
            publisher_id=resolve_brand_id(o),
        )))
    return page


# ---------------------------------------------------------------------------
# Service page
# ---------------------------------------------------------------------------

def generate_service_page_graph(options: ServicePageOptions | Mapping) -> PageGraph:
    o = ServicePageOptions.of(options)
    service = ids.service_id(o.page_url)
    page = generate_standard_page_graph(
        o.model_copy(update={"main_entity_id": o.main_entity_id or service})
    )

    node = generate_service_graph_node(ServiceNodeOptions(
        id=service,
        url=o.page_url,
        name=o.service_name,
        description=o.service_description,
        service_type=o.service_type,
        provider_id=o.organization_id,
        area_served=o.area_served,
        image=o.image_url,
        offer_catalog_name=o.offer_catalog_name,
        offer_items=o.offer_items,
        category=o.category,
        aggregate_rating=o.aggregate_rating,
        reviews=o.reviews,
    ))
    page.attach("service", {**node, "availableChannel": _on_site_channel()})
    logger.debug("Service page graph for %s: %d nodes", o.page_url, len(page.graph))
    return page


# ---------------------------------------------------------------------------
# Collection & project pages
# ---------------------------------------------------------------------------

def generate_collection_page_graph(options: CollectionPageOptions | Mapping) -> PageGraph:
    """CollectionPage whose main entity is an ItemList of the collected pages."""
    o = CollectionPageOptions.of(options)
    page = generate_standard_page_graph(o.model_copy(update={"page_type": "CollectionPage"}))

    images = [_page_image(image, o.site_info, o.organization_id) for image in o.images]
    webpage = _with_primary_image(page.webpage, images)
    webpage["mainEntity"] = {
        "@type": "ItemList",
        "itemListElement": [
            {"@type": "ListItem", "position": position, "url": item.url, "name": item.name}
            for position, item in enumerate(o.items, start=1)
        ],
    }
    page.set_webpage(webpage)
    page.attach_images(images)
    return page


def generate_project_page_graph(options: ProjectPageOptions | Mapping) -> PageGraph:
    """Case-study page: WebPage -> CreativeWork holding the project images."""
    o = ProjectPageOptions.of(options)
    project = ids.project_id(o.page_url)
    page = generate_standard_page_graph(
        o.model_copy(update={"main_entity_id": o.main_entity_id or project})
    )

    images = [_page_image(image, o.site_info, o.organization_id) for image in o.images]
    image_refs = refs(image["@id"] for image in images)

    location = None
    if o.location_created:
        loc = o.location_created
        location = compact({
            "@type": "Place",
            "name": loc.name,
            "geo": build_geo(loc.latitude, loc.longitude),
        }, required=("name",))

    review = None
    if o.review:
        review = compact({
            "@type": "Review",
            "author": {"@type": "Person", "name": o.review.author_name},
            "reviewRating": build_rating(o.review.rating_value, o.review.best_rating),
            "reviewBody": o.review.review_body,
        })

    work = compact({
        "@type": "CreativeWork",
        "@id": project,
        "name": o.project_name,
        "description": o.project_description,
        "datePublished": o.date_published,
        "image": image_refs,
        "hasPart": image_refs,
        "creator": ref(o.organization_id),
        "locationCreated": location,
        "about": refs(o.about_service_ids),
        "review": review,
    }, required=("name", "description", "image", "hasPart"))

    # Images hang off the CreativeWork; the WebPage only names the hero image.
    page.set_webpage(_with_primary_image(page.webpage, images))
    page.attach("project", work)
    page.attach_images(images)
    return page


# ---------------------------------------------------------------------------
# Blog hub & articles
# ---------------------------------------------------------------------------

def generate_blog_hub_graph(options: BlogHubOptions | Mapping) -> PageGraph:
    o = BlogHubOptions.of(options)
    blog = ids.blog_id(o.page_url)
    page = generate_standard_page_graph(
        o.model_copy(update={"main_entity_id": o.main_entity_id or blog})
    )

    node = compact({
        "@type": "Blog",
        "@id": blog,
        "name": o.blog_name,
        "description": o.blog_description,
        "url": o.page_url,
        "publisher": ref(resolve_brand_id(o)),
        "inLanguage": "en-US",
        "blogPost": [
            {"@type": "BlogPosting", "headline": post.headline, "url": post.url}
            for post in o.blog_posts or ()
        ],
    }, required=("name", "description", "url"))

    page.set_webpage({**page.webpage, "mainEntity": ref(blog)})
    page.attach("blog", node)
    return page


def generate_article_page_graph(options: ArticlePageOptions | Mapping) -> PageGraph:
    o = ArticlePageOptions.of(options)
    article = ids.article_id(o.page_url)
    webpage = ids.webpage_id(o.page_url)
    page = generate_standard_page_graph(
        o.model_copy(update={"main_entity_id": o.main_entity_id or article})
    )

    if o.author_id:
        author = ref(o.author_id)
    else:
        # Authors work for the brand, not the local business.
        author = compact({
            "@type": "Person",
            "name": o.author_name,
            "jobTitle": o.author_job_title,
            "url": o.author_url,
            "worksFor": ref(resolve_brand_id(o)),
        }, required=("name",))

    node = compact({
        "@type": o.article_type or "Article",
        "@id": article,
        "headline": o.headline,
        "name": o.headline,
        "description": o.description,
        "image": [o.image_url] if o.image_url else None,
        "datePublished": o.date_published,
        "dateModified": o.date_modified,
        "author": author,
        "articleBody": o.article_body,
        "publisher": ref(o.organization_id),
        "isPartOf": ref(webpage),
        "mainEntityOfPage": ref(webpage),
    }, required=("headline", "name"))

    page.attach("article", node)
    return page


# ---------------------------------------------------------------------------
# City pages
# ---------------------------------------------------------------------------

def generate_city_hub_graph(options: CityHubOptions | Mapping) -> PageGraph:
    """City hub: a city LocalBusiness plus a Service with per-category catalogs."""
    o = CityHubOptions.of(options)
    config = o.local_business_config
    city = o.city
    service = ids.service_id(o.page_url)
    local_business = ids.local_business_id(config.base_url, config.city_page_base_path, city.slug)
    city_url = ids.city_page_url(config.base_url, config.city_page_base_path, city.slug)

    # The hub page is about this city's business, whatever the caller passed.
    page = generate_standard_page_graph(o.model_copy(update={
        "main_entity_id": o.main_entity_id or service,
        "about_id": local_business,
    }))

    catalog_name = f"Services Available in {city.name}"
    node = generate_service_graph_node(ServiceNodeOptions(
        id=service,
        url=o.page_url,
        name=o.hub_provider_name or f"Services in {city.name}",
        description=o.description or "",
        service_type=o.hub_provider_type or "General Services",
        category=o.hub_category,
        provider_id=local_business,
        area_served=compact({
            "@type": "City",
            "name": city.name,
            "containedInPlace": {"@type": "State", "name": config.address.address_region},
            "geo": build_geo(city.lat, city.lng),
        }),
        offer_catalog_name=catalog_name,
        offer_items=[],
    ))
    node = {
        **node,
        "hasOfferCatalog": {
            "@type": "OfferCatalog",
            "name": catalog_name,
            "itemListElement": [
                {
                    "@type": "OfferCatalog",
                    "name": category.category_name,
                    "itemListElement": [
                        {
                            "@type": "Offer",
                            "itemOffered": {
                                "@type": "Service",
                                "name": entry.name,
                                "url": f"{city_url}{entry.slug}/",
                            },
                        }
                        for entry in category.services
                    ],
                }
                for category in o.service_categories
            ],
        },
    }

    parent = o.organization_id or ids.organization_id(config.base_url)
    page.attach("service", node)
    page.attach("local_business", build_local_business(local_business, parent, city, config))
    return page


def generate_city_service_page_graph(options: CityServicePageOptions | Mapping) -> PageGraph:
    """One service in one city; the city LocalBusiness is the provider."""
    o = CityServicePageOptions.of(options)
    config = o.local_business_config
    local_business = ids.local_business_id(config.base_url, config.city_page_base_path, o.city.slug)

    page = generate_service_page_graph(o.model_copy(update={
        "organization_id": local_business,
        "about_id": local_business,
    }))
    parent = o.organization_id or ids.organization_id(config.base_url)
    page.attach("local_business", build_local_business(local_business, parent, o.city, config))
    return page


# ---------------------------------------------------------------------------
# Image gallery
# ---------------------------------------------------------------------------

def _absolute_url(site_url: str, path: str) -> str:
    if _ABSOLUTE_URL.match(path):
        return path
    return f"{site_url}{path}"


def _gallery_about(project: GalleryProject) -> list[Node] | None:
    if project.services:
        names = [s.name for s in project.services]
    elif project.service:
        names = [project.service.name]
    else:
        return None
    return [{"@type": "Service", "name": name} for name in names]


def _gallery_image(
    page_url: str,
    project: GalleryProject,
    index: int,
    image: GalleryImage,
    site_info: SiteInfo,
    creator_id: str,
) -> Node:
    location = None
    geo = build_geo(project.latitude, project.longitude)
    if geo:
        place_name = project.neighborhood_tag or (project.city.name if project.city else None)
        location = compact({"@type": "Place", "name": place_name, "geo": geo})

    return compact({
        "@type": "ImageObject",
        "@id": ids.gallery_image_id(page_url, project.id, index),
        "contentUrl": _absolute_url(site_info.url, image.storage_path),
        "name": image.alt_text or f"{project.title} – Photo {index + 1}",
        "description": project.description or project.title,
        "contentLocation": location,
        "dateCreated": project.completion_date,
        **license_fields(site_info, creator_id),
        "about": _gallery_about(project),
    }, required=("contentUrl",))


def generate_image_gallery_graph(options: ImageGalleryOptions | Mapping) -> Node | None:
    """ImageGallery of every project image, or None when there is nothing to show.

    The node comes back without ``@context``. Wrap it with
    ``render.with_context`` before emitting it as its own script.
    """
    o = ImageGalleryOptions.of(options)
    if not o.projects:
        return None

    site = o.site_info
    creator = o.organization_id or ids.organization_id(site.url)
    pathname = o.pathname if o.pathname.endswith("/") else f"{o.pathname}/"
    page_url = f"{site.url}{pathname}"

    images = [
        _gallery_image(page_url, project, index, image, site, creator)
        for project in o.projects
        for index, image in enumerate(project.images)
    ]
    logger.debug("Gallery %s: %d images from %d projects", page_url, len(images), len(o.projects))
    return {
        "@type": "ImageGallery",
        "@id": ids.gallery_id(page_url),
        "name": "Project Gallery",
        "isPartOf": ref(ids.webpage_id(page_url)),
        "about": ref(creator),
        "image": images,
    }


# ---------------------------------------------------------------------------
# Site-level organization graph
# ---------------------------------------------------------------------------

def generate_organization_graph(options: OrganizationGraphOptions | Mapping) -> list[Node]:
    """Brand + local business + WebSite, followed by the caller's page nodes.

    With global signals on, the local business also carries ``knowsAbout``,
    served cities and an offer catalog. Spoke pages usually turn them off.
    """
    o = OrganizationGraphOptions.of(options)
    profile = o.profile
    brand, local = generate_organization_schema(profile)

    if o.include_global_signals:
        local = {**local, **compact({
            "knowsAbout": o.knows_about,
            "areaServed": [
                compact({
                    "@type": "City",
                    "name": area.name,
                    "containedInPlace": {"@type": "State", "name": area.region} if area.region else None,
                }, required=("name",))
                for area in o.area_served or ()
            ],
            "hasOfferCatalog": {
                "@type": "OfferCatalog",
                "name": o.offer_catalog_name or f"{profile.name} Services",
                "itemListElement": [
                    {
                        "@type": "Offer",
                        "itemOffered": compact({
                            "@type": "Service",
                            "name": offer.name,
                            "url": offer.url,
                            "description": offer.description,
                        }, required=("name", "url")),
                    }
                    for offer in o.offers
                ],
            } if o.offers else None,
        })}

    website = generate_website_schema(WebSiteOptions(
        url=profile.url,
        name=profile.name,
        description=profile.description,
        organization_id=brand["@id"],
        search_url_template=profile.search_url_template,
    ))
    graph = NodeGraph([brand, local, website])
    graph.extend(o.graph_items)
    return graph.nodes()
