"""
Node generators — one function per schema.org type.

Each generator takes one option record (a model instance or a plain mapping)
and returns one node dict. Generators know nothing about the graph they end
up in; linking is done with ids supplied by the caller.
"""

from __future__ import annotations

from typing import Any, Mapping

from . import ids
from .fields import compact, ref, refs
from .helpers import (
    build_aggregate_rating,
    build_credentials,
    build_geo,
    build_opening_hours,
    build_partial_address,
    build_postal_address,
    build_rating,
    build_review,
)
from .models import (
    ArticleProps,
    BreadcrumbOptions,
    CourseProps,
    EventLocation,
    EventProps,
    FaqOptions,
    HowToProps,
    HowToStep,
    JobPostingProps,
    OfferItem,
    OrganizationProfile,
    ProductProps,
    RecipeProps,
    ReviewInput,
    ServiceArea,
    ServiceNodeOptions,
    ServiceReviewInput,
    ServiceSchemaProps,
    SoftwareApplicationProps,
    TeamMember,
    VideoObjectProps,
    WebPageOptions,
    WebSiteOptions,
)

Node = dict[str, Any]

CONTACT_ACTION_PLATFORMS = [
    "http://schema.org/DesktopWebPlatform",
    "http://schema.org/MobileWebPlatform",
]
DEFAULT_LANGUAGE = "en-US"


# ---------------------------------------------------------------------------
# Shared fragments
# ---------------------------------------------------------------------------

def _reviews(reviews: list[ReviewInput] | None) -> list[Node]:
    return [
        build_review(
            author=r.author,
            date_published=r.date_published,
            rating=build_rating(r.rating_value, r.best_rating, r.worst_rating),
            body=r.review_body,
            publisher=r.publisher,
        )
        for r in reviews or ()
    ]


def _service_reviews(reviews: list[ServiceReviewInput] | None) -> list[Node]:
    return [
        build_review(
            author=r.author_name,
            date_published=r.date_published,
            rating=build_rating(r.rating_value, r.best_rating),
            body=r.review_body,
            publisher=r.publisher_name,
        )
        for r in reviews or ()
    ]


def _steps(steps: list[HowToStep]) -> list[Node]:
    return [
        compact({
            "@type": "HowToStep",
            "name": step.name,
            "text": step.text,
            "url": step.url,
            "image": step.image,
        }, required=("name", "text"))
        for step in steps
    ]


def _area_served(area_served: Any) -> Any:
    """A list of areas becomes City nodes; any other value passes through."""
    if not isinstance(area_served, list):
        return area_served

    cities = []
    for area in area_served:
        if isinstance(area, str):
            name, region = area, None
        elif isinstance(area, ServiceArea):
            name, region = area.name, area.region
        else:
            name, region = area.get("name") or area, area.get("region")
        cities.append(compact({
            "@type": "City",
            "name": name,
            "containedInPlace": {"@type": "State", "name": region} if region else None,
        }, required=("name",)))
    return cities


def _offer_item(item: OfferItem | str | Mapping[str, Any]) -> Node:
    if isinstance(item, str):
        name, url = item, None
    elif isinstance(item, OfferItem):
        name, url = item.name, item.url
    else:
        name, url = item["name"], item.get("url")
    return {
        "@type": "Offer",
        "itemOffered": compact({"@type": "Service", "name": name, "url": url}, required=("name",)),
    }


def offer_catalog(name: str, items: list) -> Node:
    """OfferCatalog of Offers; items are bare names or ``{name, url}`` pairs."""
    return {
        "@type": "OfferCatalog",
        "name": name,
        "itemListElement": [_offer_item(item) for item in items],
    }


def _person(member: TeamMember, person_base: str, works_for: str) -> Node:
    return compact({
        "@type": "Person",
        "@id": ids.person_id(person_base, member.id),
        "name": member.name,
        "jobTitle": member.job_title,
        "worksFor": ref(works_for),
        "sameAs": member.same_as,
    }, required=("name",))


# ---------------------------------------------------------------------------
# Organization (brand + local business)
# ---------------------------------------------------------------------------

def generate_organization_schema(profile: OrganizationProfile | Mapping) -> list[Node]:
    """Return ``[brand, local_business]``.

    The brand is the umbrella legal entity; the local business is the
    service-providing instance and points back via ``parentOrganization``.
    """
    p = OrganizationProfile.of(profile)
    brand = ids.brand_id(p.url)
    local = ids.organization_id(p.url)
    person_base = ids.person_base_url(p.url, p.person_base_path)
    contact = p.contact

    leadership = [_person(m, person_base, brand) for m in p.founders or ()]
    staff = [_person(m, person_base, brand) for m in p.employees or ()]

    brand_node = compact({
        "@type": "Organization",
        "@id": brand,
        "name": p.legal_name or p.name,
        "url": p.url,
        "logo": p.logo_url,
        "contactPoint": compact({
            "@type": "ContactPoint",
            "telephone": contact.telephone,
            "contactType": contact.contact_type or "customer service",
            "email": contact.email,
        }),
        "founder": [{"@type": "Person", "@id": person["@id"]} for person in leadership],
        "employee": staff,
        "sameAs": p.social_links,
    }, required=("name", "url"))

    local_node = compact({
        "@type": p.business_type,
        "@id": local,
        "parentOrganization": ref(brand),
        "name": p.name,
        "url": p.url,
        "logo": p.logo_url,
        "image": p.image_url,
        "telephone": contact.telephone,
        "email": contact.email,
        "address": build_postal_address(contact.address),
        "geo": build_geo(contact.geo.latitude, contact.geo.longitude) if contact.geo else None,
        "priceRange": p.price_range,
        "hasMap": p.has_map,
        "openingHoursSpecification": build_opening_hours(p.opening_hours),
        "hasCredential": build_credentials(p.credentials),
        "memberOf": [
            compact({
                "@type": member.type or "Organization",
                "name": member.name,
                "url": member.url,
            }, required=("name",))
            for member in p.member_of or ()
        ],
        "aggregateRating": build_aggregate_rating(p.aggregate_rating) if p.aggregate_rating else None,
        "review": _reviews(p.reviews),
    }, required=("name", "url", "telephone"))

    return [brand_node, local_node]


# ---------------------------------------------------------------------------
# Page structure
# ---------------------------------------------------------------------------

def generate_webpage_schema(options: WebPageOptions | Mapping) -> Node:
    o = WebPageOptions.of(options)
    page_type = o.page_type or "WebPage"
    node = compact({
        "@type": page_type,
        "@id": ids.webpage_id(o.page_url),
        "url": o.page_url,
        "name": o.title,
        "description": o.description,
        "isPartOf": ref(o.website_id),
        "breadcrumb": ref(o.breadcrumb_id),
        "mainEntity": ref(o.main_entity_id),
        "about": ref(o.about_id),
        "hasPart": refs(o.has_part_ids),
        "primaryImageOfPage": {"@type": "ImageObject", "url": o.image_url} if o.image_url else None,
    }, required=("url", "name"))

    # Contact pages always advertise a way to reach the business from the page itself.
    if page_type == "ContactPage":
        node["potentialAction"] = {
            "@type": "CommunicateAction",
            "target": {
                "@type": "EntryPoint",
                "urlTemplate": o.page_url,
                "inLanguage": DEFAULT_LANGUAGE,
                "actionPlatform": list(CONTACT_ACTION_PLATFORMS),
            },
        }
    return node


def generate_breadcrumb_schema(options: BreadcrumbOptions | Mapping) -> Node:
    o = BreadcrumbOptions.of(options)
    return {
        "@type": "BreadcrumbList",
        "@id": o.id,
        "itemListElement": [
            {"@type": "ListItem", "position": position, "name": item.name, "item": item.item}
            for position, item in enumerate(o.items, start=1)
        ],
    }


def generate_website_schema(options: WebSiteOptions | Mapping) -> Node:
    o = WebSiteOptions.of(options)
    return compact({
        "@type": "WebSite",
        "@id": ids.website_id(o.url),
        "url": o.url,
        "name": o.name,
        "description": o.description,
        "publisher": ref(o.organization_id),
        "potentialAction": {
            "@type": "SearchAction",
            "target": {"@type": "EntryPoint", "urlTemplate": o.search_url_template},
            "query-input": "required name=search_term_string",
        } if o.search_url_template else None,
        "inLanguage": DEFAULT_LANGUAGE,
    }, required=("url", "name"))


def generate_faq_schema(options: FaqOptions | Mapping) -> Node:
    o = FaqOptions.of(options)
    return compact({
        "@type": "FAQPage",
        "@id": ids.faq_id(o.page_url),
        "publisher": ref(o.publisher_id),
        "mainEntity": [
            {
                "@type": "Question",
                "name": item.question,
                "acceptedAnswer": {"@type": "Answer", "text": item.answer},
            }
            for item in o.questions
        ],
    }, required=("mainEntity",))


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------

def generate_service_graph_node(options: ServiceNodeOptions | Mapping) -> Node:
    """Service scoped to a provider id, with a flat offer catalog."""
    o = ServiceNodeOptions.of(options)
    return compact({
        "@type": "Service",
        "@id": o.id,
        "url": o.url,
        "name": o.name,
        "image": o.image,
        "description": o.description,
        "serviceType": o.service_type,
        "category": o.category,
        "provider": ref(o.provider_id),
        "areaServed": _area_served(o.area_served),
        "hasOfferCatalog": offer_catalog(o.offer_catalog_name, o.offer_items),
        "aggregateRating": build_aggregate_rating(o.aggregate_rating) if o.aggregate_rating else None,
        "review": _service_reviews(o.reviews),
    }, required=("url", "name", "description", "serviceType"))


def generate_service_schema(props: ServiceSchemaProps | Mapping) -> Node:
    """Standalone Service (no page graph around it)."""
    p = ServiceSchemaProps.of(props)
    return compact({
        "@type": "Service",
        "name": p.name,
        "description": p.description,
        "url": p.url,
        "image": p.image,
        "provider": ref(p.provider_id),
        "areaServed": _area_served(p.area_served) if p.area_served else None,
        "isRelatedTo": {
            "@type": "Service",
            "name": p.parent_service.name,
            "url": p.parent_service.url,
        } if p.parent_service else None,
        "hasOfferCatalog": {
            "@type": "OfferCatalog",
            "name": f"{p.name} Services",
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
                for offer in p.offers
            ],
        } if p.offers else None,
        "aggregateRating": build_aggregate_rating(p.aggregate_rating) if p.aggregate_rating else None,
        "review": _reviews(p.reviews),
    }, required=("name", "description", "url"))


# ---------------------------------------------------------------------------
# Content
# ---------------------------------------------------------------------------

def generate_article_schema(props: ArticleProps | Mapping) -> Node:
    p = ArticleProps.of(props)
    publisher = None
    if p.publisher_name:
        publisher = compact({
            "@type": "Organization",
            "name": p.publisher_name,
            "logo": {"@type": "ImageObject", "url": p.publisher_logo} if p.publisher_logo else None,
        })
    return compact({
        "@type": "Article",
        "headline": p.headline,
        "image": p.image,
        "datePublished": p.date_published,
        "dateModified": p.date_modified,
        "author": compact({"@type": "Person", "name": p.author_name, "url": p.author_url}),
        "publisher": publisher,
        "description": p.description,
        "articleBody": p.article_body,
        "mainEntityOfPage": {"@type": "WebPage", "@id": p.url},
    }, required=("headline", "image", "datePublished"))


def generate_product_schema(props: ProductProps | Mapping) -> Node:
    p = ProductProps.of(props)
    offers = None
    if p.offers:
        offers = compact({
            "@type": "Offer",
            "priceCurrency": p.offers.price_currency,
            "price": p.offers.price,
            "availability": p.offers.availability,
            "url": p.offers.url,
            "priceValidUntil": p.offers.price_valid_until,
        }, required=("priceCurrency", "price"))
    return compact({
        "@type": "Product",
        "name": p.name,
        "image": p.image,
        "description": p.description,
        "sku": p.sku,
        "mpn": p.mpn,
        "brand": {"@type": "Brand", "name": p.brand} if p.brand else None,
        "offers": offers,
        "aggregateRating": build_aggregate_rating(p.aggregate_rating) if p.aggregate_rating else None,
        "review": _reviews(p.reviews),
    }, required=("name", "image"))


def generate_software_application_schema(props: SoftwareApplicationProps | Mapping) -> Node:
    p = SoftwareApplicationProps.of(props)
    return compact({
        "@type": "SoftwareApplication",
        "name": p.name,
        "operatingSystem": p.operating_system,
        "applicationCategory": p.application_category,
        "offers": {
            "@type": "Offer",
            "priceCurrency": p.offers.price_currency,
            "price": p.offers.price,
        } if p.offers else None,
        # App stores report rating counts, not review counts.
        "aggregateRating": (
            build_aggregate_rating(p.aggregate_rating, "ratingCount") if p.aggregate_rating else None
        ),
    }, required=("name", "operatingSystem", "applicationCategory"))


def generate_howto_schema(props: HowToProps | Mapping) -> Node:
    p = HowToProps.of(props)
    return compact({
        "@type": "HowTo",
        "name": p.name,
        "description": p.description,
        "image": p.image,
        "totalTime": p.total_time,
        "estimatedCost": {
            "@type": "MonetaryAmount",
            "currency": p.estimated_cost.currency,
            "value": p.estimated_cost.value,
        } if p.estimated_cost else None,
        "step": _steps(p.steps),
    }, required=("name", "step"))


def _event_location(location: EventLocation) -> Node:
    if location.type == "VirtualLocation":
        return compact({"@type": "VirtualLocation", "url": location.url})
    return compact({
        "@type": "Place",
        "name": location.name,
        "address": build_partial_address(location.address) if location.address else None,
    })


def generate_event_schema(props: EventProps | Mapping) -> Node:
    p = EventProps.of(props)
    offers = None
    if p.offers:
        offers = compact({
            "@type": "Offer",
            "url": p.offers.url,
            "price": p.offers.price,
            "priceCurrency": p.offers.price_currency,
            "availability": p.offers.availability,
            "validFrom": p.offers.valid_from,
        }, required=("url", "price", "priceCurrency"))
    return compact({
        "@type": "Event",
        "name": p.name,
        "startDate": p.start_date,
        "endDate": p.end_date,
        "eventAttendanceMode": p.event_attendance_mode,
        "eventStatus": p.event_status,
        "image": p.image,
        "description": p.description,
        "location": _event_location(p.location) if p.location else None,
        "offers": offers,
        "performer": {
            "@type": p.performer.type or "Person",
            "name": p.performer.name,
        } if p.performer else None,
        "organizer": compact({
            "@type": "Organization",
            "name": p.organizer.name,
            "url": p.organizer.url,
        }) if p.organizer else None,
    }, required=("name", "startDate"))


def generate_video_object_schema(props: VideoObjectProps | Mapping) -> Node:
    p = VideoObjectProps.of(props)
    return compact({
        "@type": "VideoObject",
        "name": p.name,
        "description": p.description,
        "thumbnailUrl": p.thumbnail_url,
        "uploadDate": p.upload_date,
        "contentUrl": p.content_url,
        "embedUrl": p.embed_url,
        "duration": p.duration,
    }, required=("name", "description", "thumbnailUrl", "uploadDate"))


def generate_recipe_schema(props: RecipeProps | Mapping) -> Node:
    p = RecipeProps.of(props)
    return compact({
        "@type": "Recipe",
        "name": p.name,
        "image": p.image,
        "author": {"@type": "Person", "name": p.author},
        "datePublished": p.date_published,
        "description": p.description,
        "recipeIngredient": p.recipe_ingredient,
        "prepTime": p.prep_time,
        "cookTime": p.cook_time,
        "totalTime": p.total_time,
        "keywords": p.keywords,
        "recipeYield": p.recipe_yield,
        "recipeCategory": p.recipe_category,
        "recipeCuisine": p.recipe_cuisine,
        "nutrition": {"@type": "NutritionInformation", "calories": p.calories} if p.calories else None,
        "aggregateRating": build_aggregate_rating(p.aggregate_rating) if p.aggregate_rating else None,
        "video": generate_video_object_schema(p.video) if p.video else None,
        "recipeInstructions": _steps(p.recipe_instructions),
    }, required=("name", "image", "datePublished", "description",
                 "recipeIngredient", "recipeInstructions"))


def generate_course_schema(props: CourseProps | Mapping) -> Node:
    p = CourseProps.of(props)
    return {
        "@type": "Course",
        "name": p.name,
        "description": p.description,
        "provider": compact({
            "@type": "Organization",
            "name": p.provider.name,
            "url": p.provider.url,
        }, required=("name",)),
    }


def generate_job_posting_schema(props: JobPostingProps | Mapping) -> Node:
    p = JobPostingProps.of(props)
    org = p.hiring_organization
    salary = None
    if p.base_salary:
        salary = {
            "@type": "MonetaryAmount",
            "currency": p.base_salary.currency,
            "value": {
                "@type": "QuantitativeValue",
                "minValue": p.base_salary.value.min_value,
                "maxValue": p.base_salary.value.max_value,
                "unitText": p.base_salary.value.unit_text,
            },
        }
    return compact({
        "@type": "JobPosting",
        "title": p.title,
        "description": p.description,
        "datePosted": p.date_posted,
        "validThrough": p.valid_through,
        "employmentType": p.employment_type,
        "hiringOrganization": compact({
            "@type": "Organization",
            "name": org.name,
            "sameAs": org.url,
            "logo": org.logo,
        }, required=("name",)),
        "jobLocation": {"@type": "Place", "address": build_partial_address(p.job_location)},
        "baseSalary": salary,
    }, required=("title", "description", "datePosted"))
