"""
Typed option records consumed by the node generators and graph builders.

Python callers pass snake_case keywords; JSON payloads (the API layer) use the
camelCase names page templates already speak. ``None`` always means "absent".
"""

from __future__ import annotations

from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Number = Union[int, float]
Price = Union[int, float, str]


class Record(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @classmethod
    def of(cls, value: Any):
        """Accept an instance or a plain mapping (camelCase or snake_case keys)."""
        if isinstance(value, cls):
            return value
        return cls.model_validate(value)


# ---------------------------------------------------------------------------
# Ratings & reviews
# ---------------------------------------------------------------------------

class AggregateRatingInput(Record):
    rating_value: Number
    review_count: int | None = None
    rating_count: int | None = None
    best_rating: Number | None = None  # defaults to 5
    worst_rating: Number | None = None  # defaults to 1


class ReviewInput(Record):
    author: str
    date_published: str  # YYYY-MM-DD
    rating_value: Number
    review_body: str | None = None
    best_rating: Number | None = None
    worst_rating: Number | None = None
    publisher: str | None = None  # e.g. "Google", "Yelp"


class ServiceReviewInput(Record):
    author_name: str
    date_published: str
    rating_value: Number
    best_rating: Number | None = None
    review_body: str | None = None
    publisher_name: str | None = None


# ---------------------------------------------------------------------------
# Organization profile
# ---------------------------------------------------------------------------

class PostalAddressInput(Record):
    street_address: str
    address_locality: str
    address_region: str
    postal_code: str
    address_country: str | None = None


class GeoInput(Record):
    latitude: float
    longitude: float


class ContactInput(Record):
    telephone: str
    contact_type: str | None = None  # defaults to "customer service"
    email: str | None = None
    address: PostalAddressInput
    geo: GeoInput | None = None


class OpeningHoursInput(Record):
    day_of_week: str | list[str]
    opens: str
    closes: str


class CredentialInput(Record):
    name: str
    recognized_by: str
    recognized_by_type: str | None = None


class MembershipInput(Record):
    name: str
    url: str | None = None
    type: str | None = None  # defaults to "Organization"


class TeamMember(Record):
    id: str
    name: str
    job_title: str | None = None
    same_as: list[str] | None = None


class OrganizationProfile(Record):
    name: str
    url: str
    business_type: str  # e.g. "RoofingContractor", "Plumber", "LocalBusiness"
    contact: ContactInput
    legal_name: str | None = None
    person_base_path: str | None = None  # defaults to "/about/"
    logo_url: str | None = None
    image_url: str | None = None
    description: str | None = None
    search_url_template: str | None = None
    social_links: list[str] | None = None
    price_range: str | None = None
    has_map: str | None = None
    opening_hours: list[OpeningHoursInput] | None = None
    credentials: list[CredentialInput] | None = None
    member_of: list[MembershipInput] | None = None
    founders: list[TeamMember] | None = None
    employees: list[TeamMember] | None = None
    aggregate_rating: AggregateRatingInput | None = None
    reviews: list[ReviewInput] | None = None


# ---------------------------------------------------------------------------
# Standalone Service
# ---------------------------------------------------------------------------

class ServiceOffer(Record):
    name: str
    url: str
    description: str | None = None


class ServiceArea(Record):
    name: str
    region: str | None = None
    country: str | None = None


class ParentService(Record):
    name: str
    url: str


class ServiceSchemaProps(Record):
    name: str
    description: str
    url: str
    provider_id: str
    image: str | None = None
    offers: list[ServiceOffer] | None = None
    area_served: list[ServiceArea] | None = None
    parent_service: ParentService | None = None
    aggregate_rating: AggregateRatingInput | None = None
    reviews: list[ReviewInput] | None = None


# ---------------------------------------------------------------------------
# Page-level building blocks
# ---------------------------------------------------------------------------

class FAQItem(Record):
    question: str
    answer: str


class BreadcrumbItem(Record):
    name: str
    item: str


class WebPageOptions(Record):
    page_url: str
    title: str
    page_type: str | None = None
    description: str | None = None
    breadcrumb_id: str | None = None
    main_entity_id: str | None = None
    about_id: str | None = None
    has_part_ids: list[str] | None = None
    image_url: str | None = None
    website_id: str | None = None


class BreadcrumbOptions(Record):
    id: str
    items: list[BreadcrumbItem]


class WebSiteOptions(Record):
    url: str
    name: str
    description: str | None = None
    organization_id: str | None = None
    search_url_template: str | None = None


class FaqOptions(Record):
    questions: list[FAQItem]
    page_url: str
    publisher_id: str | None = None


class OfferItem(Record):
    name: str
    url: str | None = None


class ServiceNodeOptions(Record):
    id: str
    url: str
    name: str
    description: str
    service_type: str
    provider_id: str | None = None
    offer_catalog_name: str
    offer_items: list[Union[OfferItem, str]]
    area_served: Any = None
    image: str | None = None
    category: str | None = None
    aggregate_rating: AggregateRatingInput | None = None
    reviews: list[ServiceReviewInput] | None = None


# ---------------------------------------------------------------------------
# Content types
# ---------------------------------------------------------------------------

class ArticleProps(Record):
    headline: str
    url: str
    image: list[str]
    date_published: str
    author_name: str
    date_modified: str | None = None
    author_url: str | None = None
    publisher_name: str | None = None
    publisher_logo: str | None = None
    description: str | None = None
    article_body: str | None = None


class ProductOffer(Record):
    price: Price
    price_currency: str
    availability: str | None = None  # e.g. "https://schema.org/InStock"
    url: str | None = None
    price_valid_until: str | None = None


class ProductProps(Record):
    name: str
    image: list[str]
    description: str | None = None
    sku: str | None = None
    mpn: str | None = None
    brand: str | None = None
    offers: ProductOffer | None = None
    aggregate_rating: AggregateRatingInput | None = None
    reviews: list[ReviewInput] | None = None


class SoftwareOffer(Record):
    price: Price
    price_currency: str


class SoftwareApplicationProps(Record):
    name: str
    operating_system: str
    application_category: str
    offers: SoftwareOffer | None = None
    aggregate_rating: AggregateRatingInput | None = None


class HowToStep(Record):
    name: str
    text: str
    url: str | None = None
    image: str | None = None


class EstimatedCost(Record):
    currency: str
    value: str


class HowToProps(Record):
    name: str
    steps: list[HowToStep]
    description: str | None = None
    image: str | None = None
    total_time: str | None = None  # ISO 8601 duration, e.g. "PT30M"
    estimated_cost: EstimatedCost | None = None


class EventAddress(Record):
    address_locality: str
    address_region: str
    address_country: str
    street_address: str | None = None
    postal_code: str | None = None


class EventLocation(Record):
    type: Literal["Place", "VirtualLocation"] | None = None
    name: str | None = None
    url: str | None = None
    address: EventAddress | None = None


class EventOffer(Record):
    url: str
    price: Price
    price_currency: str
    availability: str | None = None
    valid_from: str | None = None


class EventPerformer(Record):
    name: str
    type: Literal["Person", "Organization"] | None = None


class EventOrganizer(Record):
    name: str
    url: str | None = None


class EventProps(Record):
    name: str
    start_date: str
    end_date: str | None = None
    event_attendance_mode: str | None = None
    event_status: str | None = None
    location: EventLocation | None = None
    image: list[str] | None = None
    description: str | None = None
    offers: EventOffer | None = None
    performer: EventPerformer | None = None
    organizer: EventOrganizer | None = None


class VideoObjectProps(Record):
    name: str
    description: str
    thumbnail_url: list[str]
    upload_date: str
    content_url: str | None = None
    embed_url: str | None = None
    duration: str | None = None


class RecipeProps(Record):
    name: str
    image: list[str]
    author: str
    date_published: str
    description: str
    recipe_ingredient: list[str]
    recipe_instructions: list[HowToStep]
    prep_time: str | None = None
    cook_time: str | None = None
    total_time: str | None = None
    keywords: str | None = None
    recipe_yield: Union[int, str, None] = None
    recipe_category: str | None = None
    recipe_cuisine: str | None = None
    calories: str | None = None
    aggregate_rating: AggregateRatingInput | None = None
    video: VideoObjectProps | None = None


class CourseProvider(Record):
    name: str
    url: str | None = None


class CourseProps(Record):
    name: str
    description: str
    provider: CourseProvider


class HiringOrganization(Record):
    name: str
    url: str | None = None
    logo: str | None = None


class SalaryRange(Record):
    min_value: Number
    max_value: Number
    unit_text: str  # "HOUR", "WEEK", "MONTH", "YEAR"


class BaseSalary(Record):
    currency: str
    value: SalaryRange


class JobPostingProps(Record):
    title: str
    description: str
    date_posted: str
    hiring_organization: HiringOrganization
    job_location: EventAddress
    valid_through: str | None = None
    employment_type: Union[str, list[str], None] = None  # e.g. "FULL_TIME"
    base_salary: BaseSalary | None = None


# ---------------------------------------------------------------------------
# Site, city & gallery data
# ---------------------------------------------------------------------------

class SiteInfo(Record):
    url: str  # canonical origin, no trailing slash
    legal_name: str
    contact_page_path: str | None = None  # defaults to "/contact/"


class ServiceAreaData(Record):
    slug: str
    name: str
    lat: float | None = None
    lng: float | None = None


class ServiceEntry(Record):
    slug: str
    name: str


class GalleryImage(Record):
    storage_path: str
    alt_text: str | None = None


class NamedRef(Record):
    name: str


class GalleryProject(Record):
    id: str
    title: str
    images: list[GalleryImage]
    description: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    neighborhood_tag: str | None = None
    completion_date: str | None = None
    city: NamedRef | None = None
    service: NamedRef | None = None
    services: list[NamedRef] | None = None


class LocalBusinessConfig(Record):
    legal_name: str
    base_url: str
    phone: str
    address: PostalAddressInput
    opening_hours: list[OpeningHoursInput]
    business_type: str | None = None  # defaults to "LocalBusiness"
    city_page_base_path: str | None = None  # defaults to "/areas-we-serve/"
    image_url: str | None = None
    credentials: list[CredentialInput] | None = None
    state_name: str | None = None  # defaults to address.address_region
    price_range: str | None = None


# ---------------------------------------------------------------------------
# Graph builder options
# ---------------------------------------------------------------------------

class StandardPageOptions(Record):
    page_url: str
    title: str
    breadcrumb_items: list[BreadcrumbItem]
    page_type: str | None = None
    description: str | None = None
    website_id: str | None = None
    organization_id: str | None = None
    about_id: str | None = None  # defaults to organization_id
    main_entity_id: str | None = None
    image_url: str | None = None
    faq_questions: list[FAQItem] | None = None
    # Publisher of FAQ and Blog nodes, employer of article authors.
    # Derived from website_id when not supplied.
    brand_id: str | None = None


class ServicePageOptions(StandardPageOptions):
    service_name: str
    service_type: str
    service_description: str
    offer_catalog_name: str
    offer_items: list[Union[OfferItem, str]]
    area_served: Any = None
    category: str | None = None
    aggregate_rating: AggregateRatingInput | None = None
    reviews: list[ServiceReviewInput] | None = None


class PageImage(Record):
    id: str
    url: str
    name: str | None = None
    caption: str | None = None
    location_name: str | None = None


class CollectionItem(Record):
    url: str
    name: str


class CollectionPageOptions(StandardPageOptions):
    site_info: SiteInfo
    images: list[PageImage] = Field(default_factory=list)
    items: list[CollectionItem] = Field(default_factory=list)


class LocationCreated(Record):
    name: str
    latitude: float | None = None
    longitude: float | None = None


class ProjectReview(Record):
    author_name: str
    rating_value: Number
    best_rating: Number | None = None
    review_body: str | None = None


class ProjectPageOptions(StandardPageOptions):
    site_info: SiteInfo
    project_name: str
    project_description: str
    images: list[PageImage] = Field(default_factory=list)
    date_published: str | None = None
    location_created: LocationCreated | None = None
    about_service_ids: list[str] | None = None
    review: ProjectReview | None = None


class BlogPostStub(Record):
    headline: str
    url: str


class BlogHubOptions(StandardPageOptions):
    blog_name: str
    blog_description: str
    blog_posts: list[BlogPostStub] | None = None


class ArticlePageOptions(StandardPageOptions):
    headline: str
    author_name: str
    article_type: str | None = None  # "BlogPosting", "NewsArticle", ...
    date_published: str | None = None
    date_modified: str | None = None
    author_url: str | None = None
    author_id: str | None = None
    author_job_title: str | None = None
    article_body: str | None = None


class ServiceCategory(Record):
    category_name: str
    services: list[ServiceEntry]


class CityHubOptions(StandardPageOptions):
    city: ServiceAreaData
    service_categories: list[ServiceCategory]
    local_business_config: LocalBusinessConfig
    hub_provider_name: str | None = None
    hub_provider_type: str | None = None
    hub_category: str | None = None


class CityServicePageOptions(ServicePageOptions):
    city: ServiceAreaData
    service: ServiceEntry
    local_business_config: LocalBusinessConfig


class ImageGalleryOptions(Record):
    projects: list[GalleryProject]
    pathname: str
    site_info: SiteInfo
    organization_id: str | None = None


class OrganizationGraphOptions(Record):
    profile: OrganizationProfile
    graph_items: list[dict[str, Any]] = Field(default_factory=list)
    knows_about: list[str] | None = None
    area_served: list[ServiceArea] | None = None
    offers: list[ServiceOffer] | None = None
    offer_catalog_name: str | None = None
    include_global_signals: bool = True
