"""
schema.org JSON-LD node generators and page graph builders.
"""

from . import ids
from .fields import compact, present, ref, refs
from .generators import (
    generate_article_schema,
    generate_breadcrumb_schema,
    generate_course_schema,
    generate_event_schema,
    generate_faq_schema,
    generate_howto_schema,
    generate_job_posting_schema,
    generate_organization_schema,
    generate_product_schema,
    generate_recipe_schema,
    generate_service_graph_node,
    generate_service_schema,
    generate_software_application_schema,
    generate_video_object_schema,
    generate_webpage_schema,
    generate_website_schema,
)
from .graphs import (
    NodeGraph,
    PageGraph,
    generate_article_page_graph,
    generate_blog_hub_graph,
    generate_city_hub_graph,
    generate_city_service_page_graph,
    generate_collection_page_graph,
    generate_image_gallery_graph,
    generate_organization_graph,
    generate_project_page_graph,
    generate_service_page_graph,
    generate_standard_page_graph,
)
from .helpers import build_aggregate_rating, build_local_business, current_year
from .references import extract_graph, find_dangling_refs, find_nodes_by_type
from .render import (
    SCHEMA_CONTEXT,
    extract_jsonld_blocks,
    graph_document,
    script_payload,
    script_tag,
    with_context,
)

__all__ = [
    "NodeGraph",
    "PageGraph",
    "SCHEMA_CONTEXT",
    "build_aggregate_rating",
    "build_local_business",
    "compact",
    "current_year",
    "extract_graph",
    "extract_jsonld_blocks",
    "find_dangling_refs",
    "find_nodes_by_type",
    "generate_article_page_graph",
    "generate_article_schema",
    "generate_blog_hub_graph",
    "generate_breadcrumb_schema",
    "generate_city_hub_graph",
    "generate_city_service_page_graph",
    "generate_collection_page_graph",
    "generate_course_schema",
    "generate_event_schema",
    "generate_faq_schema",
    "generate_howto_schema",
    "generate_image_gallery_graph",
    "generate_job_posting_schema",
    "generate_organization_graph",
    "generate_organization_schema",
    "generate_product_schema",
    "generate_project_page_graph",
    "generate_recipe_schema",
    "generate_service_graph_node",
    "generate_service_page_graph",
    "generate_service_schema",
    "generate_software_application_schema",
    "generate_standard_page_graph",
    "generate_video_object_schema",
    "generate_webpage_schema",
    "generate_website_schema",
    "graph_document",
    "ids",
    "present",
    "ref",
    "refs",
    "script_payload",
    "script_tag",
    "with_context",
]
