"""
FastAPI application — schema graph API.

Builds page graphs from JSON option records and returns the JSON-LD document
together with the ready-to-embed script tag.
"""

from __future__ import annotations

import logging
import os
from collections import Counter
from typing import Any, Callable

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .jsonld import graphs, references, render
from .jsonld.models import (
    ArticlePageOptions,
    BlogHubOptions,
    CityHubOptions,
    CityServicePageOptions,
    CollectionPageOptions,
    ImageGalleryOptions,
    OrganizationGraphOptions,
    ProjectPageOptions,
    ServicePageOptions,
    StandardPageOptions,
)

load_dotenv()
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(title="Schema Graph", version="1.0.0")

# ---------------------------------------------------------------------------
# Health check (before auth middleware so it's never blocked)
# ---------------------------------------------------------------------------

@app.get("/health")
async def health():
    return {"status": "ok"}

# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------
cors_origins = os.environ.get("CORS_ORIGINS", "http://localhost:5173").split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in cors_origins],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Auth middleware (optional)
# ---------------------------------------------------------------------------
API_SECRET = os.environ.get("API_SECRET_KEY", "")


@app.middleware("http")
async def auth_middleware(request: Request, call_next):
    if API_SECRET and request.url.path.startswith("/api/"):
        token = request.headers.get("Authorization", "").removeprefix("Bearer ").strip()
        if token != API_SECRET:
            return JSONResponse(status_code=401, content={"detail": "Unauthorized"})
    return await call_next(request)


# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------

class ValidateRequest(BaseModel):
    jsonld: dict | list | None = None
    html: str | None = None


def _graph_response(nodes: list[dict]) -> dict:
    document = render.graph_document(nodes)
    dangling = references.find_dangling_refs(document)
    logger.info("Built graph with %d nodes (%d external refs)", len(nodes), len(dangling))
    return {
        "json_ld": document,
        "script": render.script_tag(document),
        "dangling_refs": dangling,
    }


def _build_graph(builder: Callable[[Any], Any], req: BaseModel) -> dict:
    """Run a graph builder and answer 400 when its nodes collide on @id."""
    try:
        built = builder(req)
    except ValueError as e:
        logger.warning("Rejected %s request: %s", type(req).__name__, e)
        raise HTTPException(400, str(e))
    nodes = built if isinstance(built, list) else built.items
    return _graph_response(nodes)


# ---------------------------------------------------------------------------
# Graph Endpoints
# ---------------------------------------------------------------------------

@app.post("/api/graphs/standard")
async def standard_graph(req: StandardPageOptions):
    return _build_graph(graphs.generate_standard_page_graph, req)


@app.post("/api/graphs/service")
async def service_graph(req: ServicePageOptions):
    return _build_graph(graphs.generate_service_page_graph, req)


@app.post("/api/graphs/collection")
async def collection_graph(req: CollectionPageOptions):
    return _build_graph(graphs.generate_collection_page_graph, req)


@app.post("/api/graphs/project")
async def project_graph(req: ProjectPageOptions):
    return _build_graph(graphs.generate_project_page_graph, req)


@app.post("/api/graphs/blog")
async def blog_graph(req: BlogHubOptions):
    return _build_graph(graphs.generate_blog_hub_graph, req)


@app.post("/api/graphs/article")
async def article_graph(req: ArticlePageOptions):
    return _build_graph(graphs.generate_article_page_graph, req)


@app.post("/api/graphs/city-hub")
async def city_hub_graph(req: CityHubOptions):
    return _build_graph(graphs.generate_city_hub_graph, req)


@app.post("/api/graphs/city-service")
async def city_service_graph(req: CityServicePageOptions):
    return _build_graph(graphs.generate_city_service_page_graph, req)


@app.post("/api/graphs/organization")
async def organization_graph(req: OrganizationGraphOptions):
    return _build_graph(graphs.generate_organization_graph, req)


@app.post("/api/graphs/gallery")
async def gallery_graph(req: ImageGalleryOptions):
    gallery = graphs.generate_image_gallery_graph(req)
    if gallery is None:
        return {"json_ld": None, "script": "", "dangling_refs": []}
    document = render.with_context(gallery)
    return {
        "json_ld": document,
        "script": render.script_tag(document),
        "dangling_refs": references.find_dangling_refs(document),
    }


# ---------------------------------------------------------------------------
# Schema inspection
# ---------------------------------------------------------------------------

@app.post("/api/schema/validate")
async def validate_schema(req: ValidateRequest):
    if req.html is not None:
        blocks = render.extract_jsonld_blocks(req.html)
    elif req.jsonld is not None:
        blocks = [req.jsonld]
    else:
        raise HTTPException(400, "Provide 'jsonld' or 'html'.")

    nodes = [node for block in blocks for node in references.extract_graph(block)]
    types = Counter(t for node in nodes for t in references.node_types(node))
    return {
        "blocks_count": len(blocks),
        "node_count": len(nodes),
        "types": dict(types.most_common(50)),
        "dangling_refs": references.find_dangling_refs(nodes),
    }
