"""
Presentation wrapper — turn finished nodes into ``application/ld+json`` script payloads,
and read such payloads back out of rendered markup.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

SCHEMA_CONTEXT = "https://schema.org"
SCRIPT_TYPE = "application/ld+json"


def with_context(node: dict) -> dict:
    """Return *node* as a standalone document with ``@context`` first."""
    return {"@context": SCHEMA_CONTEXT, **{k: v for k, v in node.items() if k != "@context"}}


def graph_document(nodes: list[dict]) -> dict:
    return {"@context": SCHEMA_CONTEXT, "@graph": list(nodes)}


def script_payload(data: Any) -> str:
    """Compact JSON with every ``<`` escaped so the payload cannot close its script tag."""
    text = json.dumps(data, ensure_ascii=False, separators=(",", ":"))
    return text.replace("<", "\\u003c")


def script_tag(data: Any) -> str:
    return f'<script type="{SCRIPT_TYPE}">{script_payload(data)}</script>'


def extract_jsonld_blocks(html: str) -> list[dict | list]:
    """Parse every JSON-LD script in *html*; blocks that fail to parse are skipped."""
    soup = BeautifulSoup(html, "html.parser")
    blocks: list[dict | list] = []
    for i, script in enumerate(soup.select(f'script[type="{SCRIPT_TYPE}"]')):
        raw = script.get_text(strip=True)
        if not raw:
            continue
        try:
            obj = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Skipping JSON-LD block %d: %s", i, e)
            continue
        if isinstance(obj, (dict, list)):
            blocks.append(obj)
        else:
            logger.warning("Skipping JSON-LD block %d: unexpected root type %s", i, type(obj).__name__)
    return blocks
