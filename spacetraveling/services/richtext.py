"""
Prismic rich text serialization.

Text content and attribute values are escaped. The structure (block and span
types) comes from the CMS and is trusted, so the result is returned as
``Markup`` and injected into templates without further sanitizing.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from markupsafe import Markup, escape

logger = logging.getLogger(__name__)

BLOCK_TAGS = {
    "heading1": "h1",
    "heading2": "h2",
    "heading3": "h3",
    "heading4": "h4",
    "heading5": "h5",
    "heading6": "h6",
    "paragraph": "p",
    "preformatted": "pre",
}
LIST_TAGS = {"list-item": "ul", "o-list-item": "ol"}
SPAN_TAGS = {"strong": "strong", "em": "em"}


def resolve_link(link: Optional[Mapping[str, Any]]) -> Optional[str]:
    """Map a Prismic link to a site URL."""
    if not link:
        return None
    if link.get("link_type") == "Document":
        if link.get("type") == "post" and link.get("uid"):
            return f"/post/{link['uid']}"
        return "/"
    return link.get("url")


def as_html(blocks: Iterable[Mapping[str, Any]]) -> Markup:
    parts: List[str] = []
    open_list: Optional[str] = None

    for block in blocks:
        block_type = block.get("type", "")
        list_tag = LIST_TAGS.get(block_type)

        if open_list and open_list != list_tag:
            parts.append(f"</{open_list}>")
            open_list = None
        if list_tag and not open_list:
            parts.append(f"<{list_tag}>")
            open_list = list_tag

        if list_tag:
            parts.append(f"<li>{serialize_spans(block)}</li>")
        elif block_type in BLOCK_TAGS:
            tag = BLOCK_TAGS[block_type]
            parts.append(f"<{tag}>{serialize_spans(block)}</{tag}>")
        elif block_type == "image":
            parts.append(_serialize_image(block))
        elif block_type == "embed":
            parts.append(_serialize_embed(block))
        else:
            logger.warning(f"Skipping unsupported rich text block {block_type!r}")

    if open_list:
        parts.append(f"</{open_list}>")
    return Markup("".join(parts))


def serialize_spans(block: Mapping[str, Any]) -> str:
    """
    Render block text with its inline spans.
    Spans may nest or overlap; overlapping ones are closed and reopened.
    """
    text = block.get("text", "")
    spans = [
        span
        for span in block.get("spans") or []
        if span.get("end", 0) > span.get("start", 0)
    ]
    starting: Dict[int, List[Mapping[str, Any]]] = {}
    for span in spans:
        starting.setdefault(span["start"], []).append(span)

    out: List[str] = []
    stack: List[Mapping[str, Any]] = []
    for position in range(len(text) + 1):
        if any(min(span["end"], len(text)) == position for span in stack):
            reopen = []
            while any(min(span["end"], len(text)) == position for span in stack):
                span = stack.pop()
                out.append(_close_tag(span))
                if min(span["end"], len(text)) != position:
                    reopen.append(span)
            for span in reversed(reopen):
                out.append(_open_tag(span))
                stack.append(span)

        if position == len(text):
            break

        for span in sorted(starting.get(position, []), key=lambda s: -s["end"]):
            out.append(_open_tag(span))
            stack.append(span)

        char = text[position]
        out.append("<br />" if char == "\n" else str(escape(char)))

    return "".join(out)


def _open_tag(span: Mapping[str, Any]) -> str:
    span_type = span.get("type")
    if span_type in SPAN_TAGS:
        return f"<{SPAN_TAGS[span_type]}>"
    if span_type == "hyperlink":
        data = span.get("data") or {}
        href = escape(resolve_link(data) or "#")
        target = data.get("target")
        if target:
            return f'<a href="{href}" target="{escape(target)}" rel="noopener">'
        return f'<a href="{href}">'
    if span_type == "label":
        label = (span.get("data") or {}).get("label", "")
        return f'<span class="{escape(label)}">'
    return "<span>"


def _close_tag(span: Mapping[str, Any]) -> str:
    span_type = span.get("type")
    if span_type in SPAN_TAGS:
        return f"</{SPAN_TAGS[span_type]}>"
    if span_type == "hyperlink":
        return "</a>"
    return "</span>"


def _serialize_image(block: Mapping[str, Any]) -> str:
    img = f'<img src="{escape(block.get("url", ""))}" alt="{escape(block.get("alt") or "")}" />'
    href = resolve_link(block.get("linkTo"))
    if href:
        img = f'<a href="{escape(href)}">{img}</a>'
    return f'<p class="block-img">{img}</p>'


def _serialize_embed(block: Mapping[str, Any]) -> str:
    oembed = block.get("oembed") or {}
    return (
        f'<div data-oembed="{escape(oembed.get("embed_url", ""))}"'
        f' data-oembed-type="{escape(oembed.get("type", ""))}"'
        f' data-oembed-provider="{escape(oembed.get("provider_name", ""))}">'
        f'{oembed.get("html") or ""}</div>'
    )
