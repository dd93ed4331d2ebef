import logging
from typing import Iterable, List, Optional, Protocol

from markupsafe import Markup, escape

logger = logging.getLogger(__name__)

BLOCK_TAGS = {
    "paragraph": "p",
    "heading1": "h1",
    "heading2": "h2",
    "heading3": "h3",
    "heading4": "h4",
    "heading5": "h5",
    "heading6": "h6",
    "preformatted": "pre",
}
LIST_TAGS = {"list-item": "ul", "o-list-item": "ol"}
SPAN_TAGS = {"strong": "strong", "em": "em"}
SAFE_SCHEMES = ("http", "https", "mailto")


class RichTextRenderer(Protocol):
    def as_html(self, blocks: Iterable[dict]) -> str: ...

    def as_text(self, blocks: Iterable[dict]) -> str: ...


def resolve_link(data: Optional[dict]) -> Optional[str]:
    """Turn a Prismic link object into an href."""
    if not data:
        return None
    if data.get("link_type") == "Document":
        uid = data.get("uid")
        return f"/post/{uid}" if uid else None
    url = data.get("url") or ""
    if url.startswith("/") or url.split(":", 1)[0].lower() in SAFE_SCHEMES:
        return url
    return None


class PrismicHtmlRenderer:
    """Render Prismic structured text as escaped HTML."""

    def as_html(self, blocks: Iterable[dict]) -> str:
        parts: List[str] = []
        open_list: Optional[str] = None

        for block in blocks or []:
            block_type = block.get("type", "paragraph")
            list_tag = LIST_TAGS.get(block_type)

            if open_list and list_tag != open_list:
                parts.append(f"</{open_list}>")
                open_list = None
            if list_tag and open_list is None:
                parts.append(f"<{list_tag}>")
                open_list = list_tag

            if list_tag:
                parts.append(f"<li>{self._render_text(block)}</li>")
            else:
                parts.append(self._render_block(block_type, block))

        if open_list:
            parts.append(f"</{open_list}>")
        return Markup("".join(parts))

    def as_text(self, blocks: Iterable[dict]) -> str:
        return " ".join(
            block.get("text", "") for block in blocks or [] if block.get("text")
        )

    def _render_block(self, block_type: str, block: dict) -> str:
        if block_type == "image":
            src = escape(block.get("url", ""))
            alt = escape(block.get("alt") or "")
            return f'<p class="block-img"><img src="{src}" alt="{alt}"></p>'
        if block_type == "embed":
            oembed = block.get("oembed") or {}
            url = escape(oembed.get("embed_url", ""))
            title = escape(oembed.get("title") or url)
            return f'<div data-oembed="{url}"><a href="{url}">{title}</a></div>'

        tag = BLOCK_TAGS.get(block_type)
        if tag is None:
            logger.debug(f"Rendering unknown block type {block_type} as paragraph")
            tag = "p"
        return f"<{tag}>{self._render_text(block)}</{tag}>"

    def _render_text(self, block: dict) -> str:
        text = block.get("text") or ""
        spans = [
            s
            for s in block.get("spans") or []
            if 0 <= s.get("start", 0) < s.get("end", 0) <= len(text)
        ]
        if not spans:
            return _with_line_breaks(text)

        boundaries = sorted(
            {0, len(text)} | {s["start"] for s in spans} | {s["end"] for s in spans}
        )
        out = []
        for start, end in zip(boundaries, boundaries[1:]):
            segment = _with_line_breaks(text[start:end])
            active = [s for s in spans if s["start"] <= start and s["end"] >= end]
            for span in reversed(active):
                segment = _wrap_span(span, segment)
            out.append(segment)
        return "".join(out)


def _with_line_breaks(text: str) -> str:
    return "<br />".join(str(escape(line)) for line in text.split("\n"))


def _wrap_span(span: dict, inner: str) -> str:
    span_type = span.get("type")
    if span_type in SPAN_TAGS:
        tag = SPAN_TAGS[span_type]
        return f"<{tag}>{inner}</{tag}>"
    if span_type == "hyperlink":
        href = resolve_link(span.get("data"))
        if not href:
            return inner
        target = (span.get("data") or {}).get("target")
        target_attr = f' target="{escape(target)}" rel="noopener"' if target else ""
        return f'<a href="{escape(href)}"{target_attr}>{inner}</a>'
    if span_type == "label":
        label = escape((span.get("data") or {}).get("label", ""))
        return f'<span class="{label}">{inner}</span>'
    return inner
