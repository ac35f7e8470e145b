import logging
from typing import Iterable, List, Sequence, Tuple, Union

from markupsafe import Markup, escape

from spacetraveling.schemas.blog import Block

logger = logging.getLogger(__name__)

SPAN_TAGS = {"strong": "strong", "em": "em"}


def as_text(blocks: Iterable[Block], separator: str = " ") -> str:
    """Flatten rich text blocks to plain text."""
    return separator.join(block.text for block in blocks)


def as_html(block: Block) -> Markup:
    """
    Render the inline spans of a block.
    Every segment between span boundaries is wrapped on its own, so overlapping
    spans always produce well-nested markup.
    """
    text = block.text
    spans = [s for s in block.spans if _is_renderable(s, len(text))]
    if not spans:
        return escape(text)

    boundaries = sorted({0, len(text)} | {s["start"] for s in spans} | {s["end"] for s in spans})
    parts = []
    for start, end in zip(boundaries, boundaries[1:]):
        segment = escape(text[start:end])
        for span in spans:
            if span["start"] <= start and end <= span["end"]:
                segment = _wrap(segment, span)
        parts.append(segment)
    return Markup("").join(parts)


def group_blocks(body: Sequence[Block]) -> List[Tuple[str, Union[Block, List[Block]]]]:
    """Group consecutive list items so they render inside a single list."""
    groups: List[Tuple[str, Union[Block, List[Block]]]] = []
    for block in body:
        if block.is_list_item:
            if groups and groups[-1][0] == "list":
                groups[-1][1].append(block)
            else:
                groups.append(("list", [block]))
        else:
            groups.append(("paragraph", block))
    return groups


def _is_renderable(span: dict, length: int) -> bool:
    start, end = span.get("start"), span.get("end")
    if not isinstance(start, int) or not isinstance(end, int):
        return False
    if not 0 <= start < end <= length:
        logger.debug(f"Ignoring out of range span {span}")
        return False
    return span.get("type") in SPAN_TAGS or span.get("type") == "hyperlink"


def _wrap(segment: Markup, span: dict) -> Markup:
    if span["type"] == "hyperlink":
        url = (span.get("data") or {}).get("url")
        if not url:
            return segment
        return Markup('<a href="{}">{}</a>').format(url, segment)
    tag = SPAN_TAGS[span["type"]]
    return Markup(f"<{tag}>") + segment + Markup(f"</{tag}>")
