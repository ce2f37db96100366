"""
Small helpers over parsed HTML nodes.

Works on anything shaped like a bs4 node: ``previous_sibling``, ``parent`` and
text nodes that are ``str`` instances. Nothing here needs a rendering engine;
styles are read from inline ``style`` attributes only.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional, Tuple

from bs4 import Comment, NavigableString, Tag


_WS_RE = re.compile(r"\s+")
_BORDER_STYLES = {
    "none", "hidden", "dotted", "dashed", "solid", "double",
    "groove", "ridge", "inset", "outset",
}
_DRAWN_BORDER_RE = re.compile(r"(solid|double)")


def clean_text(txt: str) -> str:
    if not txt:
        return ""
    return _WS_RE.sub(" ", txt).strip()


def _is_text_node(node: Any) -> bool:
    return isinstance(node, NavigableString) and not isinstance(node, Comment)


def preceding_text(node: Any, boundary: Any) -> str:
    """
    Text of ``node`` prefixed by every text node met walking backwards to ``boundary``.

    Steps to the previous sibling when there is one, otherwise to the parent.
    Only text nodes on that path contribute; the content of element siblings
    is not descended into.
    """
    s = node.get_text() if isinstance(node, Tag) else str(node)
    n = node
    while n is not boundary:
        if n.previous_sibling is not None:
            n = n.previous_sibling
        else:
            n = n.parent
        if n is None:
            break
        if _is_text_node(n):
            s = str(n) + s
    return s


def style_declarations(tag: Tag) -> List[Tuple[str, str]]:
    """Inline style declarations in source order."""
    out: List[Tuple[str, str]] = []
    raw = tag.get("style") or ""
    if isinstance(raw, list):
        raw = " ".join(raw)
    for decl in raw.split(";"):
        if ":" not in decl:
            continue
        prop, _, value = decl.partition(":")
        prop = prop.strip().lower()
        if prop:
            out.append((prop, value.strip().lower()))
    return out


def parse_style(tag: Tag) -> Dict[str, str]:
    return dict(style_declarations(tag))


def _style_keyword(value: str) -> Optional[str]:
    for tok in value.split():
        if tok in _BORDER_STYLES:
            return tok
    return None


def _side_of_border_style(value: str, side: str) -> Optional[str]:
    # border-style: top [right [bottom [left]]]
    toks = value.split()
    if not toks:
        return None
    if side == "top":
        return toks[0]
    return toks[2] if len(toks) >= 3 else toks[0]


def border_style(tag: Tag, side: str) -> str:
    """Resolved inline border style for ``side`` ("top" or "bottom"), "none" if unset."""
    resolved = "none"
    for prop, value in style_declarations(tag):
        if prop == "border":
            resolved = _style_keyword(value) or "none"
        elif prop == "border-style":
            resolved = _side_of_border_style(value, side) or resolved
        elif prop == f"border-{side}":
            resolved = _style_keyword(value) or "none"
        elif prop == f"border-{side}-style":
            resolved = value or resolved
    return resolved


def has_drawn_border(tag: Tag, side: str) -> bool:
    return _DRAWN_BORDER_RE.search(border_style(tag, side)) is not None


def set_style_property(tag: Tag, prop: str, value: str) -> None:
    """Set one inline declaration, leaving every other declaration as written."""
    raw = tag.get("style") or ""
    if isinstance(raw, list):
        raw = " ".join(raw)
    decl_re = re.compile(r"(^|;)(\s*)" + re.escape(prop) + r"\s*:[^;]*", re.IGNORECASE)
    if decl_re.search(raw):
        tag["style"] = decl_re.sub(lambda m: f"{m.group(1)}{m.group(2)}{prop}: {value}", raw, count=1)
        return
    raw = raw.rstrip()
    sep = "" if not raw or raw.endswith(";") else ";"
    tag["style"] = f"{raw}{sep} {prop}: {value}".strip()


def is_hidden(tag: Tag) -> bool:
    if tag.has_attr("hidden"):
        return True
    return parse_style(tag).get("display", "").startswith("none")


def is_visible(tag: Tag, *, within: Optional[Tag] = None) -> bool:
    """False when ``tag`` or an ancestor (stopping at ``within``) is display:none."""
    n: Optional[Tag] = tag
    while n is not None and n is not within:
        if isinstance(n, Tag) and is_hidden(n):
            return False
        n = n.parent
    return True
