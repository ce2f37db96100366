"""
Grid extraction: HTML table -> rectangular grid of typed cells.

Handles the quirks the export needs:
- colspan -> leading empty cells, so fact columns line up across rows
- cells bound to a fact (viewer wrapper or raw ix:nonFraction / ix:nonNumeric)
- presentation sign hinted by a "(" or "-" just before the value
- solid/double top and bottom borders (totals lines)
- short rows padded on the right
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Union

from bs4 import Tag

from ixtable.dom import clean_text, has_drawn_border, is_visible, preceding_text
from ixtable.facts import Fact, FactStore


logger = logging.getLogger(__name__)

IX_FACT_TAG_RE = re.compile(r"^(ix:)?(nonfraction|nonnumeric)$", re.IGNORECASE)
_NEGATIVE_HINT_RE = re.compile(r"[(\-]\s*\d")
# browsers clamp colspan to this
MAX_COLSPAN = 1000


@dataclass(frozen=True)
class StaticCell:
    value: str = ""


@dataclass(frozen=True)
class FactCell:
    fact: Fact
    negative: bool = False
    top_border: bool = False
    bottom_border: bool = False


@dataclass(frozen=True)
class AspectLabelCell:
    value: str = ""


Cell = Union[StaticCell, FactCell, AspectLabelCell]
Grid = List[List[Cell]]


def _colspan(cell: Tag) -> int:
    raw = cell.get("colspan")
    try:
        n = int(str(raw).strip())
    except (TypeError, ValueError):
        return 1
    if n < 1:
        return 1
    return min(n, MAX_COLSPAN)


def _is_fact_element(tag: Tag) -> bool:
    if "ixbrl-element" in (tag.get("class") or []):
        return True
    return bool(IX_FACT_TAG_RE.match(tag.name or ""))


def _bound_element(cell: Tag) -> Optional[Tag]:
    """First fact-bearing element in the cell, the cell itself included."""
    if _is_fact_element(cell):
        return cell
    return cell.find(_is_fact_element)


def _bound_fact_id(el: Tag) -> Optional[str]:
    if "ixbrl-element" in (el.get("class") or []):
        return el.get("data-ivid") or el.get("id")
    return el.get("id")


def is_negative_hint(text: str) -> bool:
    return _NEGATIVE_HINT_RE.search(text or "") is not None


def _fact_cell(cell: Tag, bound: Tag, fact: Fact) -> FactCell:
    return FactCell(
        fact=fact,
        negative=is_negative_hint(preceding_text(bound, cell)),
        top_border=has_drawn_border(cell, "top"),
        bottom_border=has_drawn_border(cell, "bottom"),
    )


def _visible_cells(tr: Tag, table: Tag) -> List[Tag]:
    return [c for c in tr.find_all(["td", "th"]) if is_visible(c, within=table)]


def row_cells(tr: Tag, table: Tag, store: FactStore) -> List[Cell]:
    row: List[Cell] = []
    for cell in _visible_cells(tr, table):
        for _ in range(_colspan(cell) - 1):
            row.append(StaticCell(""))

        bound = _bound_element(cell)
        fact = None
        if bound is not None:
            fact_id = _bound_fact_id(bound)
            fact = store.get_fact_by_id(fact_id)
            if fact is None:
                logger.warning("fact id %r not found in store; exporting as text", fact_id)

        if fact is not None:
            row.append(_fact_cell(cell, bound, fact))
        else:
            row.append(StaticCell(clean_text(cell.get_text())))
    return row


def pad_rows(rows: Grid) -> Grid:
    width = max((len(r) for r in rows), default=0)
    for r in rows:
        while len(r) < width:
            r.append(StaticCell(""))
    return rows


def extract_grid(table: Tag, store: FactStore) -> Grid:
    """Rectangular grid of cells for ``table``, in document order."""
    rows = [row_cells(tr, table, store) for tr in table.find_all("tr")]
    pad_rows(rows)
    logger.debug(
        "extracted grid %dx%d (%d fact cells)",
        len(rows),
        len(rows[0]) if rows else 0,
        sum(isinstance(c, FactCell) for r in rows for c in r),
    )
    return rows


def table_has_facts(table: Tag) -> bool:
    return table.find(_is_fact_element) is not None


def transpose(grid: Grid) -> Grid:
    width = max((len(r) for r in grid), default=0)
    return [[r[i] for r in grid if i < len(r)] for i in range(width)]
