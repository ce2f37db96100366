"""
Table export: one handle per table that carries facts.

Each export starts from the table markup and builds its own grid, aspect sets
and workbook; nothing is shared between exports and the fact store is only
read.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from bs4 import BeautifulSoup, Tag

from ixtable.aspects import column_aspects, row_aspects
from ixtable.dom import set_style_property
from ixtable.export_xlsx import ExportedFile, export_rows
from ixtable.facts import FactStore
from ixtable.grid import FactCell, Grid, extract_grid, table_has_facts
from ixtable.labels import row_label_names, synthesize_labels, universal_column_aspects


logger = logging.getLogger(__name__)

HANDLE_CLASS = "ixbrl-table-handle"
HANDLE_TEXT = "Export table"

Sink = Callable[[ExportedFile], Any]


class TableNotFoundError(LookupError):
    pass


def table_id_for_index(idx: int) -> str:
    return f"t{idx:04d}"


def _table_index_from_id(table_id: str) -> int:
    """Convert table ID (e.g., 't0015') to integer index."""
    tid = str(table_id).strip()
    digits = tid[1:] if tid.lower().startswith("t") else tid
    if not digits.isdigit():
        raise TableNotFoundError(f"Invalid table_id: {table_id}")
    return int(digits)


def find_table(soup: BeautifulSoup, table_id: str) -> Tag:
    tables = soup.find_all("table")
    idx = _table_index_from_id(table_id)
    if idx >= len(tables):
        raise TableNotFoundError(f"table_id {table_id} out of range: {idx} (n_tables={len(tables)})")
    return tables[idx]


@dataclass
class ExportResult:
    rows: Grid
    column_aspect_names: List[str] = field(default_factory=list)
    row_aspect_names: List[str] = field(default_factory=list)
    universal_column_aspect_names: List[str] = field(default_factory=list)

    @property
    def n_header_rows(self) -> int:
        return len(self.column_aspect_names)

    @property
    def n_label_columns(self) -> int:
        return len(self.row_aspect_names)


class TableExport:
    def __init__(self, table: Tag, store: FactStore) -> None:
        self._table = table
        self._store = store

    def raw_table(self) -> Grid:
        return extract_grid(self._table, self._store)

    def build_rows(self) -> ExportResult:
        data = self.raw_table()
        row_sets, row_names = row_aspects(data)
        column_sets, column_names = column_aspects(data)

        universal = universal_column_aspects(column_names, column_sets)
        logger.debug("column aspects %s (universal %s), row aspects %s", column_names, universal, row_names)

        rows = synthesize_labels(data, row_sets, row_names, column_sets, column_names)
        return ExportResult(
            rows=rows,
            column_aspect_names=list(column_names),
            row_aspect_names=row_label_names(row_names, column_names),
            universal_column_aspect_names=universal,
        )

    def export_table(self, sink: Optional[Sink] = None) -> ExportedFile:
        """Build the workbook and hand it to ``sink``; sink errors are not caught."""
        exported = export_rows(self.build_rows().rows)
        if sink is not None:
            sink(exported)
        return exported


@dataclass
class ExportHandle:
    table_id: str
    exporter: TableExport
    sink: Optional[Sink] = None

    def click(self) -> ExportedFile:
        return self.exporter.export_table(self.sink)


def _attach_handle(soup: BeautifulSoup, table: Tag) -> None:
    set_style_property(table, "position", "relative")

    handle = soup.new_tag("div", attrs={"class": HANDLE_CLASS})
    label = soup.new_tag("span")
    label.string = HANDLE_TEXT
    handle.append(label)
    table.append(handle)


def add_handles(soup: BeautifulSoup, store: FactStore, *, sink: Optional[Sink] = None) -> List[ExportHandle]:
    """Attach an export control to every table holding at least one fact."""
    handles: List[ExportHandle] = []
    for idx, table in enumerate(soup.find_all("table")):
        if not table_has_facts(table):
            continue
        if table.find("div", class_=HANDLE_CLASS, recursive=False) is None:
            _attach_handle(soup, table)
        handles.append(ExportHandle(table_id_for_index(idx), TableExport(table, store), sink))
    logger.debug("attached %d export handles", len(handles))
    return handles


@dataclass
class TableSummary:
    table_id: str
    n_rows: int
    n_cols: int
    n_facts: int


def summarize_table(handle: ExportHandle) -> TableSummary:
    data = handle.exporter.raw_table()
    return TableSummary(
        table_id=handle.table_id,
        n_rows=len(data),
        n_cols=len(data[0]) if data else 0,
        n_facts=sum(isinstance(c, FactCell) for r in data for c in r),
    )
