"""
Inline XBRL table export.

Turns an HTML table whose cells are tagged with XBRL facts into a spreadsheet:
- grid extraction with colspan expansion and sign/border hints
- per-row and per-column constant aspects
- header rows / label columns for the aspects that are not already implied
- openpyxl workbook with presentation signs and number formats
"""

from .facts import Aspect, Fact, FactStore, FactStoreError, Taxonomy
from .grid import AspectLabelCell, FactCell, StaticCell, extract_grid
from .aspects import column_aspects, constant_aspects_for_slice, row_aspects
from .labels import synthesize_labels, universal_column_aspects
from .export_xlsx import ExportedFile, write_table, workbook_to_bytes
from .table_export import ExportHandle, TableExport, add_handles

__all__ = [
    # Fact store
    "Aspect",
    "Fact",
    "FactStore",
    "FactStoreError",
    "Taxonomy",
    # Grid
    "AspectLabelCell",
    "FactCell",
    "StaticCell",
    "extract_grid",
    # Aspects / labels
    "column_aspects",
    "constant_aspects_for_slice",
    "row_aspects",
    "synthesize_labels",
    "universal_column_aspects",
    # Export
    "ExportedFile",
    "write_table",
    "workbook_to_bytes",
    "ExportHandle",
    "TableExport",
    "add_handles",
]
