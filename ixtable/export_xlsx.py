from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from openpyxl import Workbook
from openpyxl.styles import Border, Font, Side
from openpyxl.utils import get_column_letter

from ixtable.grid import AspectLabelCell, FactCell, Grid


logger = logging.getLogger(__name__)

SHEET_NAME = "Table"
EXPORT_FILENAME = "table.xlsx"
EXPORT_CONTENT_TYPE = "application/octet-stream"
FACT_NUMBER_FORMAT = "#,##0"
FACT_COLUMN_WIDTH = 18
STATIC_FONT_COLOR = "FF707070"
BORDER_COLOR = "FF000000"


@dataclass(frozen=True)
class ExportedFile:
    filename: str
    content_type: str
    data: bytes


def _as_number(value: object) -> Optional[Union[int, float]]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    try:
        num = float(str(value).strip())
    except (TypeError, ValueError):
        return None
    if num != num or num in (float("inf"), float("-inf")):
        return None
    return int(num) if num.is_integer() else num


def presentation_value(cell: FactCell) -> Optional[Union[int, float]]:
    """Stored magnitude with the sign taken from the negative hint only."""
    num = _as_number(cell.fact.value())
    if num is None:
        return None
    return -abs(num) if cell.negative else abs(num)


def _fact_border(cell: FactCell) -> Border:
    side = Side(style="medium", color=BORDER_COLOR)
    return Border(
        top=side if cell.top_border else Side(),
        bottom=side if cell.bottom_border else Side(),
    )


def write_table(rows: Grid) -> Workbook:
    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_NAME

    for i, row in enumerate(rows, start=1):
        for j, cell in enumerate(row, start=1):
            cc = ws.cell(row=i, column=j)
            if isinstance(cell, FactCell):
                num = presentation_value(cell)
                if num is None:
                    raw = cell.fact.value()
                    cc.value = "" if raw is None else str(raw)
                else:
                    cc.value = num
                    cc.number_format = FACT_NUMBER_FORMAT
                ws.column_dimensions[get_column_letter(j)].width = FACT_COLUMN_WIDTH
                cc.border = _fact_border(cell)
            elif isinstance(cell, AspectLabelCell):
                cc.value = cell.value
            else:
                cc.value = cell.value
                cc.font = Font(color=STATIC_FONT_COLOR)
    return wb


def workbook_to_bytes(wb: Workbook) -> bytes:
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


def export_rows(rows: Grid) -> ExportedFile:
    data = workbook_to_bytes(write_table(rows))
    logger.debug("built %s (%d bytes)", EXPORT_FILENAME, len(data))
    return ExportedFile(filename=EXPORT_FILENAME, content_type=EXPORT_CONTENT_TYPE, data=data)


def save_exported_file(exported: ExportedFile, out_dir: Path) -> Path:
    """Default sink: write ``exported`` into ``out_dir``, replacing any earlier export."""
    out_dir = Path(out_dir).expanduser().resolve()
    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / exported.filename
    out_path.write_bytes(exported.data)
    return out_path
