"""
Header synthesis for exported tables.

Aspects that are constant down a column become header rows above the table;
aspects constant along a row become label columns to its left. Column
aspects win: a name used for any column is never repeated as a row label.
Row aspects never suppress column headers.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ixtable.aspects import ConstantAspects
from ixtable.facts import Aspect
from ixtable.grid import AspectLabelCell, Cell, Grid, StaticCell


logger = logging.getLogger(__name__)

LABEL_ROLE = "std"


def aspect_label(aspect: Optional[Aspect], role: str = LABEL_ROLE) -> str:
    """Label for ``role``, else the raw value, else ""."""
    if aspect is None:
        return ""
    label = aspect.value_label(role)
    if label:
        return label
    if aspect.value is None:
        return ""
    return str(aspect.value)


def universal_column_aspects(names: Sequence[str], column_sets: Sequence[ConstantAspects]) -> List[str]:
    """Names present on every column that has facts (fact-free columns are exempt)."""
    return [
        name for name in names
        if all(ca.get(name) is not None for ca in column_sets if ca is not None)
    ]


def row_label_names(row_names: Sequence[str], column_names: Sequence[str]) -> List[str]:
    """Row aspect names left once every column aspect name is removed."""
    column_name_set = set(column_names)
    return [n for n in row_names if n not in column_name_set]


def _label_cell(ca: ConstantAspects, name: str) -> AspectLabelCell:
    return AspectLabelCell(aspect_label((ca or {}).get(name)))


def synthesize_labels(
    grid: Grid,
    row_sets: Sequence[ConstantAspects],
    row_names: Sequence[str],
    column_sets: Sequence[ConstantAspects],
    column_names: Sequence[str],
) -> Grid:
    """New grid: column-aspect header rows, then each row behind its row-aspect labels."""
    label_names = row_label_names(row_names, column_names)

    header_rows: Grid = []
    for name in column_names:
        new_row: List[Cell] = [StaticCell("") for _ in label_names]
        new_row.extend(_label_cell(ca, name) for ca in column_sets)
        # each header goes on top of the ones before it
        header_rows.insert(0, new_row)

    body: Grid = []
    for k, row in enumerate(grid):
        ra = row_sets[k] if k < len(row_sets) else None
        body.append([_label_cell(ra, name) for name in label_names] + list(row))

    logger.debug(
        "synthesized %d header rows %s and %d label columns %s",
        len(header_rows),
        list(column_names),
        len(label_names),
        label_names,
    )
    return header_rows + body

