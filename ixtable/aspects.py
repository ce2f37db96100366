from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from ixtable.facts import Aspect, Fact
from ixtable.grid import Cell, FactCell, Grid, transpose


ConstantAspects = Optional[Dict[str, Aspect]]


def facts_in_slice(cells: Sequence[Cell]) -> List[Fact]:
    return [c.fact for c in cells if isinstance(c, FactCell)]


def constant_aspects_for_slice(cells: Sequence[Cell]) -> ConstantAspects:
    """
    Aspects whose value is the same on every fact in a row or column.

    Returns None when the slice holds no facts. An aspect survives only if
    every fact carries it with an equal value; facts with nothing in common
    give an empty dict, which is not the same thing as None.
    """
    facts = facts_in_slice(cells)
    if not facts:
        return None

    names: Dict[str, None] = {}
    for fact in facts:
        for a in fact.aspects():
            names.setdefault(a.name, None)

    constant: Dict[str, Aspect] = {}
    for name in names:
        first = facts[0].aspect(name)
        if first is None and len(facts) > 1:
            continue
        if all(first.equal_to(f.aspect(name)) for f in facts[1:]):
            constant[name] = first
    return constant


def _reduce_slices(slices: Sequence[Sequence[Cell]]) -> Tuple[List[ConstantAspects], List[str]]:
    per_slice: List[ConstantAspects] = []
    seen: Dict[str, None] = {}
    for cells in slices:
        ca = constant_aspects_for_slice(cells)
        per_slice.append(ca)
        if ca is not None:
            for name in ca:
                seen.setdefault(name, None)
    return per_slice, list(seen)


def row_aspects(grid: Grid) -> Tuple[List[ConstantAspects], List[str]]:
    """Constant aspects per row, plus every name seen, top to bottom."""
    return _reduce_slices(grid)


def column_aspects(grid: Grid) -> Tuple[List[ConstantAspects], List[str]]:
    """Constant aspects per column, plus every name seen, left to right."""
    return _reduce_slices(transpose(grid))
