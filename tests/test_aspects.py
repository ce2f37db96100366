from __future__ import annotations

from conftest import make_fact

from ixtable.aspects import column_aspects, constant_aspects_for_slice, facts_in_slice, row_aspects
from ixtable.grid import AspectLabelCell, FactCell, StaticCell


def _values(ca):
    return {name: a.value for name, a in ca.items()}


def test_shared_aspect_kept_differing_aspect_dropped():
    cells = [
        FactCell(make_fact("a", 1, A="v", B="x")),
        StaticCell("label"),
        FactCell(make_fact("b", 2, A="v", B="y")),
    ]
    assert _values(constant_aspects_for_slice(cells)) == {"A": "v"}


def test_slice_without_facts_is_none():
    cells = [StaticCell("x"), AspectLabelCell("y"), StaticCell("")]
    assert constant_aspects_for_slice(cells) is None
    assert constant_aspects_for_slice([]) is None


def test_disjoint_facts_give_empty_mapping_not_none():
    cells = [FactCell(make_fact("a", 1, A="v")), FactCell(make_fact("b", 2, B="w"))]
    result = constant_aspects_for_slice(cells)
    assert result is not None
    assert result == {}


def test_single_fact_keeps_every_aspect():
    cells = [StaticCell("Revenue"), FactCell(make_fact("a", 1, period="2023", unit="USD"))]
    assert _values(constant_aspects_for_slice(cells)) == {"period": "2023", "unit": "USD"}


def test_absent_aspect_disqualifies_in_either_position():
    first_missing = [FactCell(make_fact("a", 1, A="v")), FactCell(make_fact("b", 2, A="v", B="w"))]
    later_missing = [FactCell(make_fact("a", 1, A="v", B="w")), FactCell(make_fact("b", 2, A="v"))]
    assert _values(constant_aspects_for_slice(first_missing)) == {"A": "v"}
    assert _values(constant_aspects_for_slice(later_missing)) == {"A": "v"}


def test_empty_value_is_a_present_value():
    cells = [FactCell(make_fact("a", 1, A="")), FactCell(make_fact("b", 2, A=""))]
    assert _values(constant_aspects_for_slice(cells)) == {"A": ""}


def test_names_keep_first_seen_order():
    cells = [
        FactCell(make_fact("a", 1, unit="USD", period="2023", concept="x")),
        FactCell(make_fact("b", 2, concept="y", period="2023", unit="USD")),
    ]
    assert list(constant_aspects_for_slice(cells)) == ["unit", "period"]


def test_facts_in_slice():
    fa, fb = make_fact("a", 1), make_fact("b", 2)
    cells = [FactCell(fa), StaticCell(""), AspectLabelCell(""), FactCell(fb)]
    assert facts_in_slice(cells) == [fa, fb]


def test_row_and_column_aspects():
    grid = [
        [StaticCell("Revenue"), FactCell(make_fact("a", 1, c="rev", p="2023")), FactCell(make_fact("b", 2, c="rev", p="2022"))],
        [StaticCell("Cost"), FactCell(make_fact("c", 3, c="cost", p="2023")), FactCell(make_fact("d", 4, c="cost", p="2022"))],
        [StaticCell("note"), StaticCell(""), StaticCell("")],
    ]
    rows, row_names = row_aspects(grid)
    assert [None if r is None else _values(r) for r in rows] == [{"c": "rev"}, {"c": "cost"}, None]
    assert row_names == ["c"]

    cols, col_names = column_aspects(grid)
    assert [None if c is None else _values(c) for c in cols] == [None, {"p": "2023"}, {"p": "2022"}]
    assert col_names == ["p"]
