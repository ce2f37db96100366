from __future__ import annotations

from bs4 import BeautifulSoup

from ixtable.dom import (
    border_style,
    clean_text,
    has_drawn_border,
    is_visible,
    parse_style,
    preceding_text,
    set_style_property,
)


def _soup(html):
    return BeautifulSoup(html, "lxml")


def test_preceding_text_stops_at_boundary():
    soup = _soup("<table><tr><td>ignored</td><td>a <i>x</i> b<span>(<em id='v'>5</em></span></td></tr></table>")
    td = soup.find_all("td")[1]
    em = soup.find(id="v")
    # "a " sits before an element sibling whose text is skipped
    assert preceding_text(em, td) == "a  b(5"


def test_preceding_text_without_boundary_reaches_root():
    soup = _soup("<p>x<b id='v'>1</b></p>")
    assert preceding_text(soup.find(id="v"), None).endswith("x1")


def test_parse_style():
    soup = _soup('<td style="Border-Top: 1px SOLID red; color:blue;;bad">x</td>')
    assert parse_style(soup.td) == {"border-top": "1px solid red", "color": "blue"}


def test_border_style_resolution():
    soup = _soup('<td style="border-style: dashed double; border-top: none">x</td>')
    assert border_style(soup.td, "top") == "none"
    assert border_style(soup.td, "bottom") == "dashed"
    assert not has_drawn_border(soup.td, "bottom")


def test_border_shorthand_without_style_resets():
    soup = _soup('<td style="border-bottom-style: solid; border: 0">x</td>')
    assert border_style(soup.td, "bottom") == "none"


def test_visibility():
    soup = _soup('<table><tr hidden><td id="a">x</td></tr><tr><td id="b" style="display:none">y</td><td id="c">z</td></tr></table>')
    table = soup.table
    assert not is_visible(soup.find(id="a"), within=table)
    assert not is_visible(soup.find(id="b"), within=table)
    assert is_visible(soup.find(id="c"), within=table)


def test_clean_text():
    assert clean_text("  a\n\t b ") == "a b"
    assert clean_text("") == ""


def test_set_style_property_appends_and_keeps_raw_text():
    soup = _soup('<table style="background: url(data:image/png;base64,AbC=); font-family: Arial;">x</table>')
    set_style_property(soup.table, "position", "relative")
    assert soup.table["style"] == "background: url(data:image/png;base64,AbC=); font-family: Arial; position: relative"

    bare = _soup("<table>x</table>")
    set_style_property(bare.table, "position", "relative")
    assert bare.table["style"] == "position: relative"


def test_set_style_property_ignores_longer_property_names():
    soup = _soup('<table style="background-position: top">x</table>')
    set_style_property(soup.table, "position", "relative")
    assert soup.table["style"] == "background-position: top; position: relative"
