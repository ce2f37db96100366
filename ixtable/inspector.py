from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Tuple

from bs4 import BeautifulSoup, Tag

from ixtable.facts import FactStore
from ixtable.grid import IX_FACT_TAG_RE

_CORE_ASPECTS = ("concept", "period", "unit")
_IX_HIDDEN_TAG_RE = re.compile(r"^(ix:)?hidden$", re.IGNORECASE)


class FactNotFoundError(LookupError):
    pass


@dataclass
class FactSummary:
    """What the inspector panel shows for a selected fact."""
    fact_id: str
    concept: str
    std_label: str
    documentation: str
    value: Any
    period: str = ""
    unit: str = ""
    dimensions: List[Tuple[str, str]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def describe_fact(store: FactStore, fact_id: str) -> FactSummary:
    fact = store.get_fact_by_id(fact_id)
    if fact is None:
        raise FactNotFoundError(f"no fact with id {fact_id!r}")

    taxonomy = store.taxonomy
    concept = fact.concept or ""
    dims = []
    for a in fact.aspects():
        if a.name in _CORE_ASPECTS:
            continue
        member = "" if a.value is None else str(a.value)
        dims.append((taxonomy.label(a.name) or a.name, a.value_label() or member))

    period = fact.aspect("period")
    unit = fact.aspect("unit")
    return FactSummary(
        fact_id=fact.id,
        concept=concept,
        std_label=taxonomy.label(concept) or concept,
        documentation=taxonomy.label(concept, "doc") or "",
        value=fact.value(),
        period="" if period is None else str(period.value),
        unit="" if unit is None else str(unit.value),
        dimensions=dims,
    )


@dataclass
class HiddenFact:
    """A fact tagged inside ix:hidden, so it never shows in the rendered page."""
    fact_id: str
    concept: str
    value: Any


def _is_hidden_section(tag: Tag) -> bool:
    return bool(_IX_HIDDEN_TAG_RE.match(tag.name or ""))


def hidden_facts(soup: BeautifulSoup, store: FactStore) -> List[HiddenFact]:
    """Facts inside every ix:hidden section, in document order."""
    out: List[HiddenFact] = []
    for section in soup.find_all(_is_hidden_section):
        for el in section.find_all(IX_FACT_TAG_RE):
            fact_id = el.get("id") or ""
            fact = store.get_fact_by_id(fact_id)
            if fact is not None:
                out.append(HiddenFact(fact_id, fact.concept or el.get("name") or "", fact.value()))
            else:
                out.append(HiddenFact(fact_id, el.get("name") or "", el.get_text()))
    return out
