from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

from bs4 import BeautifulSoup


# Compact keys used by the viewer's taxonomy-data payload
_CORE_ASPECT_KEYS = {"c": "concept", "p": "period", "u": "unit"}
_FALLBACK_LANGS = ("en", "en-us")


class FactStoreError(RuntimeError):
    pass


class Taxonomy:
    """Read-only label lookup: concept -> role -> lang -> text."""

    def __init__(self, concepts: Optional[Dict[str, Any]] = None, *, lang: str = "en") -> None:
        self._concepts: Dict[str, Any] = dict(concepts or {})
        self.lang = lang

    def __contains__(self, concept: object) -> bool:
        return isinstance(concept, str) and concept in self._concepts

    def label(self, concept: str, role: str = "std") -> Optional[str]:
        entry = self._concepts.get(concept)
        if not isinstance(entry, dict):
            return None
        by_role = entry.get("labels")
        labels = by_role.get(role) if isinstance(by_role, dict) else None
        if not isinstance(labels, dict):
            return None
        for lang in (self.lang, *_FALLBACK_LANGS):
            text = labels.get(lang)
            if text and isinstance(text, str):
                return text
        return None


@dataclass(frozen=True)
class Aspect:
    name: str
    value: Any
    taxonomy: Optional[Taxonomy] = field(default=None, compare=False, repr=False)

    def equal_to(self, other: Optional["Aspect"]) -> bool:
        return other is not None and self.value == other.value

    def value_label(self, role: str = "std") -> Optional[str]:
        """Taxonomy label of the value (concepts and dimension members only)."""
        if self.taxonomy is None or self.value not in self.taxonomy:
            return None
        return self.taxonomy.label(self.value, role)


class Fact:
    def __init__(
        self,
        fact_id: str,
        aspects: Dict[str, Any],
        value: Union[int, float, str, None] = None,
        *,
        taxonomy: Optional[Taxonomy] = None,
    ) -> None:
        self.id = fact_id
        self._aspects = dict(aspects)
        self._value = value
        self._taxonomy = taxonomy

    def __repr__(self) -> str:
        return f"Fact({self.id!r}, {self._aspects!r}, {self._value!r})"

    @property
    def concept(self) -> Optional[str]:
        return self._aspects.get("concept")

    def aspects(self) -> List[Aspect]:
        return [Aspect(name, v, self._taxonomy) for name, v in self._aspects.items()]

    def aspect(self, name: str) -> Optional[Aspect]:
        if name not in self._aspects:
            return None
        return Aspect(name, self._aspects[name], self._taxonomy)

    def value(self) -> Union[int, float, str, None]:
        return self._value


def _aspects_from_record(rec: Dict[str, Any]) -> Dict[str, Any]:
    if isinstance(rec.get("a"), dict):
        return {_CORE_ASPECT_KEYS.get(k, k): v for k, v in rec["a"].items()}

    aspects: Dict[str, Any] = {}
    for key, name in _CORE_ASPECT_KEYS.items():
        if key in rec:
            aspects[name] = rec[key]
    dims = rec.get("d") or {}
    if not isinstance(dims, dict):
        raise FactStoreError("fact dimensions must be an object")
    for dim, member in dims.items():
        aspects[dim] = member
    return aspects


class FactStore:
    """All facts of one document, keyed by the id used in the markup."""

    def __init__(self, facts: Optional[List[Fact]] = None, *, taxonomy: Optional[Taxonomy] = None) -> None:
        self.taxonomy = taxonomy or Taxonomy()
        self._facts: Dict[str, Fact] = {f.id: f for f in (facts or [])}

    def __len__(self) -> int:
        return len(self._facts)

    def __iter__(self) -> Iterator[Fact]:
        return iter(self._facts.values())

    def get_fact_by_id(self, fact_id: Optional[str]) -> Optional[Fact]:
        if fact_id is None:
            return None
        return self._facts.get(str(fact_id))

    @classmethod
    def from_dict(cls, data: Dict[str, Any], *, lang: str = "en") -> "FactStore":
        if not isinstance(data, dict):
            raise FactStoreError(f"taxonomy data must be an object, got {type(data).__name__}")
        concepts = data.get("concepts") or {}
        records = data.get("facts") or {}
        if not isinstance(concepts, dict):
            raise FactStoreError(f"concepts must be an object, got {type(concepts).__name__}")
        if not isinstance(records, dict):
            raise FactStoreError(f"facts must be an object, got {type(records).__name__}")
        taxonomy = Taxonomy(concepts, lang=lang)
        facts = []
        for fact_id, rec in records.items():
            if not isinstance(rec, dict):
                raise FactStoreError(f"fact {fact_id!r} is not an object")
            facts.append(Fact(str(fact_id), _aspects_from_record(rec), rec.get("v"), taxonomy=taxonomy))
        return cls(facts, taxonomy=taxonomy)

    @classmethod
    def from_json_file(cls, path: Path, *, lang: str = "en") -> "FactStore":
        p = Path(path).expanduser().resolve()
        if not p.exists():
            raise FactStoreError(f"taxonomy data file not found: {p}")
        try:
            data = json.loads(p.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise FactStoreError(f"invalid JSON in {p}: {e}") from e
        return cls.from_dict(data, lang=lang)

    @classmethod
    def from_document(cls, soup: BeautifulSoup, *, lang: str = "en") -> "FactStore":
        """Load the payload embedded as <script id="taxonomy-data">."""
        script = soup.find("script", id="taxonomy-data")
        if script is None:
            raise FactStoreError("document has no embedded taxonomy-data script")
        try:
            data = json.loads(script.string or "")
        except json.JSONDecodeError as e:
            raise FactStoreError(f"invalid embedded taxonomy-data: {e}") from e
        return cls.from_dict(data, lang=lang)
